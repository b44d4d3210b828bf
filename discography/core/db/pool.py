"""
Bounded pool of aiosqlite connections.

aiosqlite runs each connection's SQLite calls on a dedicated worker thread, so
awaiting a query never blocks the event loop. The pool caps how many of those
connections exist; callers that find the pool empty suspend until a
connection is returned.

`:memory:` databases are private to the connection that opened them, so the
pool collapses to a single connection for them.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import aiosqlite

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


class ConnectionPool:
    """
    Fixed-size pool of open aiosqlite connections.

    Usage:
        pool = ConnectionPool("catalog.sqlite3", size=4)
        await pool.open()
        async with pool.acquire() as conn:
            ...
        await pool.close()
    """

    def __init__(self, db_path: str, *, size: int = 4, busy_timeout: float = 5.0) -> None:
        if size < 1:
            raise ValueError("pool size must be >= 1")
        self._db_path = db_path
        self._size = 1 if db_path == MEMORY_DB else size
        self._busy_timeout = busy_timeout
        self._idle: asyncio.Queue[aiosqlite.Connection] | None = None
        self._connections: list[aiosqlite.Connection] = []

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_open(self) -> bool:
        return self._idle is not None

    @property
    def available(self) -> int:
        """Number of idle connections right now."""
        return self._idle.qsize() if self._idle is not None else 0

    async def open(self) -> None:
        if self._idle is not None:
            return
        idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=self._size)
        try:
            for _ in range(self._size):
                conn = await self._connect()
                self._connections.append(conn)
                idle.put_nowait(conn)
        except BaseException:
            await self._close_all()
            raise
        self._idle = idle
        logger.debug("Opened %d connection(s) to %s", self._size, self._db_path)

    async def close(self) -> None:
        if self._idle is None:
            return
        self._idle = None
        await self._close_all()
        logger.debug("Closed connection pool for %s", self._db_path)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow one connection; it goes back to the pool on every exit path."""
        idle = self._idle
        if idle is None:
            raise RuntimeError("ConnectionPool is not open. Call await pool.open() first.")
        conn = await idle.get()
        try:
            yield conn
        finally:
            idle.put_nowait(conn)

    async def _connect(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self._db_path, timeout=self._busy_timeout)
        conn.row_factory = aiosqlite.Row

        # Pragmas: modern defaults without being clever.
        await conn.execute("PRAGMA foreign_keys = ON;")
        if self._db_path != MEMORY_DB:
            await conn.execute("PRAGMA journal_mode = WAL;")
            await conn.execute("PRAGMA synchronous = NORMAL;")
        return conn

    async def _close_all(self) -> None:
        connections, self._connections = self._connections, []
        for conn in connections:
            await conn.close()
