"""
Identifier parsing.

All entity ids are UUIDs stored as canonical lowercase text. `uuid.UUID()`
alone is too lenient for the wire (it accepts braces, `urn:uuid:` prefixes and
un-hyphenated hex), so we check the canonical 8-4-4-4-12 shape first.
"""

from __future__ import annotations

import re
import uuid
from typing import Final

from discography.core.errors import InvalidIdError

_CANONICAL_UUID: Final = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def parse_id(value: uuid.UUID | str, field: str = "id") -> uuid.UUID:
    """
    Return `value` as a UUID or raise InvalidIdError.

    `field` names the offending input in the error message
    (e.g. "artistId").
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str) or not _CANONICAL_UUID.fullmatch(value):
        raise InvalidIdError(field, value)
    return uuid.UUID(value)


def new_id() -> uuid.UUID:
    return uuid.uuid4()
