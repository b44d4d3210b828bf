"""
Tests for discography.core.ids and discography.core.models helpers.

These tests verify:
- Only canonical 8-4-4-4-12 UUID text is accepted as an id
- The offending field name ends up in the error message
- Text normalization used for optional fields
"""

from __future__ import annotations

import uuid

import pytest

from discography.core.errors import InvalidIdError, ValidationError
from discography.core.ids import new_id, parse_id
from discography.core.models import is_blank, normalize_text


class TestParseId:
    """Tests for parse_id()."""

    def test_accepts_canonical_lowercase(self) -> None:
        """Test that lowercase canonical text parses to the same UUID."""
        value = "3f2504e0-4f89-41d3-9a0c-0305e82c3301"
        assert parse_id(value) == uuid.UUID(value)

    def test_accepts_canonical_uppercase(self) -> None:
        value = "3F2504E0-4F89-41D3-9A0C-0305E82C3301"
        assert parse_id(value) == uuid.UUID(value.lower())

    def test_passes_uuid_through(self) -> None:
        """Test that an already-parsed UUID is returned unchanged."""
        value = uuid.uuid4()
        assert parse_id(value) is value

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "not-a-uuid",
            "3f2504e04f8941d39a0c0305e82c3301",
            "{3f2504e0-4f89-41d3-9a0c-0305e82c3301}",
            "urn:uuid:3f2504e0-4f89-41d3-9a0c-0305e82c3301",
            "3f2504e0-4f89-41d3-9a0c-0305e82c3301\n",
            " 3f2504e0-4f89-41d3-9a0c-0305e82c3301",
            "3f2504e0-4f89-41d3-9a0c-0305e82c330g",
        ],
    )
    def test_rejects_non_canonical_text(self, value: str) -> None:
        """Test that forms uuid.UUID() would accept are still refused."""
        with pytest.raises(InvalidIdError):
            parse_id(value)

    def test_rejects_non_string(self) -> None:
        with pytest.raises(InvalidIdError):
            parse_id(12345)  # type: ignore[arg-type]

    def test_error_names_field(self) -> None:
        """Test that the error carries the field name and 400/Bad Request."""
        with pytest.raises(InvalidIdError) as excinfo:
            parse_id("nope", "artistId")
        assert excinfo.value.field == "artistId"
        assert "artistId" in excinfo.value.message
        assert excinfo.value.status_code == 400
        assert excinfo.value.title == "Bad Request"

    def test_invalid_id_is_a_validation_error(self) -> None:
        assert issubclass(InvalidIdError, ValidationError)


class TestNewId:
    """Tests for new_id()."""

    def test_new_id_is_random_v4(self) -> None:
        """Test that generated ids are distinct canonical UUIDv4 values."""
        a, b = new_id(), new_id()
        assert a != b
        assert a.version == 4
        assert parse_id(str(a)) == a


class TestTextHelpers:
    """Tests for normalize_text() and is_blank()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, None),
            ("", None),
            ("   ", None),
            ("\t\n", None),
            ("Rock", "Rock"),
            ("  Alternative Rock ", "Alternative Rock"),
        ],
    )
    def test_normalize_text(self, value: str | None, expected: str | None) -> None:
        """Test that blank text becomes None and other text is trimmed."""
        assert normalize_text(value) == expected

    def test_is_blank(self) -> None:
        assert is_blank(None)
        assert is_blank("")
        assert is_blank("  ")
        assert not is_blank(" x ")
