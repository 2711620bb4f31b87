"""Unit tests for the optional value codec."""

import pytest

from messagr.remote.codec import decode_optional, encode_optional, encode_optional_fields
from messagr.remote.errors import ErrorKind, InvalidInputError


class TestEncodeOptional:
    """Tests for encode_optional."""

    def test_absent_value(self):
        """None encodes as an empty sequence."""
        assert encode_optional(None) == []

    @pytest.mark.parametrize("value", ["deadline", "", 0, False, True, 1_700_000_000])
    def test_present_value(self, value):
        """Present values, including falsy ones, encode as one element."""
        assert encode_optional(value) == [value]


class TestDecodeOptional:
    """Tests for decode_optional."""

    def test_empty_sequence(self):
        assert decode_optional([]) is None

    def test_single_element(self):
        assert decode_optional(["x"]) == "x"
        assert decode_optional((42,)) == 42

    def test_round_trip_keeps_empty_string_distinct(self):
        """An empty string survives and is not confused with absence."""
        assert decode_optional(encode_optional("")) == ""
        assert decode_optional(encode_optional(None)) is None

    def test_two_elements_is_invalid(self):
        with pytest.raises(InvalidInputError) as exc_info:
            decode_optional([1, 2])

        assert exc_info.value.kind == ErrorKind.INVALID_INPUT
        assert str(exc_info.value).startswith("Invalid parameters: ")

    def test_non_sequence_is_invalid(self):
        with pytest.raises(InvalidInputError):
            decode_optional("x")

        with pytest.raises(InvalidInputError):
            decode_optional(5)


class TestEncodeOptionalFields:
    """Tests for encoding a group of fields."""

    def test_every_field_encoded(self):
        encoded = encode_optional_fields(
            {"limit": 10, "offset": None, "is_reply": False}, ("limit", "offset", "is_reply", "sender_id")
        )

        assert encoded == {"limit": [10], "offset": [], "is_reply": [False], "sender_id": []}
