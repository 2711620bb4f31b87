"""
Optional value codec.

The remote interface encodes every optional argument as a sequence holding
zero elements (absent) or exactly one element (present). Business code deals
only in native ``None``/value; this module is the single place where the
conversion happens.
"""

from collections.abc import Sequence
from typing import Any, TypeVar

from messagr.remote.errors import InvalidInputError

T = TypeVar("T")


def encode_optional(value: T | None) -> list[T]:
    """
    Encode an optional value for the wire.

    Args:
        value: The value, or None when absent.

    Returns:
        ``[]`` for None, otherwise ``[value]``. Falsy values such as ``""``,
        ``0`` and ``False`` are present values.
    """
    if value is None:
        return []
    return [value]


def decode_optional(sequence: Sequence[T]) -> T | None:
    """
    Decode a zero-or-one-element sequence.

    Args:
        sequence: The wire value.

    Returns:
        None for an empty sequence, otherwise its single element.

    Raises:
        InvalidInputError: If the value is not a sequence or holds more than one element.
    """
    if isinstance(sequence, (str, bytes)) or not isinstance(sequence, Sequence):
        raise InvalidInputError(
            f"optional value must be a sequence, got {type(sequence).__name__}"
        )
    if len(sequence) == 0:
        return None
    if len(sequence) == 1:
        return sequence[0]
    raise InvalidInputError(
        f"optional value must have at most one element, got {len(sequence)}"
    )


def encode_optional_fields(values: dict[str, Any], fields: Sequence[str]) -> dict[str, list[Any]]:
    """
    Encode a set of optional fields in one pass.

    Args:
        values: Native values keyed by field name; missing keys are absent.
        fields: Names of the optional fields to encode.

    Returns:
        Mapping of every field in ``fields`` to its wire sequence.
    """
    return {name: encode_optional(values.get(name)) for name in fields}
