"""
Error taxonomy for the Messagr facade.

The remote endpoint reports failures as a single-key tagged value such as
``{"PlatformError": "token expired"}``. This module parses that value into a
closed set of wire variants and normalizes it into a ``FacadeError`` carrying
one of the documented ``ErrorKind`` values and a user-visible message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ErrorKind(str, Enum):
    """Classification of facade failures."""

    UNAUTHENTICATED = "unauthenticated"
    PLATFORM_FAILURE = "platform_failure"
    QUERY_FAILURE = "query_failure"
    INTERNAL_FAILURE = "internal_failure"
    INVALID_INPUT = "invalid_input"
    UNKNOWN = "unknown"


# =============================================================================
# Wire variants
# =============================================================================


@dataclass(frozen=True)
class NotAuthenticated:
    """Caller has no identity on the remote endpoint."""


@dataclass(frozen=True)
class PlatformError:
    detail: str


@dataclass(frozen=True)
class QueryError:
    detail: str


@dataclass(frozen=True)
class InternalError:
    detail: str


@dataclass(frozen=True)
class InvalidParameters:
    detail: str


WireError = Union[NotAuthenticated, PlatformError, QueryError, InternalError, InvalidParameters]

_DETAIL_VARIANTS: dict[str, type] = {
    "PlatformError": PlatformError,
    "QueryError": QueryError,
    "InternalError": InternalError,
    "InvalidParameters": InvalidParameters,
}


def parse_wire_error(value: Any) -> WireError | None:
    """
    Parse a raw tagged error value into its wire variant.

    Args:
        value: The value found in the ``Err`` branch of a remote response.

    Returns:
        The matching variant, or None if the value is not exactly one known tag.
    """
    if isinstance(value, (NotAuthenticated, PlatformError, QueryError, InternalError, InvalidParameters)):
        return value
    if not isinstance(value, dict) or len(value) != 1:
        return None

    ((tag, payload),) = value.items()
    if tag == "NotAuthenticated":
        return NotAuthenticated()
    variant = _DETAIL_VARIANTS.get(tag)
    if variant is None:
        return None
    return variant("" if payload is None else str(payload))


# =============================================================================
# Facade exceptions
# =============================================================================


class FacadeError(Exception):
    """Base exception for every failure surfaced by the facade."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    prefix: str | None = None

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(self.format_message(detail))

    @classmethod
    def format_message(cls, detail: str | None) -> str:
        if cls.prefix is None:
            return detail or "Unknown error"
        return f"{cls.prefix}: {detail}"

    @property
    def message(self) -> str:
        """User-visible message."""
        return str(self)


class AuthenticationRequiredError(FacadeError):
    """The remote endpoint requires an authenticated caller."""

    kind = ErrorKind.UNAUTHENTICATED

    @classmethod
    def format_message(cls, detail: str | None) -> str:
        return "Authentication required"


class PlatformFailureError(FacadeError):
    """A messaging platform rejected or failed the operation."""

    kind = ErrorKind.PLATFORM_FAILURE
    prefix = "Platform error"


class QueryFailureError(FacadeError):
    """The search or AI query could not be completed."""

    kind = ErrorKind.QUERY_FAILURE
    prefix = "Query error"


class InternalFailureError(FacadeError):
    """The remote endpoint failed internally, or returned a malformed payload."""

    kind = ErrorKind.INTERNAL_FAILURE
    prefix = "Internal error"


class InvalidInputError(FacadeError):
    """Arguments were rejected locally or by the remote endpoint."""

    kind = ErrorKind.INVALID_INPUT
    prefix = "Invalid parameters"


class UnknownFacadeError(FacadeError):
    """Unrecognized error value, or a transport failure."""

    kind = ErrorKind.UNKNOWN

    @classmethod
    def format_message(cls, detail: str | None) -> str:
        return "Unknown error"


def normalize_error(error: Any) -> FacadeError:
    """
    Normalize a wire-level error into a facade exception.

    Never raises: values outside the closed set of tags become
    ``UnknownFacadeError``.

    Args:
        error: The value found in the ``Err`` branch of a remote response.

    Returns:
        A FacadeError instance ready to be raised.
    """
    variant = parse_wire_error(error)

    if isinstance(variant, NotAuthenticated):
        return AuthenticationRequiredError()
    elif isinstance(variant, PlatformError):
        return PlatformFailureError(variant.detail)
    elif isinstance(variant, QueryError):
        return QueryFailureError(variant.detail)
    elif isinstance(variant, InternalError):
        return InternalFailureError(variant.detail)
    elif isinstance(variant, InvalidParameters):
        return InvalidInputError(variant.detail)

    return UnknownFacadeError()
