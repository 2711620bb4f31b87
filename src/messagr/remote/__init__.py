"""
Remote endpoint boundary.

Provides the pieces every facade operation uses at the remote boundary:
- Optional codec for zero-or-one-element sequences
- Error normalization into a closed taxonomy
- Ok/Err response unwrapping
"""

from messagr.remote.codec import decode_optional, encode_optional, encode_optional_fields
from messagr.remote.errors import (
    AuthenticationRequiredError,
    ErrorKind,
    FacadeError,
    InternalError,
    InternalFailureError,
    InvalidInputError,
    InvalidParameters,
    NotAuthenticated,
    PlatformError,
    PlatformFailureError,
    QueryError,
    QueryFailureError,
    UnknownFacadeError,
    WireError,
    normalize_error,
    parse_wire_error,
)
from messagr.remote.results import call_remote, parse_payload, unwrap_result

__all__ = [
    # Codec
    "encode_optional",
    "decode_optional",
    "encode_optional_fields",
    # Errors
    "ErrorKind",
    "FacadeError",
    "AuthenticationRequiredError",
    "PlatformFailureError",
    "QueryFailureError",
    "InternalFailureError",
    "InvalidInputError",
    "UnknownFacadeError",
    "normalize_error",
    # Wire variants
    "WireError",
    "NotAuthenticated",
    "PlatformError",
    "QueryError",
    "InternalError",
    "InvalidParameters",
    "parse_wire_error",
    # Results
    "call_remote",
    "parse_payload",
    "unwrap_result",
]
