"""
Unwrapping of tagged remote responses.

Every remote operation answers with ``{"Ok": payload}`` or ``{"Err": error}``.
``call_remote`` awaits the call, turns transport exceptions and malformed
responses into facade errors, and returns the success payload.
"""

import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from messagr.remote.errors import (
    FacadeError,
    InternalFailureError,
    UnknownFacadeError,
    normalize_error,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def unwrap_result(response: Any, operation: str) -> Any:
    """
    Extract the success payload from a tagged response.

    Args:
        response: Raw response from the remote endpoint.
        operation: Remote operation name, for logging.

    Returns:
        The ``Ok`` payload.

    Raises:
        FacadeError: The normalized ``Err`` value, or UnknownFacadeError when
            the response is neither branch.
    """
    if isinstance(response, dict) and len(response) == 1:
        if "Ok" in response:
            return response["Ok"]
        if "Err" in response:
            raise normalize_error(response["Err"])

    logger.error(f"Malformed {operation} response: {response!r}")
    raise UnknownFacadeError()


async def call_remote(operation: str, call: Awaitable[Any], tagged: bool = True) -> Any:
    """
    Await a remote call and return its success payload.

    Args:
        operation: Remote operation name, for logging.
        call: The pending remote call.
        tagged: Whether the response is an Ok/Err tagged value. Untagged
            operations return their payload directly.

    Returns:
        The success payload.

    Raises:
        FacadeError: For every failure, including transport exceptions.
    """
    try:
        response = await call
    except FacadeError:
        raise
    except Exception as e:
        logger.error(f"Remote call {operation} failed: {e}")
        raise UnknownFacadeError(str(e)) from e

    if not tagged:
        return response
    return unwrap_result(response, operation)


def parse_payload(adapter: TypeAdapter[T], payload: Any, operation: str) -> T:
    """
    Validate a success payload into its model type.

    Args:
        adapter: Type adapter for the expected payload type.
        payload: The raw payload.
        operation: Remote operation name, used in the error message.

    Returns:
        The validated payload.

    Raises:
        InternalFailureError: If the payload does not match the expected shape.
    """
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        logger.error(f"Malformed {operation} payload: {e}")
        raise InternalFailureError(f"malformed {operation} response") from e
