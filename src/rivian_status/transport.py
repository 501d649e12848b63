"""HTTP transport for Rivian GraphQL endpoints."""

from __future__ import annotations

import asyncio
import logging
import socket
import sys
import uuid
from typing import Any, Type

import aiohttp

from .const import BASE_HEADERS
from .exceptions import (
    RivianApiRateLimitError,
    RivianBadRequestError,
    RivianDataError,
    RivianInvalidCredentials,
    RivianInvalidOTP,
    RivianProtocolError,
    RivianRemoteError,
    RivianTemporarilyLockedError,
    RivianTransportError,
    RivianUnauthenticated,
)

if sys.version_info >= (3, 11):
    import asyncio as async_timeout
else:
    import async_timeout

_LOGGER = logging.getLogger(__name__)

INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

ERROR_CODE_CLASS_MAP: dict[str, Type[RivianRemoteError]] = {
    "BAD_CURRENT_PASSWORD": RivianInvalidCredentials,
    "BAD_REQUEST_ERROR": RivianBadRequestError,
    "DATA_ERROR": RivianDataError,
    "RATE_LIMIT": RivianApiRateLimitError,
    "SESSION_MANAGER_ERROR": RivianTemporarilyLockedError,
    "UNAUTHENTICATED": RivianUnauthenticated,
}

OTP_ERRORS = (
    ("BAD_USER_INPUT", "INVALID_OTP"),
    ("UNAUTHENTICATED", "OTP_TOKEN_EXPIRED"),
)


def graphql_error(errors: list[Any], status: int | None = None) -> RivianRemoteError:
    """Convert a GraphQL ``errors`` list into the matching exception.

    The first error supplies the message, code and reason.
    """
    error = errors[0] if isinstance(errors[0], dict) else {}
    extensions = error.get("extensions") or {}
    code = extensions.get("code")
    reason = extensions.get("reason")
    message = error.get("message") or code or "Unknown GraphQL error"

    if INVALID_CREDENTIALS in (message, code, reason):
        err_cls: Type[RivianRemoteError] = RivianInvalidCredentials
    elif (code, reason) in OTP_ERRORS:
        err_cls = RivianInvalidOTP
    else:
        err_cls = ERROR_CODE_CLASS_MAP.get(code or "", RivianRemoteError)
    return err_cls(message, code=code, reason=reason, status=status)


class GraphQLTransport:
    """POST GraphQL bodies to Rivian and unwrap the ``data`` payload."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        request_timeout: float | None = None,
    ) -> None:
        self._session = session
        self._close_session = False
        self.request_timeout = request_timeout

    async def execute(
        self,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL request and return its ``data`` object.

        Raises:
            RivianRemoteError: The response carried a GraphQL ``errors`` list.
            RivianTransportError: Non-2xx status without structured errors,
                connection failure or timeout.
            RivianProtocolError: The response had no ``data`` object.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._close_session = True

        request_headers = {
            **BASE_HEADERS,
            "dc-cid": f"m-ios-{uuid.uuid4()}",
            **(headers or {}),
        }
        operation_name = body.get("operationName")
        if operation_name:
            request_headers["X-APOLLO-OPERATION-NAME"] = operation_name

        _LOGGER.debug("Executing %s against %s", operation_name or "query", url)
        try:
            async with async_timeout.timeout(self.request_timeout):
                async with self._session.post(
                    url, json=body, headers=request_headers
                ) as response:
                    status = response.status
                    try:
                        response_json = await response.json(content_type=None)
                    except ValueError:
                        response_json = None
        except asyncio.TimeoutError as exception:
            raise RivianTransportError(
                "Timeout occurred while connecting to Rivian API."
            ) from exception
        except (aiohttp.ClientError, socket.gaierror) as exception:
            raise RivianTransportError(
                "Error occurred while communicating with Rivian."
            ) from exception

        errors = response_json.get("errors") if isinstance(response_json, dict) else None
        if errors and isinstance(errors, list):
            raise graphql_error(errors, status)

        if not 200 <= status < 300:
            raise RivianTransportError(f"HTTP {status}", status)

        if not isinstance(response_json, dict) or not isinstance(
            response_json.get("data"), dict
        ):
            raise RivianProtocolError(
                f"Response to {operation_name or 'query'} did not contain any data."
            )

        return response_json["data"]

    async def close(self) -> None:
        """Close the HTTP session if this transport opened it."""
        if self._session and self._close_session:
            await self._session.close()
            self._session = None
            self._close_session = False
