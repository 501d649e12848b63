"""Authentication flow for the Rivian GraphQL gateway."""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol

from .const import GRAPHQL_GATEWAY
from .exceptions import RivianAuthError, RivianProtocolError
from .queries import create_csrf_token_body, login_body, login_with_otp_body
from .tokens import SessionTokens

if sys.version_info >= (3, 11):
    from enum import StrEnum
else:
    from backports.strenum import StrEnum

_LOGGER = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything able to execute a GraphQL body against an endpoint."""

    async def execute(
        self,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        ...


class AuthState(StrEnum):
    """Where the login flow currently stands."""

    UNAUTHENTICATED = "unauthenticated"
    CSRF_OBTAINED = "csrf_obtained"
    OTP_PENDING = "otp_pending"
    AUTHENTICATED = "authenticated"


class RivianAuth:
    """Drive CSRF handshake, password login and verification code challenge.

    Every transition mutates the :class:`SessionTokens` passed in, so the same
    store can be shared with the query client and the session file.
    """

    def __init__(self, transport: Transport, tokens: SessionTokens | None = None) -> None:
        self._transport = transport
        self.tokens = tokens if tokens is not None else SessionTokens()

    @property
    def state(self) -> AuthState:
        """Current state derived from the held tokens."""
        if self.tokens.is_authenticated:
            return AuthState.AUTHENTICATED
        if self.tokens.needs_otp:
            return AuthState.OTP_PENDING
        if self.tokens.csrf_token:
            return AuthState.CSRF_OBTAINED
        return AuthState.UNAUTHENTICATED

    def is_authenticated(self) -> bool:
        """Return whether an access token has been granted."""
        return self.tokens.is_authenticated

    def needs_otp(self) -> bool:
        """Return whether a verification code is awaited."""
        return self.tokens.needs_otp

    def _csrf_headers(self) -> dict[str, str]:
        return {
            "Csrf-Token": self.tokens.csrf_token,
            "A-Sess": self.tokens.app_session_token,
        }

    async def create_csrf_token(self) -> None:
        """Create cross-site-request-forgery (csrf) and app session tokens.

        Must precede :meth:`login`; both tokens are sent with it.
        """
        data = await self._transport.execute(GRAPHQL_GATEWAY, create_csrf_token_body())
        csrf_data = data.get("createCsrfToken") or {}
        if not csrf_data.get("csrfToken") or not csrf_data.get("appSessionToken"):
            raise RivianProtocolError("Rivian did not return a CSRF token.")

        self.tokens.csrf_token = csrf_data["csrfToken"]
        self.tokens.app_session_token = csrf_data["appSessionToken"]
        _LOGGER.debug("CSRF token obtained")

    async def login(self, email: str, password: str) -> bool:
        """Log in with email and password.

        Returns:
            True if a verification code was sent and :meth:`validate_otp` must
            follow, False if the session is already authenticated.

        Raises:
            RivianInvalidCredentials: If email/password are incorrect.
            RivianProtocolError: If the response carries neither shape.
        """
        data = await self._transport.execute(
            GRAPHQL_GATEWAY, login_body(email, password), self._csrf_headers()
        )
        login_data = data.get("login") or {}

        if otp_token := login_data.get("otpToken"):
            self.tokens.otp_token = otp_token
            self.tokens.access_token = ""
            _LOGGER.debug("Login requires a verification code")
            return True

        self._store_login_response(login_data)
        _LOGGER.debug("Logged in without verification code")
        return False

    async def validate_otp(self, email: str, otp_code: str) -> None:
        """Complete a pending login with the verification code.

        On rejection the challenge stays pending so the code can be retried.

        Raises:
            RivianAuthError: If no challenge is pending.
            RivianInvalidOTP: If the code is wrong or the challenge expired.
        """
        if not self.tokens.needs_otp:
            raise RivianAuthError("No pending verification. Log in first.")

        data = await self._transport.execute(
            GRAPHQL_GATEWAY,
            login_with_otp_body(email, otp_code, self.tokens.otp_token),
            self._csrf_headers(),
        )
        self._store_login_response(data.get("loginWithOTP") or {})
        _LOGGER.debug("Verification code accepted")

    def _store_login_response(self, login_data: dict[str, Any]) -> None:
        if not login_data.get("accessToken"):
            raise RivianProtocolError("Rivian did not return an access token.")
        self.tokens.access_token = login_data["accessToken"]
        self.tokens.refresh_token = login_data.get("refreshToken") or ""
        self.tokens.user_session_token = login_data.get("userSessionToken") or ""
        self.tokens.otp_token = ""

    def export_session(self) -> dict[str, Any]:
        """Snapshot the tokens for persistence."""
        return self.tokens.as_dict()

    def restore_session(self, snapshot: dict[str, Any]) -> None:
        """Replace the tokens with those from a snapshot."""
        self.tokens.update(SessionTokens.from_dict(snapshot))

    def clear(self) -> None:
        """Forget all tokens, returning to the unauthenticated state."""
        self.tokens.clear()
