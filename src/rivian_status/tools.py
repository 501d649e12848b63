"""User-facing operations returning messages instead of raising.

Each coroutine maps to one agent tool or CLI command. Failures of any kind
known to the client are turned into a single readable sentence.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Awaitable, Callable, Iterable

from .const import ENV_EMAIL, ENV_PASSWORD
from .exceptions import (
    RivianApiException,
    RivianNotLoggedIn,
    RivianPersistenceError,
)
from .formatting import (
    format_charging_history,
    format_charging_schedule,
    format_charging_session,
    format_drivers_and_keys,
    format_ota_status,
    format_user_info,
    format_vehicle_state,
)
from .models import VehicleProperty
from .rivian import Rivian
from .storage import SessionStatus, SessionStore

_LOGGER = logging.getLogger(__name__)

SIGNED_IN = "Signed in to Rivian successfully."
CODE_SENT = (
    "A verification code has been sent to your phone or email. "
    "Submit the code to complete the sign-in."
)


class RivianTools:
    """Read-only Rivian operations for a single account and vehicle."""

    def __init__(
        self,
        client: Rivian | None = None,
        store: SessionStore | None = None,
    ) -> None:
        self.client = client or Rivian()
        self.store = store or SessionStore()

    def restore(self) -> SessionStatus:
        """Load the persisted session, if any."""
        return self.store.load(self.client.auth)

    def _save(self) -> str:
        try:
            self.store.save(self.client.auth)
        except RivianPersistenceError as err:
            _LOGGER.warning("%s", err)
            return f" (session not saved: {err})"
        return ""

    def _require_auth(self) -> None:
        if not self.client.auth.is_authenticated():
            raise RivianNotLoggedIn(
                "Not logged in. Ask the user to log in to Rivian first."
            )

    async def _guarded(self, operation: Callable[[], Awaitable[str]]) -> str:
        try:
            self._require_auth()
            return await operation()
        except RivianApiException as err:
            return str(err)

    async def login(self, email: str | None = None, password: str | None = None) -> str:
        """Start a sign-in, with credentials from the environment by default."""
        email = email or os.environ.get(ENV_EMAIL)
        password = password or os.environ.get(ENV_PASSWORD)
        if not email or not password:
            return (
                "Rivian credentials are not configured. "
                f"Set {ENV_EMAIL} and {ENV_PASSWORD}."
            )

        try:
            await self.client.auth.create_csrf_token()
            mfa = await self.client.auth.login(email, password)
        except RivianApiException as err:
            return f"Couldn't sign in: {err}"

        note = self._save()
        return (CODE_SENT if mfa else SIGNED_IN) + note

    async def submit_otp(self, otp_code: str, email: str | None = None) -> str:
        """Complete a pending sign-in with the verification code."""
        email = email or os.environ.get(ENV_EMAIL)
        if not email:
            return f"{ENV_EMAIL} is not configured."
        if not self.client.auth.needs_otp():
            return "No pending verification. Start with login first."

        try:
            await self.client.auth.validate_otp(email, otp_code)
        except RivianApiException as err:
            return (
                f"Verification failed: {err}. "
                "You may need to start over with login."
            )

        return SIGNED_IN + self._save()

    async def user_info(self) -> str:
        """Account holder and vehicles."""

        async def run() -> str:
            return format_user_info(await self.client.get_user_information())

        return await self._guarded(run)

    async def vehicle_state(self, properties: Iterable[str] | None = None) -> str:
        """Full or partial vehicle status report."""

        async def run() -> str:
            vehicle_id = await self.client.resolve_vehicle_id()
            state = await self.client.get_vehicle_state(vehicle_id, properties)
            return format_vehicle_state(state)

        return await self._guarded(run)

    async def ota_status(self) -> str:
        """Installed software and pending updates."""

        async def run() -> str:
            vehicle_id = await self.client.resolve_vehicle_id()
            details = await self.client.get_vehicle_ota_update_details(vehicle_id)
            state = await self.client.get_vehicle_state(
                vehicle_id, [VehicleProperty.OTA_STATUS]
            )
            return format_ota_status(details, state)

        return await self._guarded(run)

    async def charging_session(self) -> str:
        """Active charging session."""

        async def run() -> str:
            vehicle_id = await self.client.resolve_vehicle_id()
            return format_charging_session(
                await self.client.get_live_charging_session(vehicle_id)
            )

        return await self._guarded(run)

    async def charging_history(self) -> str:
        """Completed charging sessions."""

        async def run() -> str:
            return format_charging_history(await self.client.get_charging_history())

        return await self._guarded(run)

    async def charging_schedule(self) -> str:
        """Configured charging schedules."""

        async def run() -> str:
            vehicle_id = await self.client.resolve_vehicle_id()
            return format_charging_schedule(
                await self.client.get_charging_schedule(vehicle_id)
            )

        return await self._guarded(run)

    async def drivers_and_keys(self) -> str:
        """Who has access to the vehicle."""

        async def run() -> str:
            vehicle_id = await self.client.resolve_vehicle_id()
            return format_drivers_and_keys(
                await self.client.get_drivers_and_keys(vehicle_id)
            )

        return await self._guarded(run)

    async def close(self) -> None:
        """Release network resources."""
        await self.client.close()
