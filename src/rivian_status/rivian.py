"""Asynchronous read-only Python client for the Rivian API."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import aiohttp

from .auth import RivianAuth, Transport
from .const import GRAPHQL_CHARGING, GRAPHQL_GATEWAY
from .exceptions import RivianApiException
from .models import VehicleState
from .queries import (
    charging_history_body,
    charging_schedule_body,
    drivers_and_keys_body,
    live_charging_session_body,
    ota_update_details_body,
    user_info_body,
    vehicle_state_body,
)
from .tokens import SessionTokens
from .transport import GraphQLTransport

_LOGGER = logging.getLogger(__name__)


class Rivian:
    """Main class for the Rivian API Client"""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        request_timeout: float | None = None,
        tokens: SessionTokens | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._transport = transport or GraphQLTransport(session, request_timeout)
        self.auth = RivianAuth(self._transport, tokens)
        self._vehicle_id: str | None = None

    @property
    def tokens(self) -> SessionTokens:
        """Tokens shared with the auth flow."""
        return self.auth.tokens

    def _gateway_headers(self) -> dict[str, str]:
        return {
            "A-Sess": self.tokens.app_session_token,
            "U-Sess": self.tokens.user_session_token,
        }

    def _charging_headers(self) -> dict[str, str]:
        return {"U-Sess": self.tokens.user_session_token}

    async def _gateway(self, body: dict[str, Any], key: str) -> Any:
        data = await self._transport.execute(
            GRAPHQL_GATEWAY, body, self._gateway_headers()
        )
        return data.get(key)

    async def _charging(self, body: dict[str, Any], key: str) -> Any:
        data = await self._transport.execute(
            GRAPHQL_CHARGING, body, self._charging_headers()
        )
        return data.get(key)

    async def get_user_information(self) -> dict[str, Any]:
        """Get the current user with their vehicles and software details."""
        return await self._gateway(user_info_body(), "currentUser") or {}

    async def get_vehicle_state(
        self, vehicle_id: str, properties: Iterable[str] | None = None
    ) -> VehicleState:
        """Get vehicle state.

        Args:
            vehicle_id: The vehicle ID to query
            properties: Property names to select; ``None`` or empty selects
                the default catalog

        Returns:
            Mapping of property name to its raw value, usually a
            ``{timeStamp, value}`` pair
        """
        return (
            await self._gateway(vehicle_state_body(vehicle_id, properties), "vehicleState")
            or {}
        )

    async def get_vehicle_ota_update_details(self, vehicle_id: str) -> dict[str, Any]:
        """Get current and available OTA update details."""
        return (
            await self._gateway(ota_update_details_body(vehicle_id), "getVehicle") or {}
        )

    async def get_live_charging_session(self, vehicle_id: str) -> dict[str, Any] | None:
        """Get live charging session data, or None when not charging."""
        return await self._charging(
            live_charging_session_body(vehicle_id), "getLiveSessionData"
        )

    async def get_charging_history(self) -> list[dict[str, Any]] | None:
        """Get completed charging session summaries."""
        return await self._charging(
            charging_history_body(), "getCompletedSessionSummaries"
        )

    async def get_charging_schedule(self, vehicle_id: str) -> dict[str, Any]:
        """Get configured charging schedules."""
        return (
            await self._gateway(charging_schedule_body(vehicle_id), "getVehicle") or {}
        )

    async def get_drivers_and_keys(self, vehicle_id: str) -> dict[str, Any]:
        """Get drivers and keys.

        Returns vehicle information including invited users and their devices.
        """
        return await self._gateway(drivers_and_keys_body(vehicle_id), "getVehicle") or {}

    async def resolve_vehicle_id(self) -> str:
        """Return the id of the account's first vehicle.

        The first successful lookup is kept for the lifetime of the client.
        """
        if self._vehicle_id:
            return self._vehicle_id
        user = await self.get_user_information()
        vehicles = user.get("vehicles") or []
        if not vehicles:
            raise RivianApiException("No vehicles found on your Rivian account.")
        self._vehicle_id = vehicles[0]["id"]
        _LOGGER.debug("Resolved vehicle id")
        return self._vehicle_id

    async def close(self) -> None:
        """Close open client session."""
        if isinstance(self._transport, GraphQLTransport):
            await self._transport.close()

    async def __aenter__(self) -> Rivian:
        """Async enter.
        Returns:
            The Rivian object.
        """
        return self

    async def __aexit__(self, *_exc_info) -> None:
        """Async exit.
        Args:
            _exc_info: Exec type.
        """
        await self.close()
