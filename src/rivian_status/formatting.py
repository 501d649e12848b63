"""Render Rivian API responses as readable text."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any

from .const import KM_TO_MILES
from .models import VehicleProperty as P

DOOR_POSITIONS = ("FrontLeft", "FrontRight", "RearLeft", "RearRight")
CLOSURES = ("Frunk", "Liftgate", "Tailgate", "Tonneau")


def unwrap(entry: Any) -> Any:
    """Return the ``value`` of a timestamped entry, or the entry itself."""
    if isinstance(entry, Mapping) and "value" in entry:
        return entry["value"]
    return entry


def display(value: Any) -> str:
    """Format a response value for a report line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (Mapping, list)):
        return json.dumps(value, default=str)
    return str(value)


def position_label(position: str) -> str:
    """``FrontLeft`` -> ``front left``."""
    return re.sub(r"([A-Z])", r" \1", position).strip().lower()


class _Render:
    """Vehicle state being rendered, with the keys already accounted for."""

    def __init__(self, state: Mapping[str, Any]) -> None:
        self.state = state
        self.consumed: set[str] = set()

    def __contains__(self, key: str) -> bool:
        return key in self.state

    def take(self, key: str) -> Any:
        """Consume ``key`` and return its value for a labelled line.

        An object without a ``value`` (a bare ``{ timeStamp }``) counts as null.
        """
        self.consumed.add(key)
        entry = self.state[key]
        if isinstance(entry, Mapping) and "value" not in entry:
            return None
        return unwrap(entry)


@dataclass(frozen=True)
class Field:
    """``label: value<suffix>``, skipped when the value is missing."""

    label: str
    key: str
    suffix: str = ""
    # Windows, tires and cabin temperature also hide falsy values
    truthy_only: bool = False

    def lines(self, render: _Render) -> list[str]:
        if self.key not in render:
            return []
        value = render.take(self.key)
        if value is None or (self.truthy_only and not value):
            return []
        return [f"  {self.label}: {display(value)}{self.suffix}"]


@dataclass(frozen=True)
class ClosedLockedField:
    """Closed and locked states of one door or closure on a single line."""

    label: str
    closed_key: str
    locked_key: str

    def lines(self, render: _Render) -> list[str]:
        keys = [key for key in (self.closed_key, self.locked_key) if key in render]
        if not keys:
            return []
        parts = [display(value) for value in map(render.take, keys) if value]
        if not parts:
            return []
        return [f"  {self.label}: {', '.join(parts)}"]


@dataclass(frozen=True)
class ConnectionField:
    """``cloudConnection``: online state plus last sync time."""

    key: str = P.CLOUD_CONNECTION

    def lines(self, render: _Render) -> list[str]:
        if self.key not in render:
            return []
        render.consumed.add(self.key)
        connection = render.state[self.key]
        if not isinstance(connection, Mapping):
            connection = {}
        online = "Online" if connection.get("isOnline") else "Offline"
        last_sync = connection.get("lastSync")
        sync = f" (last sync: {display(last_sync)})" if last_sync else ""
        return [f"  Status: {online}{sync}"]


@dataclass(frozen=True)
class LocationField:
    """``gnssLocation``: coordinates when both are known."""

    key: str = P.GNSS_LOCATION

    def lines(self, render: _Render) -> list[str]:
        if self.key not in render:
            return []
        render.consumed.add(self.key)
        location = render.state[self.key]
        if not isinstance(location, Mapping):
            return []
        latitude = location.get("latitude")
        longitude = location.get("longitude")
        if not (latitude and longitude):
            return []
        return [f"  {display(latitude)}, {display(longitude)}"]


@dataclass(frozen=True)
class Section:
    """Titled group of fields.

    With ``triggers`` set the section is only considered when one of them is
    present; otherwise its keys fall through to ``Other``.
    """

    title: str
    fields: tuple[Any, ...]
    triggers: tuple[str, ...] = ()

    def lines(self, render: _Render) -> list[str]:
        if self.triggers and not any(key in render for key in self.triggers):
            return []
        lines = [line for field in self.fields for line in field.lines(render)]
        return [self.title, *lines, ""] if lines else []


VEHICLE_STATE_SECTIONS: tuple[Section, ...] = (
    Section(
        "Battery & Range",
        (
            Field("Battery", P.BATTERY_LEVEL, "%"),
            Field("Charge limit", P.BATTERY_LIMIT, "%"),
            Field("Capacity", P.BATTERY_CAPACITY),
            Field("Range", P.DISTANCE_TO_EMPTY, " miles"),
            Field("Odometer", P.VEHICLE_MILEAGE, " miles"),
            Field("Power", P.POWER_STATE),
            Field("Time to full", P.TIME_TO_END_OF_CHARGE, " min"),
            Field("Remote charging", P.REMOTE_CHARGING_AVAILABLE),
        ),
        triggers=(P.BATTERY_LEVEL, P.DISTANCE_TO_EMPTY),
    ),
    Section(
        "Charging",
        (
            Field("Charger status", P.CHARGER_STATUS),
            Field("Charger state", P.CHARGER_STATE),
            Field("Charge port", P.CHARGE_PORT_STATE),
        ),
        triggers=(P.CHARGER_STATUS, P.CHARGER_STATE),
    ),
    Section(
        "Doors",
        tuple(
            ClosedLockedField(
                position_label(pos), f"door{pos}Closed", f"door{pos}Locked"
            )
            for pos in DOOR_POSITIONS
        ),
    ),
    Section(
        "Closures",
        tuple(
            ClosedLockedField(
                name.lower(), f"closure{name}Closed", f"closure{name}Locked"
            )
            for name in CLOSURES
        ),
    ),
    Section(
        "Windows",
        tuple(
            Field(position_label(pos), f"window{pos}Closed", truthy_only=True)
            for pos in DOOR_POSITIONS
        ),
    ),
    Section(
        "Climate",
        (
            Field("Cabin temp", P.CABIN_CLIMATE_INTERIOR_TEMPERATURE, "°", True),
            Field("Preconditioning", P.CABIN_PRECONDITIONING_STATUS),
            Field("Defrost/defog", P.DEFROST_DEFOG_STATUS),
            Field("Pet mode", P.PET_MODE_STATUS),
        ),
        triggers=(
            P.CABIN_CLIMATE_INTERIOR_TEMPERATURE,
            P.CABIN_PRECONDITIONING_STATUS,
        ),
    ),
    Section(
        "Tire Pressure",
        tuple(
            Field(position_label(pos), f"tirePressureStatus{pos}", truthy_only=True)
            for pos in DOOR_POSITIONS
        ),
    ),
    Section(
        "Software",
        (
            Field("Current version", P.OTA_CURRENT_VERSION),
            Field("Available update", P.OTA_AVAILABLE_VERSION),
            Field("Status", P.OTA_STATUS),
            Field("Install status", P.OTA_CURRENT_STATUS),
            Field("Install ready", P.OTA_INSTALL_READY),
            Field("Install progress", P.OTA_INSTALL_PROGRESS, "%"),
            Field("Download progress", P.OTA_DOWNLOAD_PROGRESS, "%"),
            Field("Install type", P.OTA_INSTALL_TYPE),
            Field("Current hash", P.OTA_CURRENT_VERSION_GIT_HASH),
            Field("Available hash", P.OTA_AVAILABLE_VERSION_GIT_HASH),
        ),
        triggers=(P.OTA_CURRENT_VERSION, P.OTA_AVAILABLE_VERSION, P.OTA_STATUS),
    ),
    Section(
        "Security",
        (
            Field("Gear Guard", P.GEAR_GUARD_LOCKED),
            Field("Gear Guard video", P.GEAR_GUARD_VIDEO_STATUS),
        ),
        triggers=(P.GEAR_GUARD_LOCKED,),
    ),
    Section(
        "Drive",
        (
            Field("Drive mode", P.DRIVE_MODE),
            Field("Gear", P.GEAR_STATUS),
        ),
        triggers=(P.DRIVE_MODE, P.GEAR_STATUS),
    ),
    Section("Connection", (ConnectionField(),)),
    Section("Location", (LocationField(),)),
)


def format_vehicle_state(state: Mapping[str, Any]) -> str:
    """Group vehicle state properties into titled sections.

    Every key of ``state`` is accounted for exactly once: either by a section
    above or, when no section claims it (including properties this client does
    not know yet), under ``Other``. Keys whose value is null are accounted for
    but produce no line.
    """
    render = _Render(state)
    lines: list[str] = []
    for section in VEHICLE_STATE_SECTIONS:
        lines.extend(section.lines(render))

    remaining = [
        f"  {key}: {display(value)}"
        for key, entry in state.items()
        if key not in render.consumed and (value := unwrap(entry)) is not None
    ]
    if remaining:
        lines.extend(["Other", *remaining])

    return "\n".join(lines).strip()


def format_user_info(user: Mapping[str, Any]) -> str:
    """Summarize the account and each of its vehicles."""
    lines = [f"{user.get('firstName')} {user.get('lastName')} ({user.get('email')})", ""]

    vehicles = user.get("vehicles") or []
    if not vehicles:
        lines.append("No vehicles on this account.")
        return "\n".join(lines)

    for vehicle in vehicles:
        car = vehicle.get("vehicle") or {}
        lines.append(vehicle.get("name") or car.get("model") or "Vehicle")
        lines.append(f"  {car.get('modelYear')} {car.get('make')} {car.get('model')}")
        lines.append(f"  VIN: {vehicle.get('vin')}")

        if early_access := car.get("otaEarlyAccessStatus"):
            opted_in = "Yes" if early_access == "OPTED_IN" else "No"
            lines.append(f"  OTA early access: {opted_in}")
        if current := car.get("currentOTAUpdateDetails"):
            lines.append(f"  Software: v{current.get('version')}")
        if available := car.get("availableOTAUpdateDetails"):
            lines.append(f"  Update available: v{available.get('version')}")
            lines.append(f"  Release notes: {available.get('url')}")
        else:
            lines.append("  Software is up to date")
        lines.append("")

    return "\n".join(lines).strip()


def format_ota_status(
    ota: Mapping[str, Any], vehicle_state: Mapping[str, Any] | None = None
) -> str:
    """Describe installed software and any pending update.

    ``vehicle_state`` may carry ``otaStatus`` to report updates the vehicle
    is flagged for before their details are published.
    """
    lines = []

    if current := ota.get("currentOTAUpdateDetails"):
        lines.append(f"Current software: v{current.get('version')}")
    else:
        lines.append("Current software: unknown")

    ota_status = unwrap((vehicle_state or {}).get(P.OTA_STATUS))
    if ota_status:
        lines.append(f"OTA status: {display(ota_status)}")

    if available := ota.get("availableOTAUpdateDetails"):
        lines.append(f"Update available: v{available.get('version')}")
        if url := available.get("url"):
            lines.append(f"Release notes: {url}")
    elif ota_status and str(ota_status).lower() != "idle":
        lines.append("Flagged for update, details pending.")
    else:
        lines.append("No update available. Software is up to date.")

    return "\n".join(lines)


def format_charging_session(data: Mapping[str, Any] | None) -> str:
    """Summarize a live charging session."""
    if not data:
        return "No active charging session."

    lines = ["Charging Session"]

    def add(label: str, key: str, suffix: str = "") -> None:
        entry = data.get(key)
        value = entry.get("value") if isinstance(entry, Mapping) else None
        if value is not None:
            lines.append(f"  {label}: {display(value)}{suffix}")

    add("Battery", "soc", "%")
    add("Power", "power", " kW")
    add("Range added", "rangeAddedThisSession", " miles")
    add("Energy charged", "totalChargedEnergy", " kWh")
    add("Current", "current", " A")
    if time_elapsed := data.get("timeElapsed"):
        lines.append(f"  Time elapsed: {time_elapsed}")
    add("Time remaining", "timeRemaining", " min")

    if data.get("isRivianCharger"):
        lines.append("  Network: Rivian Adventure Network")
    if data.get("isFreeSession"):
        lines.append("  Cost: Free")
    elif price := data.get("currentPrice"):
        lines.append(f"  Cost so far: {data.get('currentCurrency') or '$'}{price}")

    add("Charger state", "vehicleChargerState")

    return "\n".join(lines)


def _parse_instant(value: Any, tz: tzinfo | None) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        instant = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return instant.astimezone(tz)


def _clock(hour: int, minute: int) -> str:
    period = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {period}"


def _session_heading(start: datetime | None, end: datetime | None) -> str:
    """Date, time window and duration; parts with an unknown instant are left out."""
    if start is None:
        return "Unknown date"
    heading = (
        f"{start:%b} {start.day}, {start.year}  {_clock(start.hour, start.minute)}"
    )
    if end is None:
        return heading

    minutes = math.floor((end - start).total_seconds() / 60 + 0.5)
    hours, mins = divmod(minutes, 60)
    duration = f"{hours}h {mins}m" if hours > 0 else f"{mins}m"
    return f"{heading}-{_clock(end.hour, end.minute)} ({duration})"


def format_charging_history(
    sessions: Sequence[Mapping[str, Any]] | None, tz: tzinfo | None = None
) -> str:
    """List completed charging sessions.

    Times are shown in ``tz``, the local timezone by default.
    """
    if sessions is None:
        return (
            "No charging history returned. "
            "Your session may have expired, try logging in again."
        )
    if not sessions:
        return "No charging history found."

    lines = [f"Charging History ({len(sessions)} sessions)", ""]

    for session in sessions:
        start = _parse_instant(session.get("startInstant"), tz)
        end = _parse_instant(session.get("endInstant"), tz)

        location = " - ".join(
            part for part in (session.get("city"), session.get("vendor")) if part
        )
        charger = (
            "Home"
            if session.get("isHomeCharger")
            else session.get("chargerType") or "Unknown"
        )

        lines.append(_session_heading(start, end))
        if location:
            lines.append(f"  Location: {location}")
        lines.append(f"  Charger: {charger}")
        if (energy := session.get("totalEnergyKwh")) is not None:
            lines.append(f"  Energy: {energy:.1f} kWh")
        if (range_km := session.get("rangeAddedKm")) is not None:
            lines.append(f"  Range added: {range_km * KM_TO_MILES:.0f} miles")
        paid = session.get("paidTotal")
        if paid is not None and paid > 0:
            code = session.get("currencyCode")
            currency = "$" if code == "USD" else f"{code} "
            lines.append(f"  Cost: {currency}{paid:.2f}")
        elif paid == 0:
            lines.append("  Cost: Free")
        lines.append("")

    return "\n".join(lines).strip()


def format_charging_schedule(data: Mapping[str, Any] | None) -> str:
    """List charging schedules with their time windows."""
    schedules = (data or {}).get("chargingSchedules") or []
    if not schedules:
        return "No charging schedules configured."

    lines = ["Charging Schedules", ""]

    for schedule in schedules:
        start = int(schedule.get("startTime") or 0)
        duration = int(schedule.get("duration") or 0)
        end = start + duration
        window = (
            f"{_clock(start // 60 % 24, start % 60)} - "
            f"{_clock(end // 60 % 24, end % 60)}"
        )
        lines.append(f"{window} ({display(duration / 60)}h)")
        lines.append(f"  Amperage: {schedule.get('amperage')}A")
        lines.append(f"  Enabled: {'Yes' if schedule.get('enabled') else 'No'}")
        if week_days := schedule.get("weekDays"):
            lines.append(f"  Days: {', '.join(week_days)}")
        if location := schedule.get("location"):
            lines.append(
                f"  Location: {display(location.get('latitude'))}, "
                f"{display(location.get('longitude'))}"
            )
        lines.append("")

    return "\n".join(lines).strip()


def format_drivers_and_keys(data: Mapping[str, Any]) -> str:
    """List invited drivers and their phone keys."""
    lines = []

    if vin := data.get("vin"):
        lines.append(f"Vehicle: {vin}")

    users = data.get("invitedUsers") or []
    if not users:
        lines.append("No drivers or keys found.")
        return "\n".join(lines)

    lines.append("")
    for user in users:
        if user.get("firstName"):
            lines.append(
                f"{user['firstName']} {user.get('lastName')} ({user.get('email')})"
            )
            if roles := user.get("roles"):
                lines.append(f"  Roles: {', '.join(roles)}")
            for device in user.get("devices") or []:
                name = device.get("deviceName") or device.get("type")
                paired = "paired" if device.get("isPaired") else "not paired"
                enabled = "enabled" if device.get("isEnabled") else "disabled"
                lines.append(f"  {name}: {paired}, {enabled}")
        else:
            lines.append(f"{user.get('email')} (invited, {user.get('status')})")
        lines.append("")

    return "\n".join(lines).strip()
