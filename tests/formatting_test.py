"""Tests for `rivian_status.formatting`."""

from __future__ import annotations

from datetime import timezone

from rivian_status.formatting import (
    format_charging_history,
    format_charging_schedule,
    format_charging_session,
    format_drivers_and_keys,
    format_ota_status,
    format_user_info,
    format_vehicle_state,
)

from .responses import (
    CHARGING_HISTORY_RESPONSE,
    DRIVERS_AND_KEYS_RESPONSE,
    LIVE_SESSION_RESPONSE,
    USER_INFORMATION_RESPONSE,
)


def _value(value):
    return {"timeStamp": "2024-11-01T10:00:00Z", "value": value}


FULL_STATE = {
    "batteryLevel": _value(80.0),
    "batteryLimit": _value(85),
    "distanceToEmpty": _value(250),
    "powerState": _value("ready"),
    "chargerState": _value("charging_active"),
    "doorFrontLeftClosed": _value("closed"),
    "doorFrontLeftLocked": _value("locked"),
    "doorRearRightClosed": _value("open"),
    "doorRearRightLocked": _value(""),
    "closureFrunkClosed": _value("closed"),
    "windowFrontLeftClosed": _value("closed"),
    "windowRearLeftClosed": _value(None),
    "cabinClimateInteriorTemperature": _value(21.5),
    "tirePressureStatusFrontLeft": _value("OK"),
    "otaCurrentVersion": _value("2024.43.0"),
    "gearGuardLocked": _value("locked"),
    "gearStatus": _value("park"),
    "cloudConnection": {"lastSync": "2024-11-01T10:00:00Z", "isOnline": True},
    "gnssLocation": {"latitude": 40.5, "longitude": -89.1, "timeStamp": "t"},
    "brandNewSignal": _value(7),
}


def test_door_pair_combination() -> None:
    """Closed and locked states share one line with only truthy parts."""
    report = format_vehicle_state(
        {
            "doorFrontLeftClosed": {"value": True},
            "doorFrontLeftLocked": {"value": False},
        }
    )
    assert report == "Doors\n  front left: true"


def test_door_pair_all_falsy() -> None:
    """A door with no truthy state renders nothing, not even under Other."""
    report = format_vehicle_state(
        {
            "doorFrontLeftClosed": {"value": False},
            "doorFrontLeftLocked": {"value": None},
        }
    )
    assert report == ""


def test_full_report() -> None:
    """Sections appear in a fixed order with labels and units."""
    report = format_vehicle_state(FULL_STATE)
    assert report == "\n".join(
        [
            "Battery & Range",
            "  Battery: 80%",
            "  Charge limit: 85%",
            "  Range: 250 miles",
            "  Power: ready",
            "",
            "Charging",
            "  Charger state: charging_active",
            "",
            "Doors",
            "  front left: closed, locked",
            "  rear right: open",
            "",
            "Closures",
            "  frunk: closed",
            "",
            "Windows",
            "  front left: closed",
            "",
            "Climate",
            "  Cabin temp: 21.5°",
            "",
            "Tire Pressure",
            "  front left: OK",
            "",
            "Software",
            "  Current version: 2024.43.0",
            "",
            "Security",
            "  Gear Guard: locked",
            "",
            "Drive",
            "  Gear: park",
            "",
            "Connection",
            "  Status: Online (last sync: 2024-11-01T10:00:00Z)",
            "",
            "Location",
            "  40.5, -89.1",
            "",
            "Other",
            "  brandNewSignal: 7",
        ]
    )


def test_every_key_reported_once() -> None:
    """Each key with a value shows up exactly once."""
    report = format_vehicle_state(FULL_STATE)
    assert report.count("brandNewSignal") == 1
    assert report.count("Battery:") == 1
    assert "windowRearLeftClosed" not in report
    assert "doorRearRightLocked" not in report


def test_rendering_is_idempotent() -> None:
    """Rendering the same map twice gives identical output."""
    assert format_vehicle_state(FULL_STATE) == format_vehicle_state(FULL_STATE)


def test_untriggered_section_falls_back_to_other() -> None:
    """Keys of a section without its trigger keys are not lost."""
    report = format_vehicle_state(
        {"batteryLimit": _value(90), "gearGuardVideoStatus": _value("off")}
    )
    assert report == "Other\n  batteryLimit: 90\n  gearGuardVideoStatus: off"


def test_no_empty_section_headers() -> None:
    """A triggered section whose values are all null is omitted."""
    assert format_vehicle_state({"batteryLevel": _value(None)}) == ""


def test_other_uses_raw_values() -> None:
    """Unwrapped scalars and nested objects are rendered verbatim."""
    report = format_vehicle_state(
        {"plainScalar": 3, "flag": {"value": False}, "nested": {"a": 1}}
    )
    assert report == '\n'.join(
        ["Other", "  plainScalar: 3", "  flag: false", '  nested: {"a": 1}']
    )


def test_connection_offline() -> None:
    """A missing last sync only shows the status."""
    report = format_vehicle_state({"cloudConnection": {"isOnline": False}})
    assert report == "Connection\n  Status: Offline"


def test_location_needs_both_coordinates() -> None:
    """Location is consumed but hidden when a coordinate is missing."""
    assert format_vehicle_state({"gnssLocation": {"latitude": 40.5}}) == ""


def test_format_user_info() -> None:
    """Test user info summary."""
    report = format_user_info(USER_INFORMATION_RESPONSE["data"]["currentUser"])
    assert report.splitlines() == [
        "Ada Lovelace (ada@example.com)",
        "",
        "Blue Bird",
        "  2024 Rivian R1S",
        "  VIN: 7FCTGAAL0NN000001",
        "  OTA early access: Yes",
        "  Software: v2024.43.0",
        "  Software is up to date",
    ]


def test_format_user_info_without_vehicles() -> None:
    """Accounts without vehicles say so."""
    report = format_user_info({"firstName": "A", "lastName": "B", "email": "c"})
    assert report.endswith("No vehicles on this account.")


def test_format_ota_status() -> None:
    """Test OTA status variants."""
    current = {"currentOTAUpdateDetails": {"version": "2024.43.0"}}
    assert format_ota_status(current) == (
        "Current software: v2024.43.0\nNo update available. Software is up to date."
    )
    assert format_ota_status(
        {
            **current,
            "availableOTAUpdateDetails": {
                "version": "2024.47.0",
                "url": "https://rivian.com/ota",
            },
        }
    ) == (
        "Current software: v2024.43.0\n"
        "Update available: v2024.47.0\n"
        "Release notes: https://rivian.com/ota"
    )
    assert format_ota_status({}, {"otaStatus": {"value": "Downloading"}}) == (
        "Current software: unknown\n"
        "OTA status: Downloading\n"
        "Flagged for update, details pending."
    )
    assert format_ota_status(current, {"otaStatus": {"value": "Idle"}}).endswith(
        "Software is up to date."
    )


def test_format_charging_session() -> None:
    """Test live charging session summary."""
    report = format_charging_session(LIVE_SESSION_RESPONSE["data"]["getLiveSessionData"])
    assert report.splitlines() == [
        "Charging Session",
        "  Battery: 55%",
        "  Power: 11.5 kW",
        "  Time elapsed: 01:10:00",
        "  Cost so far: $4.20",
    ]
    assert format_charging_session(None) == "No active charging session."


def test_format_charging_history() -> None:
    """Test completed sessions summary."""
    report = format_charging_history(
        CHARGING_HISTORY_RESPONSE["data"]["getCompletedSessionSummaries"],
        tz=timezone.utc,
    )
    assert report.splitlines() == [
        "Charging History (1 sessions)",
        "",
        "Jan 5, 2025  2:00 PM-3:30 PM (1h 30m)",
        "  Location: Normal - RAN",
        "  Charger: DCFC",
        "  Energy: 42.1 kWh",
        "  Range added: 62 miles",
        "  Cost: $12.50",
    ]
    assert format_charging_history([]) == "No charging history found."
    assert format_charging_history(None).startswith("No charging history returned.")


def test_format_charging_history_free_home_session() -> None:
    """Home sessions without cost are labelled accordingly."""
    report = format_charging_history(
        [
            {
                "startInstant": "2025-01-05T23:50:00+00:00",
                "endInstant": "2025-01-06T00:35:00+00:00",
                "isHomeCharger": True,
                "paidTotal": 0,
            }
        ],
        tz=timezone.utc,
    )
    assert "Jan 5, 2025  11:50 PM-12:35 AM (45m)" in report
    assert "  Charger: Home" in report
    assert "  Cost: Free" in report


def test_format_charging_schedule() -> None:
    """Schedules show a 12-hour window wrapping past midnight."""
    report = format_charging_schedule(
        {
            "chargingSchedules": [
                {
                    "startTime": 1320,
                    "duration": 480,
                    "amperage": 48,
                    "enabled": True,
                    "weekDays": ["Monday", "Tuesday"],
                    "location": {"latitude": 40.5, "longitude": -89.0},
                }
            ]
        }
    )
    assert report.splitlines() == [
        "Charging Schedules",
        "",
        "10:00 PM - 6:00 AM (8h)",
        "  Amperage: 48A",
        "  Enabled: Yes",
        "  Days: Monday, Tuesday",
        "  Location: 40.5, -89",
    ]
    assert format_charging_schedule({}) == "No charging schedules configured."


def test_format_drivers_and_keys() -> None:
    """Test drivers and keys listing."""
    report = format_drivers_and_keys(DRIVERS_AND_KEYS_RESPONSE["data"]["getVehicle"])
    assert report.splitlines() == [
        "Vehicle: 7FCTGAAL0NN000001",
        "",
        "Ada Lovelace (ada@example.com)",
        "  Roles: primary-owner",
        "  Ada's iPhone: paired, enabled",
        "",
        "guest@example.com (invited, PENDING)",
    ]
    assert format_drivers_and_keys({}) == "No drivers or keys found."


def test_labelled_field_without_value() -> None:
    """A timestamp without a value is treated as missing, not rendered raw."""
    report = format_vehicle_state(
        {
            "batteryLevel": {"timeStamp": "t"},
            "distanceToEmpty": _value(250),
            "doorFrontLeftClosed": {"timeStamp": "t"},
            "doorFrontLeftLocked": _value("locked"),
        }
    )
    assert report == "\n".join(
        [
            "Battery & Range",
            "  Range: 250 miles",
            "",
            "Doors",
            "  front left: locked",
        ]
    )


def test_format_charging_history_missing_instants() -> None:
    """Sessions without an end or start time still render."""
    report = format_charging_history(
        [
            {
                "startInstant": "2025-01-05T14:00:00Z",
                "endInstant": None,
                "chargerType": "DCFC",
            },
            {"startInstant": None, "endInstant": "2025-01-05T15:30:00Z"},
        ],
        tz=timezone.utc,
    )
    assert report.splitlines() == [
        "Charging History (2 sessions)",
        "",
        "Jan 5, 2025  2:00 PM",
        "  Charger: DCFC",
        "",
        "Unknown date",
        "  Charger: Unknown",
    ]
