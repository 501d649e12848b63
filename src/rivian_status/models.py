"""Vehicle state property catalog and response value shapes."""

from __future__ import annotations

import sys
from typing import Any, TypedDict

if sys.version_info >= (3, 11):
    from enum import StrEnum
else:
    from backports.strenum import StrEnum


class VehicleProperty(StrEnum):
    """Vehicle state properties known to this client.

    Names missing from this catalog can still be requested as plain strings;
    reports show them under ``Other``.
    """

    # Connectivity & location
    CLOUD_CONNECTION = "cloudConnection"
    GNSS_LOCATION = "gnssLocation"
    GNSS_ERROR = "gnssError"

    # Battery & range
    BATTERY_LEVEL = "batteryLevel"
    BATTERY_LIMIT = "batteryLimit"
    BATTERY_CAPACITY = "batteryCapacity"
    DISTANCE_TO_EMPTY = "distanceToEmpty"
    VEHICLE_MILEAGE = "vehicleMileage"
    POWER_STATE = "powerState"
    TIME_TO_END_OF_CHARGE = "timeToEndOfCharge"
    REMOTE_CHARGING_AVAILABLE = "remoteChargingAvailable"

    # Charging
    CHARGER_STATUS = "chargerStatus"
    CHARGER_STATE = "chargerState"
    CHARGE_PORT_STATE = "chargePortState"

    # Software
    OTA_AVAILABLE_VERSION = "otaAvailableVersion"
    OTA_AVAILABLE_VERSION_GIT_HASH = "otaAvailableVersionGitHash"
    OTA_CURRENT_VERSION = "otaCurrentVersion"
    OTA_CURRENT_VERSION_GIT_HASH = "otaCurrentVersionGitHash"
    OTA_STATUS = "otaStatus"
    OTA_INSTALL_READY = "otaInstallReady"
    OTA_INSTALL_PROGRESS = "otaInstallProgress"
    OTA_CURRENT_STATUS = "otaCurrentStatus"
    OTA_DOWNLOAD_PROGRESS = "otaDownloadProgress"
    OTA_INSTALL_TYPE = "otaInstallType"

    # Drive
    DRIVE_MODE = "driveMode"
    GEAR_STATUS = "gearStatus"

    # Tires
    TIRE_PRESSURE_STATUS_FRONT_LEFT = "tirePressureStatusFrontLeft"
    TIRE_PRESSURE_STATUS_FRONT_RIGHT = "tirePressureStatusFrontRight"
    TIRE_PRESSURE_STATUS_REAR_LEFT = "tirePressureStatusRearLeft"
    TIRE_PRESSURE_STATUS_REAR_RIGHT = "tirePressureStatusRearRight"

    # Doors
    DOOR_FRONT_LEFT_CLOSED = "doorFrontLeftClosed"
    DOOR_FRONT_RIGHT_CLOSED = "doorFrontRightClosed"
    DOOR_REAR_LEFT_CLOSED = "doorRearLeftClosed"
    DOOR_REAR_RIGHT_CLOSED = "doorRearRightClosed"
    DOOR_FRONT_LEFT_LOCKED = "doorFrontLeftLocked"
    DOOR_FRONT_RIGHT_LOCKED = "doorFrontRightLocked"
    DOOR_REAR_LEFT_LOCKED = "doorRearLeftLocked"
    DOOR_REAR_RIGHT_LOCKED = "doorRearRightLocked"

    # Closures
    CLOSURE_FRUNK_CLOSED = "closureFrunkClosed"
    CLOSURE_FRUNK_LOCKED = "closureFrunkLocked"
    CLOSURE_LIFTGATE_CLOSED = "closureLiftgateClosed"
    CLOSURE_LIFTGATE_LOCKED = "closureLiftgateLocked"
    CLOSURE_TAILGATE_CLOSED = "closureTailgateClosed"
    CLOSURE_TAILGATE_LOCKED = "closureTailgateLocked"
    CLOSURE_TONNEAU_CLOSED = "closureTonneauClosed"
    CLOSURE_TONNEAU_LOCKED = "closureTonneauLocked"

    # Windows
    WINDOW_FRONT_LEFT_CLOSED = "windowFrontLeftClosed"
    WINDOW_FRONT_RIGHT_CLOSED = "windowFrontRightClosed"
    WINDOW_REAR_LEFT_CLOSED = "windowRearLeftClosed"
    WINDOW_REAR_RIGHT_CLOSED = "windowRearRightClosed"

    # Climate
    CABIN_CLIMATE_INTERIOR_TEMPERATURE = "cabinClimateInteriorTemperature"
    CABIN_PRECONDITIONING_STATUS = "cabinPreconditioningStatus"
    DEFROST_DEFOG_STATUS = "defrostDefogStatus"
    PET_MODE_STATUS = "petModeStatus"

    # Security
    GEAR_GUARD_LOCKED = "gearGuardLocked"
    GEAR_GUARD_VIDEO_STATUS = "gearGuardVideoStatus"


DEFAULT_VEHICLE_STATE_PROPERTIES: tuple[str, ...] = tuple(
    prop for prop in VehicleProperty if prop is not VehicleProperty.GNSS_ERROR
)


class TimestampedValue(TypedDict, total=False):
    """Most vehicle state properties: ``{ timeStamp value }``."""

    timeStamp: str
    value: Any


class CloudConnection(TypedDict, total=False):
    """Shape of ``cloudConnection``."""

    lastSync: str
    isOnline: bool


class GnssLocation(TypedDict, total=False):
    """Shape of ``gnssLocation``."""

    latitude: float
    longitude: float
    timeStamp: str


# Property name -> raw value as returned by the vehicleState query
VehicleState = dict[str, "TimestampedValue | CloudConnection | GnssLocation"]
