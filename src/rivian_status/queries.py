"""GraphQL request bodies for the Rivian status client.

Fixed operations are built once with the gql DSL against the static schema in
``schema.py``. Vehicle state and live charging queries select a caller-chosen
set of properties whose shapes vary per property, so their selection sets are
compiled from templates instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Set as AbstractSet
from typing import Any

from gql.dsl import (
    DSLInlineFragment,
    DSLMetaField,
    DSLMutation,
    DSLQuery,
    DSLSchema,
    DSLVariableDefinitions,
    dsl_gql,
)
from graphql import build_schema, print_ast

from .const import (
    CLOUD_CONNECTION_TEMPLATE,
    LOCATION_ERROR_TEMPLATE,
    LOCATION_TEMPLATE,
    VALUE_RECORD_TEMPLATE,
    VALUE_TEMPLATE,
)
from .models import DEFAULT_VEHICLE_STATE_PROPERTIES, VehicleProperty
from .schema import RIVIAN_SCHEMA

TEMPLATE_MAP: dict[str, str] = {
    VehicleProperty.CLOUD_CONNECTION: CLOUD_CONNECTION_TEMPLATE,
    VehicleProperty.GNSS_LOCATION: LOCATION_TEMPLATE,
    VehicleProperty.GNSS_ERROR: LOCATION_ERROR_TEMPLATE,
}

LIVE_SESSION_PROPERTIES = (
    "chargerId",
    "current",
    "currentCurrency",
    "currentMiles",
    "currentPrice",
    "isFreeSession",
    "isRivianCharger",
    "kilometersChargedPerHour",
    "locationId",
    "power",
    "rangeAddedThisSession",
    "soc",
    "startTime",
    "timeElapsed",
    "timeRemaining",
    "totalChargedEnergy",
    "vehicleChargerState",
)
LIVE_SESSION_VALUE_RECORD_KEYS = {
    "current",
    "currentMiles",
    "kilometersChargedPerHour",
    "power",
    "rangeAddedThisSession",
    "soc",
    "timeRemaining",
    "totalChargedEnergy",
    "vehicleChargerState",
}

_DS = DSLSchema(build_schema(RIVIAN_SCHEMA))


def _body(
    operation_name: str,
    query: str,
    variables: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {"operationName": operation_name, "query": query, "variables": variables}


def _print(operation_name: str, operation: DSLQuery | DSLMutation) -> str:
    return print_ast(dsl_gql(**{operation_name: operation}))


def _login_response_fragment() -> DSLInlineFragment:
    return (
        DSLInlineFragment()
        .on(_DS.MobileLoginResponse)
        .select(
            _DS.MobileLoginResponse.accessToken,
            _DS.MobileLoginResponse.refreshToken,
            _DS.MobileLoginResponse.userSessionToken,
        )
    )


def _ota_details(field):
    return field.select(
        _DS.OTAUpdateDetails.url,
        _DS.OTAUpdateDetails.version,
        _DS.OTAUpdateDetails.locale,
    )


def _create_csrf_token() -> str:
    return _print(
        "CreateCSRFToken",
        DSLMutation(
            _DS.Mutation.createCsrfToken.select(
                DSLMetaField("__typename"),
                _DS.CreateCSRFTokenResponse.csrfToken,
                _DS.CreateCSRFTokenResponse.appSessionToken,
            )
        ),
    )


def _login() -> str:
    var = DSLVariableDefinitions()
    operation = DSLMutation(
        _DS.Mutation.login.args(email=var.email, password=var.password).select(
            DSLMetaField("__typename"),
            _login_response_fragment(),
            DSLInlineFragment()
            .on(_DS.MobileMFALoginResponse)
            .select(_DS.MobileMFALoginResponse.otpToken),
        )
    )
    operation.variable_definitions = var
    return _print("Login", operation)


def _login_with_otp() -> str:
    var = DSLVariableDefinitions()
    operation = DSLMutation(
        _DS.Mutation.loginWithOTP.args(
            email=var.email, otpCode=var.otpCode, otpToken=var.otpToken
        ).select(
            DSLMetaField("__typename"),
            _login_response_fragment(),
        )
    )
    operation.variable_definitions = var
    return _print("LoginWithOTP", operation)


def _get_user_info() -> str:
    return _print(
        "getUserInfo",
        DSLQuery(
            _DS.Query.currentUser.select(
                _DS.User.id,
                _DS.User.firstName,
                _DS.User.lastName,
                _DS.User.email,
                _DS.User.vehicles.select(
                    _DS.UserVehicle.id,
                    _DS.UserVehicle.vin,
                    _DS.UserVehicle.name,
                    _DS.UserVehicle.roles,
                    _DS.UserVehicle.state,
                    _DS.UserVehicle.createdAt,
                    _DS.UserVehicle.updatedAt,
                    _DS.UserVehicle.vas.select(
                        _DS.UserVehicleAccess.vasVehicleId,
                        _DS.UserVehicleAccess.vehiclePublicKey,
                    ),
                    _DS.UserVehicle.vehicle.select(
                        _DS.VehicleDetails.id,
                        _DS.VehicleDetails.vin,
                        _DS.VehicleDetails.modelYear,
                        _DS.VehicleDetails.make,
                        _DS.VehicleDetails.model,
                        _DS.VehicleDetails.expectedBuildDate,
                        _DS.VehicleDetails.plannedBuildDate,
                        _DS.VehicleDetails.otaEarlyAccessStatus,
                        _ota_details(_DS.VehicleDetails.currentOTAUpdateDetails),
                        _ota_details(_DS.VehicleDetails.availableOTAUpdateDetails),
                        _DS.VehicleDetails.vehicleState.select(
                            _DS.VehicleDetailsState.supportedFeatures.select(
                                _DS.SupportedFeature.name,
                                _DS.SupportedFeature.status,
                            )
                        ),
                    ),
                ),
                _DS.User.registrationChannels.select(_DS.RegistrationChannel.type),
            )
        ),
    )


def _get_ota_update_details() -> str:
    var = DSLVariableDefinitions()
    operation = DSLQuery(
        _DS.Query.getVehicle.args(id=var.vehicleId).select(
            _ota_details(_DS.Vehicle.availableOTAUpdateDetails),
            _ota_details(_DS.Vehicle.currentOTAUpdateDetails),
        )
    )
    operation.variable_definitions = var
    return _print("getOTAUpdateDetails", operation)


def _get_charging_history() -> str:
    summary = _DS.CompletedSessionSummary
    return _print(
        "getCompletedSessionSummaries",
        DSLQuery(
            _DS.Query.getCompletedSessionSummaries.select(
                summary.chargerType,
                summary.currencyCode,
                summary.paidTotal,
                summary.startInstant,
                summary.endInstant,
                summary.totalEnergyKwh,
                summary.rangeAddedKm,
                summary.city,
                summary.transactionId,
                summary.vehicleId,
                summary.vehicleName,
                summary.vendor,
                summary.isRoamingNetwork,
                summary.isPublic,
                summary.isHomeCharger,
            )
        ),
    )


def _get_charging_schedule() -> str:
    var = DSLVariableDefinitions()
    operation = DSLQuery(
        _DS.Query.getVehicle.args(id=var.vehicleId).select(
            _DS.Vehicle.chargingSchedules.select(
                _DS.ChargingSchedule.startTime,
                _DS.ChargingSchedule.duration,
                _DS.ChargingSchedule.location.select(
                    _DS.GeoCoordinate.latitude,
                    _DS.GeoCoordinate.longitude,
                ),
                _DS.ChargingSchedule.amperage,
                _DS.ChargingSchedule.enabled,
                _DS.ChargingSchedule.weekDays,
            )
        )
    )
    operation.variable_definitions = var
    return _print("GetChargingSchedule", operation)


def _get_drivers_and_keys() -> str:
    var = DSLVariableDefinitions()
    operation = DSLQuery(
        _DS.Query.getVehicle.args(id=var.vehicleId).select(
            DSLMetaField("__typename"),
            _DS.Vehicle.id,
            _DS.Vehicle.vin,
            _DS.Vehicle.invitedUsers.select(
                DSLMetaField("__typename"),
                DSLInlineFragment()
                .on(_DS.ProvisionedUser)
                .select(
                    _DS.ProvisionedUser.firstName,
                    _DS.ProvisionedUser.lastName,
                    _DS.ProvisionedUser.email,
                    _DS.ProvisionedUser.roles,
                    _DS.ProvisionedUser.userId,
                    _DS.ProvisionedUser.devices.select(
                        _DS.UserDevice.type,
                        _DS.UserDevice.mappedIdentityId,
                        _DS.UserDevice.id,
                        _DS.UserDevice.hrid,
                        _DS.UserDevice.deviceName,
                        _DS.UserDevice.isPaired,
                        _DS.UserDevice.isEnabled,
                    ),
                ),
                DSLInlineFragment()
                .on(_DS.UnprovisionedUser)
                .select(
                    _DS.UnprovisionedUser.email,
                    _DS.UnprovisionedUser.inviteId,
                    _DS.UnprovisionedUser.status,
                ),
            ),
        )
    )
    operation.variable_definitions = var
    return _print("DriversAndKeys", operation)


CREATE_CSRF_TOKEN_MUTATION = _create_csrf_token()
LOGIN_MUTATION = _login()
LOGIN_WITH_OTP_MUTATION = _login_with_otp()
USER_INFO_QUERY = _get_user_info()
OTA_UPDATE_DETAILS_QUERY = _get_ota_update_details()
CHARGING_HISTORY_QUERY = _get_charging_history()
CHARGING_SCHEDULE_QUERY = _get_charging_schedule()
DRIVERS_AND_KEYS_QUERY = _get_drivers_and_keys()


def create_csrf_token_body() -> dict[str, Any]:
    """Body for the CSRF handshake."""
    return _body("CreateCSRFToken", CREATE_CSRF_TOKEN_MUTATION)


def login_body(email: str, password: str) -> dict[str, Any]:
    """Body for a password login."""
    return _body("Login", LOGIN_MUTATION, {"email": email, "password": password})


def login_with_otp_body(email: str, otp_code: str, otp_token: str) -> dict[str, Any]:
    """Body for completing a login with a verification code."""
    return _body(
        "LoginWithOTP",
        LOGIN_WITH_OTP_MUTATION,
        {"email": email, "otpCode": otp_code, "otpToken": otp_token},
    )


def user_info_body() -> dict[str, Any]:
    """Body for the current user and their vehicles."""
    return _body("getUserInfo", USER_INFO_QUERY)


def ota_update_details_body(vehicle_id: str) -> dict[str, Any]:
    """Body for current and available software details."""
    return _body(
        "getOTAUpdateDetails", OTA_UPDATE_DETAILS_QUERY, {"vehicleId": vehicle_id}
    )


def charging_history_body() -> dict[str, Any]:
    """Body for completed charging session summaries."""
    return _body("getCompletedSessionSummaries", CHARGING_HISTORY_QUERY, {})


def charging_schedule_body(vehicle_id: str) -> dict[str, Any]:
    """Body for configured charging schedules."""
    return _body(
        "GetChargingSchedule", CHARGING_SCHEDULE_QUERY, {"vehicleId": vehicle_id}
    )


def drivers_and_keys_body(vehicle_id: str) -> dict[str, Any]:
    """Body for invited users and their devices."""
    return _body("DriversAndKeys", DRIVERS_AND_KEYS_QUERY, {"vehicleId": vehicle_id})


def resolve_properties(properties: Iterable[str] | None) -> tuple[str, ...]:
    """Return the requested property names, deduplicated in request order.

    Sets have no request order and are sorted by name. ``None`` or an empty
    collection selects the default catalog.
    """
    if properties is None:
        return DEFAULT_VEHICLE_STATE_PROPERTIES
    if isinstance(properties, AbstractSet):
        properties = sorted(map(str, properties))
    return tuple(dict.fromkeys(str(prop) for prop in properties)) or (
        DEFAULT_VEHICLE_STATE_PROPERTIES
    )


def build_vehicle_state_fragment(properties: Iterable[str] | None) -> list[str]:
    """Build one ``<property> <subselection>`` line per requested property."""
    return [
        f"{prop} {TEMPLATE_MAP.get(prop, VALUE_TEMPLATE)}"
        for prop in resolve_properties(properties)
    ]


def vehicle_state_body(
    vehicle_id: str, properties: Iterable[str] | None = None
) -> dict[str, Any]:
    """Body for the selected vehicle state properties."""
    fragment = "\n    ".join(build_vehicle_state_fragment(properties))
    query = (
        "query GetVehicleState($vehicleID: String!) {\n"
        "  vehicleState(id: $vehicleID) {\n"
        f"    {fragment}\n"
        "  }\n"
        "}"
    )
    return _body("GetVehicleState", query, {"vehicleID": vehicle_id})


def live_charging_session_body(vehicle_id: str) -> dict[str, Any]:
    """Body for the active charging session, if any."""
    fragment = "\n    ".join(
        f"{prop} {VALUE_RECORD_TEMPLATE}"
        if prop in LIVE_SESSION_VALUE_RECORD_KEYS
        else prop
        for prop in LIVE_SESSION_PROPERTIES
    )
    query = (
        "query getLiveSessionData($vehicleId: ID!) {\n"
        "  getLiveSessionData(vehicleId: $vehicleId) {\n"
        "    __typename\n"
        f"    {fragment}\n"
        "  }\n"
        "}"
    )
    return _body("getLiveSessionData", query, {"vehicleId": vehicle_id})
