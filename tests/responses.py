"""Response tests data."""

from __future__ import annotations

from typing import Any

CSRF_TOKEN_RESPONSE = {
    "data": {
        "createCsrfToken": {
            "__typename": "CreateCsrfTokenResponse",
            "csrfToken": "valid_csrf_token",
            "appSessionToken": "valid_app_session_token",
        }
    }
}
AUTHENTICATION_RESPONSE = {
    "data": {
        "login": {
            "__typename": "MobileLoginResponse",
            "accessToken": "valid_access_token",
            "refreshToken": "valid_refresh_token",
            "userSessionToken": "valid_user_session_token",
        }
    }
}
OTP_TOKEN_RESPONSE = {
    "data": {
        "login": {
            "__typename": "MobileMFALoginResponse",
            "otpToken": "otp_token",
        }
    }
}
AUTHENTICATION_OTP_RESPONSE = {
    "data": {
        "loginWithOTP": {
            "__typename": "MobileLoginResponse",
            "accessToken": "otp_access_token",
            "refreshToken": "otp_refresh_token",
            "userSessionToken": "otp_user_session_token",
        }
    }
}
USER_INFORMATION_RESPONSE = {
    "data": {
        "currentUser": {
            "__typename": "User",
            "id": "user-id",
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "vehicles": [
                {
                    "id": "vehicle-id",
                    "vin": "7FCTGAAL0NN000001",
                    "name": "Blue Bird",
                    "roles": ["primary-owner"],
                    "vehicle": {
                        "modelYear": 2024,
                        "make": "Rivian",
                        "model": "R1S",
                        "otaEarlyAccessStatus": "OPTED_IN",
                        "currentOTAUpdateDetails": {
                            "url": "https://rivian.com/ota/2024.43",
                            "version": "2024.43.0",
                            "locale": "en_US",
                        },
                        "availableOTAUpdateDetails": None,
                    },
                }
            ],
            "registrationChannels": [{"type": "EMAIL"}],
        }
    }
}
VEHICLE_STATE_RESPONSE = {
    "data": {
        "vehicleState": {
            "batteryLevel": {"timeStamp": "2024-11-01T10:00:00Z", "value": 80.0},
            "distanceToEmpty": {"timeStamp": "2024-11-01T10:00:00Z", "value": 250},
            "cloudConnection": {"lastSync": "2024-11-01T10:00:00Z", "isOnline": True},
        }
    }
}
OTA_DETAILS_RESPONSE = {
    "data": {
        "getVehicle": {
            "availableOTAUpdateDetails": {
                "url": "https://rivian.com/ota/2024.47",
                "version": "2024.47.0",
                "locale": "en_US",
            },
            "currentOTAUpdateDetails": {
                "url": "https://rivian.com/ota/2024.43",
                "version": "2024.43.0",
                "locale": "en_US",
            },
        }
    }
}
LIVE_SESSION_RESPONSE = {
    "data": {
        "getLiveSessionData": {
            "__typename": "LiveSessionData",
            "soc": {"__typename": "ValueRecord", "value": 55, "updatedAt": "t"},
            "power": {"__typename": "ValueRecord", "value": 11.5, "updatedAt": "t"},
            "timeElapsed": "01:10:00",
            "isRivianCharger": False,
            "isFreeSession": False,
            "currentPrice": "4.20",
            "currentCurrency": "$",
        }
    }
}
CHARGING_HISTORY_RESPONSE = {
    "data": {
        "getCompletedSessionSummaries": [
            {
                "chargerType": "DCFC",
                "currencyCode": "USD",
                "paidTotal": 12.5,
                "startInstant": "2025-01-05T14:00:00Z",
                "endInstant": "2025-01-05T15:30:00Z",
                "totalEnergyKwh": 42.123,
                "rangeAddedKm": 100,
                "city": "Normal",
                "vendor": "RAN",
                "isHomeCharger": False,
            }
        ]
    }
}
DRIVERS_AND_KEYS_RESPONSE = {
    "data": {
        "getVehicle": {
            "__typename": "Vehicle",
            "id": "vehicle-id",
            "vin": "7FCTGAAL0NN000001",
            "invitedUsers": [
                {
                    "__typename": "ProvisionedUser",
                    "firstName": "Ada",
                    "lastName": "Lovelace",
                    "email": "ada@example.com",
                    "roles": ["primary-owner"],
                    "userId": "user-id",
                    "devices": [
                        {
                            "type": "phone/ios",
                            "deviceName": "Ada's iPhone",
                            "isPaired": True,
                            "isEnabled": True,
                        }
                    ],
                },
                {
                    "__typename": "UnprovisionedUser",
                    "email": "guest@example.com",
                    "inviteId": "invite-id",
                    "status": "PENDING",
                },
            ],
        }
    }
}


def error_response(
    code: str | None = None, reason: str | None = None, message: str | None = None
) -> dict[str, Any]:
    """Return an error response."""
    error: dict[str, Any] = (
        {"extensions": {"code": code, "reason": reason or code}} if code else {}
    )
    if message:
        error["message"] = message
    return {"errors": [error], "data": None}


class RecordingTransport:
    """Transport double returning queued ``data`` payloads or raising errors."""

    def __init__(self, *responses: dict[str, Any] | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict[str, Any], dict[str, str]]] = []

    async def execute(
        self,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        self.calls.append((url, body, headers or {}))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response["data"] if "data" in response else response
