"""Constants for the Rivian status client."""

from __future__ import annotations

from pathlib import Path

GRAPHQL_BASEPATH = "https://rivian.com/api/gql"
GRAPHQL_GATEWAY = GRAPHQL_BASEPATH + "/gateway/graphql"
GRAPHQL_CHARGING = GRAPHQL_BASEPATH + "/chrg/user/graphql"

APOLLO_CLIENT_NAME = "com.rivian.ios.consumer-apollo-ios"

BASE_HEADERS = {
    "User-Agent": "RivianApp/707 CFNetwork/1237 Darwin/20.4.0",
    "Accept": "application/json",
    "Content-Type": "application/json",
    "Apollographql-Client-Name": APOLLO_CLIENT_NAME,
}

CLOUD_CONNECTION_TEMPLATE = "{ lastSync isOnline }"
# isAuthorized is intentionally not requested
LOCATION_TEMPLATE = "{ latitude longitude timeStamp }"
LOCATION_ERROR_TEMPLATE = (
    "{ timeStamp positionVertical positionHorizontal speed bearing }"
)
VALUE_TEMPLATE = "{ timeStamp value }"
VALUE_RECORD_TEMPLATE = "{ __typename value updatedAt }"

CONFIG_DIR = Path.home() / ".rivian-status"
SESSION_FILE = CONFIG_DIR / "session.json"
SESSION_MAX_AGE_MS = 7 * 24 * 60 * 60 * 1000

ENV_EMAIL = "RIVIAN_EMAIL"
ENV_PASSWORD = "RIVIAN_PASSWORD"
ENV_SESSION_FILE = "RIVIAN_SESSION_FILE"

KM_TO_MILES = 0.621371
