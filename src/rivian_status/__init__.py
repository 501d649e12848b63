"""Asynchronous read-only Python client for the Rivian API."""

from .auth import AuthState, RivianAuth
from .formatting import format_vehicle_state
from .models import VehicleProperty
from .rivian import Rivian
from .storage import SessionStatus, SessionStore
from .tokens import SessionTokens
from .tools import RivianTools

__all__ = [
    "AuthState",
    "Rivian",
    "RivianAuth",
    "RivianTools",
    "SessionStatus",
    "SessionStore",
    "SessionTokens",
    "VehicleProperty",
    "format_vehicle_state",
]
