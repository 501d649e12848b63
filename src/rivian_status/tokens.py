"""In-memory store for Rivian session tokens."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

# dataclass field -> key in exported snapshots
_SNAPSHOT_KEYS = {
    "csrf_token": "csrfToken",
    "app_session_token": "appSessionToken",
    "access_token": "accessToken",
    "refresh_token": "refreshToken",
    "user_session_token": "userSessionToken",
    "otp_token": "otpToken",
}


@dataclass
class SessionTokens:
    """Opaque tokens making up one Rivian session.

    An outstanding ``otp_token`` and a granted ``access_token`` are mutually
    exclusive: the auth flow clears one whenever it sets the other.
    """

    csrf_token: str = ""
    app_session_token: str = ""
    access_token: str = ""
    refresh_token: str = ""
    user_session_token: str = ""
    otp_token: str = ""

    @property
    def is_authenticated(self) -> bool:
        """Return whether an access token has been granted."""
        return bool(self.access_token)

    @property
    def needs_otp(self) -> bool:
        """Return whether a verification code challenge is outstanding."""
        return bool(self.otp_token) and not self.access_token

    def as_dict(self) -> dict[str, Any]:
        """Export the tokens as a plain snapshot."""
        snapshot: dict[str, Any] = {
            key: getattr(self, attr) for attr, key in _SNAPSHOT_KEYS.items()
        }
        snapshot["authenticated"] = self.is_authenticated
        snapshot["needsOtp"] = self.needs_otp
        return snapshot

    @classmethod
    def from_dict(cls, snapshot: dict[str, Any]) -> SessionTokens:
        """Build tokens from a snapshot, ignoring unknown keys."""
        return cls(
            **{attr: snapshot.get(key) or "" for attr, key in _SNAPSHOT_KEYS.items()}
        )

    def update(self, other: SessionTokens) -> None:
        """Replace every token with the one held by ``other``."""
        for field in fields(self):
            setattr(self, field.name, getattr(other, field.name))

    def clear(self) -> None:
        """Forget every token."""
        self.update(SessionTokens())
