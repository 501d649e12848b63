"""Persist Rivian session tokens between runs."""

from __future__ import annotations

import json
import logging
import os
import stat
import sys
import tempfile
import time
from collections.abc import Callable
from pathlib import Path

from .auth import RivianAuth
from .const import CONFIG_DIR, ENV_SESSION_FILE, SESSION_FILE, SESSION_MAX_AGE_MS
from .exceptions import RivianPersistenceError

if sys.version_info >= (3, 11):
    from enum import StrEnum
else:
    from backports.strenum import StrEnum

_LOGGER = logging.getLogger(__name__)


class SessionStatus(StrEnum):
    """Outcome of loading a persisted session."""

    AUTHENTICATED = "authenticated"
    NEEDS_OTP = "needs_otp"
    ABSENT = "absent"


def default_session_path() -> Path:
    """Session file location, overridable through the environment."""
    if override := os.environ.get(ENV_SESSION_FILE):
        return Path(override).expanduser()
    return SESSION_FILE


class SessionStore:
    """Read and write the session file.

    The file is JSON holding the exported tokens plus ``savedAt`` in
    milliseconds since the epoch. Sessions older than seven days are ignored.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = Path(path) if path is not None else default_session_path()
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _warn_if_exposed(self) -> None:
        if os.name == "nt":
            return
        try:
            mode = self.path.stat().st_mode
        except OSError as err:
            _LOGGER.warning("Could not stat session file %s: %s", self.path, err)
            return
        if mode & (stat.S_IRWXG | stat.S_IRWXO):
            _LOGGER.warning(
                '%s is readable by other users. Run: chmod 600 "%s"',
                self.path,
                self.path,
            )

    def load(self, auth: RivianAuth) -> SessionStatus:
        """Restore the persisted session into ``auth`` if it is still usable."""
        if not self.path.exists():
            return SessionStatus.ABSENT

        self._warn_if_exposed()

        try:
            snapshot = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as err:
            _LOGGER.warning("Could not read session file %s: %s", self.path, err)
            return SessionStatus.ABSENT
        if not isinstance(snapshot, dict):
            _LOGGER.warning("Ignoring malformed session file %s", self.path)
            return SessionStatus.ABSENT

        saved_at = snapshot.get("savedAt")
        if (
            isinstance(saved_at, (int, float))
            and saved_at
            and self._now_ms() - saved_at > SESSION_MAX_AGE_MS
        ):
            _LOGGER.warning("Session expired. Please log in again.")
            return SessionStatus.ABSENT

        if snapshot.get("authenticated"):
            auth.restore_session(snapshot)
            return SessionStatus.AUTHENTICATED
        if snapshot.get("needsOtp"):
            auth.restore_session(snapshot)
            return SessionStatus.NEEDS_OTP
        return SessionStatus.ABSENT

    def save(self, auth: RivianAuth) -> None:
        """Write the current session, owner read/write only.

        Raises:
            RivianPersistenceError: If the directory or file cannot be written.
                The in-memory session is left untouched.
        """
        snapshot = {**auth.export_session(), "savedAt": self._now_ms()}
        directory = self.path.parent
        try:
            # Only directories owned by this client are narrowed to 0700
            if not directory.exists() or directory == CONFIG_DIR:
                directory.mkdir(mode=0o700, parents=True, exist_ok=True)
                directory.chmod(0o700)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as file:
                    json.dump(snapshot, file, indent=2)
                os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as err:
            raise RivianPersistenceError(
                f"Could not save session to {self.path}: {err}"
            ) from err
        _LOGGER.debug("Session saved to %s", self.path)
