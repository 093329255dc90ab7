"""File-backed configuration source that announces edits."""

from __future__ import annotations

from hashlib import sha256
from pathlib import Path

from .config import GitLensConfig, load_config, resolve_config_path
from .events import Emitter
from .logging import get_logger

_MISSING = "missing"


class SettingsSource:
    """Serves the current settings and fires ``on_did_change`` when the file changes.

    The change notification carries no payload; listeners call :meth:`get`
    to read the whole configuration again. Any edit to the file fires, even
    one that touches keys nobody listens to.
    """

    def __init__(self, config_path: Path) -> None:
        self._path = resolve_config_path(Path(config_path))
        self.on_did_change = Emitter()
        self._fingerprint = self._compute_fingerprint()
        self.logger = get_logger("settings")

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> GitLensConfig:
        return load_config(self._path)

    def poll(self) -> bool:
        """Fire ``on_did_change`` if the file differs from the last poll."""
        fingerprint = self._compute_fingerprint()
        if fingerprint == self._fingerprint:
            return False
        self._fingerprint = fingerprint
        self.logger.debug("Settings file %s changed", self._path)
        self.on_did_change.fire()
        return True

    def notify(self) -> None:
        """Fire ``on_did_change`` regardless of the file state."""
        self._fingerprint = self._compute_fingerprint()
        self.on_did_change.fire()

    def dispose(self) -> None:
        self.on_did_change.dispose()

    def _compute_fingerprint(self) -> str:
        try:
            payload = self._path.read_bytes()
        except FileNotFoundError:
            return _MISSING
        return sha256(payload).hexdigest()


__all__ = ["SettingsSource"]
