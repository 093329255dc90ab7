"""Signals when the repository data behind cached annotations changes."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

from ..events import Emitter
from ..logging import get_logger


class GitCacheWatcher:
    """Polls HEAD and the working tree status and fires when either moves."""

    def __init__(self, repo_path: str | Path, runner: Callable[..., str] | None = None) -> None:
        self._repo = Path(repo_path)
        self._runner = runner or self._default_runner
        self._fingerprint: Optional[str] = None
        self.on_did_change_git_cache = Emitter()
        self.logger = get_logger("git.cache")

    @property
    def repo_path(self) -> Path:
        return self._repo

    def fingerprint(self) -> str:
        head = self._run(["git", "rev-parse", "HEAD"]).strip()
        status = self._run(["git", "status", "--porcelain"])
        return f"{head}\n{status}"

    def poll(self) -> bool:
        """Return True (and fire) when the repository changed since the last poll.

        The first poll only records the current state.
        """
        fingerprint = self.fingerprint()
        previous, self._fingerprint = self._fingerprint, fingerprint
        if previous is None or previous == fingerprint:
            return False
        self.logger.debug("Repository state changed in %s", self._repo)
        self.on_did_change_git_cache.fire()
        return True

    def invalidate(self) -> None:
        self.on_did_change_git_cache.fire()

    def dispose(self) -> None:
        self.on_did_change_git_cache.dispose()

    # ------------------------------------------------------------------
    # Internals

    def _run(self, args: Iterable[str]) -> str:
        return self._runner(args, cwd=self._repo, capture_output=True)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        import subprocess

        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


__all__ = ["GitCacheWatcher"]
