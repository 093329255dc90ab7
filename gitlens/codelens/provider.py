"""The annotation provider bound to documents while CodeLens is active."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from ..config import ConfigurationSnapshot


@dataclass(frozen=True)
class CodeLens:
    file_name: str
    line: int
    kind: str


class GitCodeLensProvider:
    """Produces per-file lenses and caches them until :meth:`reset`.

    ``settings`` is read whenever lenses are rebuilt, so a reset after a
    configuration change picks up the new lens kinds.
    """

    selector: Tuple[str, ...] = ("file", "git", "gitlens-git")

    RECENT_CHANGE = "recent_change"
    AUTHORS = "authors"

    def __init__(self, settings: Callable[[], ConfigurationSnapshot]) -> None:
        self._settings = settings
        self._cache: Dict[str, List[CodeLens]] = {}
        self.generation = 0

    def provide_code_lenses(self, file_name: str) -> List[CodeLens]:
        cached = self._cache.get(file_name)
        if cached is None:
            cached = self._build(file_name)
            self._cache[file_name] = cached
        return list(cached)

    def reset(self) -> None:
        """Drop cached lenses; the next request recomputes them."""
        self._cache.clear()
        self.generation += 1

    def _build(self, file_name: str) -> List[CodeLens]:
        config = self._settings()
        lenses = []
        if config.recent_change_enabled:
            lenses.append(CodeLens(file_name=file_name, line=1, kind=self.RECENT_CHANGE))
        if config.authors_enabled:
            lenses.append(CodeLens(file_name=file_name, line=1, kind=self.AUTHORS))
        return lenses
