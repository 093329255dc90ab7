"""In-process stand-ins for the editor host: lens registration, command context, URL opening."""

from __future__ import annotations

import asyncio
import webbrowser
from typing import Any, Dict, List, Sequence, Tuple

from .events import Disposable
from .logging import get_logger

Selector = Sequence[str]


class CommandContext:
    """Context keys published to the host."""

    CAN_TOGGLE_CODE_LENS = "gitlens:canToggleCodeLens"


class CommandContextStore:
    """Holds the flags that decide which commands the host offers."""

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)


class LensRegistry:
    """Tracks which lens providers are bound to which document schemes."""

    def __init__(self) -> None:
        self._entries: List[Tuple[Tuple[str, ...], Any]] = []
        self.logger = get_logger("host")

    @property
    def registrations(self) -> List[Tuple[Tuple[str, ...], Any]]:
        return list(self._entries)

    def register(self, selector: Selector, provider: Any) -> Disposable:
        """Bind ``provider`` to ``selector``; disposing the handle unbinds it."""
        entry = (tuple(selector), provider)
        self._entries.append(entry)
        self.logger.debug("Registered %s for %s", type(provider).__name__, ", ".join(entry[0]))

        def _unregister() -> None:
            # Identity match; two equal providers may be registered at once.
            for index, existing in enumerate(self._entries):
                if existing is entry:
                    del self._entries[index]
                    break

        return Disposable(_unregister)

    def providers_for(self, scheme: str) -> List[Any]:
        return [provider for selector, provider in self._entries if scheme in selector]


async def open_url(url: str) -> bool:
    """Open ``url`` in the system browser without blocking the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, webbrowser.open, url)


__all__ = [
    "CommandContext",
    "CommandContextStore",
    "LensRegistry",
    "Selector",
    "open_url",
]
