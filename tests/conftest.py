from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from gitlens.host import CommandContextStore, LensRegistry


def _render_config(enabled: bool, recent_change: bool, authors: bool, extra: str = "") -> str:
    def flag(value: bool) -> str:
        return "true" if value else "false"

    return (
        "code_lens:\n"
        f"  enabled: {flag(enabled)}\n"
        "  recent_change:\n"
        f"    enabled: {flag(recent_change)}\n"
        "  authors:\n"
        f"    enabled: {flag(authors)}\n"
        f"{extra}"
    )


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write a .gitlens.yml into tmp_path with the given CodeLens switches."""

    def _write(
        *,
        enabled: bool = True,
        recent_change: bool = True,
        authors: bool = False,
        extra: str = "",
    ) -> Path:
        path = tmp_path / ".gitlens.yml"
        path.write_text(_render_config(enabled, recent_change, authors, extra), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def registry() -> LensRegistry:
    return LensRegistry()


@pytest.fixture
def command_context() -> CommandContextStore:
    return CommandContextStore()
