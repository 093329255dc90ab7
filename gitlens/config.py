"""Configuration loading for gitlens (.gitlens.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

CONFIG_FILE_NAME = ".gitlens.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class ConfigurationSnapshot:
    """CodeLens settings as last read from the configuration file.

    Snapshots compare by value, so two reads of an unchanged file are equal
    even though they are distinct objects.
    """

    enabled: bool = False
    recent_change_enabled: bool = False
    authors_enabled: bool = False

    @property
    def any_lens_enabled(self) -> bool:
        """True when at least one lens kind would produce output."""
        return self.recent_change_enabled or self.authors_enabled

    @property
    def active(self) -> bool:
        return self.enabled and self.any_lens_enabled


@dataclass(frozen=True)
class CustomRemoteConfig:
    """A self-hosted remote mapped to one of the known provider types."""

    type: str
    domain: str
    name: Optional[str] = None


@dataclass
class GitLensConfig:
    """Represents the settings defined in .gitlens.yml."""

    root: Path
    code_lens: ConfigurationSnapshot = field(default_factory=ConfigurationSnapshot)
    remotes: Tuple[CustomRemoteConfig, ...] = ()


def load_config(config_path: Path) -> GitLensConfig:
    """Load configuration from disk; a missing file yields every feature disabled."""
    config_file = resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GitLensConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    code_lens_data = _as_dict(data.get("code_lens"))
    code_lens = ConfigurationSnapshot(
        enabled=_as_bool(code_lens_data.get("enabled")) or False,
        recent_change_enabled=_section_enabled(code_lens_data, "recent_change"),
        authors_enabled=_section_enabled(code_lens_data, "authors"),
    )

    remotes = []
    raw_remotes = data.get("remotes")
    if isinstance(raw_remotes, list):
        for index, item in enumerate(raw_remotes):
            entry = _as_dict(item)
            remote_type = _as_str(entry.get("type"))
            domain = _as_str(entry.get("domain"))
            if not remote_type or not domain:
                raise ConfigError(f"remotes[{index}] requires both 'type' and 'domain'")
            remotes.append(
                CustomRemoteConfig(
                    type=remote_type,
                    domain=domain.lower(),
                    name=_as_str(entry.get("name")),
                )
            )

    return GitLensConfig(root=root, code_lens=code_lens, remotes=tuple(remotes))


def resolve_config_path(config_path: Path) -> Path:
    """Accept either a repository directory or a path to the file itself."""
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    if config_path.name != CONFIG_FILE_NAME:
        return (config_path.parent / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _section_enabled(parent: Dict[str, Any], key: str) -> bool:
    return _as_bool(_as_dict(parent.get(key)).get("enabled")) or False


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ConfigurationSnapshot",
    "CustomRemoteConfig",
    "GitLensConfig",
    "load_config",
    "resolve_config_path",
]
