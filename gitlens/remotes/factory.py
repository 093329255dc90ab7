"""Maps remote hosts to the provider that knows their URL grammar."""

from __future__ import annotations

from importlib import metadata
from typing import Dict, Iterable, Optional, Sequence, Type

from ..config import CustomRemoteConfig
from ..logging import get_logger
from .bitbucket import BitbucketService
from .bitbucket_server import BitbucketServerService
from .github import GitHubService
from .gitlab import GitLabService
from .provider import RemoteProvider, UrlOpener
from .visualstudio import VisualStudioService

_ENTRY_POINT_GROUP = "gitlens.remotes"

_BUILTIN_TYPES: Dict[str, Type[RemoteProvider]] = {
    "github": GitHubService,
    "gitlab": GitLabService,
    "bitbucket": BitbucketService,
    "bitbucketserver": BitbucketServerService,
    "visualstudio": VisualStudioService,
}

_DOMAIN_TYPES: Dict[str, str] = {
    "github.com": "github",
    "gitlab.com": "gitlab",
    "bitbucket.org": "bitbucket",
    "dev.azure.com": "visualstudio",
}

_DOMAIN_SUFFIX_TYPES: Dict[str, str] = {
    ".visualstudio.com": "visualstudio",
}


class UnknownRemoteTypeError(ValueError):
    """Raised when a configured remote names a provider type nobody registered."""


def discover_provider_types() -> Dict[str, Type[RemoteProvider]]:
    """Return built-in provider classes plus any from the ``gitlens.remotes`` entry points."""
    types: Dict[str, Type[RemoteProvider]] = dict(_BUILTIN_TYPES)
    for entry in _iter_entry_points():
        key = entry.name.lower()
        if key in types:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load remote provider entry point '{entry.name}': {exc}") from exc
        if not (isinstance(loaded, type) and issubclass(loaded, RemoteProvider)):
            raise TypeError(f"Remote provider entry point '{entry.name}' must be a RemoteProvider subclass")
        types[key] = loaded
    return types


class RemoteProviderFactory:
    """Builds :class:`RemoteProvider` instances for ``(domain, path)`` pairs.

    Custom remotes from the configuration take precedence over the built-in
    domain table and are flagged ``custom`` so their names carry the host.
    """

    def __init__(
        self,
        custom_remotes: Sequence[CustomRemoteConfig] = (),
        *,
        opener: Optional[UrlOpener] = None,
    ) -> None:
        self._types = discover_provider_types()
        self._opener = opener
        self._custom: Dict[str, CustomRemoteConfig] = {}
        for remote in custom_remotes:
            if _normalise_type(remote.type) not in self._types:
                raise UnknownRemoteTypeError(
                    f"Unknown remote type '{remote.type}' for domain {remote.domain}"
                )
            self._custom[remote.domain.lower()] = remote
        self.logger = get_logger("remotes.factory")

    def create(self, domain: str, path: str) -> Optional[RemoteProvider]:
        domain = domain.lower()
        custom = self._custom.get(domain)
        if custom is not None:
            provider_type = self._types[_normalise_type(custom.type)]
            return provider_type(domain, path, custom.name, True, opener=self._opener)

        key = _DOMAIN_TYPES.get(domain)
        if key is None:
            for suffix, candidate in _DOMAIN_SUFFIX_TYPES.items():
                if domain.endswith(suffix):
                    key = candidate
                    break
        if key is None:
            self.logger.debug("No remote provider registered for %s", domain)
            return None
        return self._types[key](domain, path, opener=self._opener)


def _normalise_type(name: str) -> str:
    return name.replace(" ", "").replace("_", "").replace("-", "").lower()


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "RemoteProviderFactory",
    "UnknownRemoteTypeError",
    "discover_provider_types",
]
