"""Tests for mapping remotes onto hosting providers."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from gitlens.config import CustomRemoteConfig
from gitlens.remotes import (
    BitbucketServerService,
    GitHubService,
    GitLabService,
    RemoteProviderFactory,
    UnknownRemoteTypeError,
    VisualStudioService,
    discover_provider_types,
)


def test_builtin_domains_resolve() -> None:
    factory = RemoteProviderFactory()

    assert isinstance(factory.create("github.com", "owner/repo"), GitHubService)
    assert isinstance(factory.create("GitLab.com", "group/repo"), GitLabService)
    assert isinstance(factory.create("contoso.visualstudio.com", "_git/repo"), VisualStudioService)
    assert factory.create("git.unknown.org", "owner/repo") is None


def test_custom_remote_takes_precedence_and_is_flagged() -> None:
    factory = RemoteProviderFactory(
        [CustomRemoteConfig(type="Bitbucket Server", domain="stash.example.com")]
    )

    provider = factory.create("stash.example.com", "PROJ/repo")

    assert isinstance(provider, BitbucketServerService)
    assert provider.custom is True
    assert provider.name == "Bitbucket Server (stash.example.com)"


def test_custom_remote_explicit_name() -> None:
    factory = RemoteProviderFactory(
        [CustomRemoteConfig(type="GitHub", domain="github.com", name="Mirror")]
    )

    provider = factory.create("github.com", "owner/repo")

    assert provider is not None
    assert provider.name == "Mirror"


def test_unknown_custom_type_raises() -> None:
    with pytest.raises(UnknownRemoteTypeError):
        RemoteProviderFactory([CustomRemoteConfig(type="Gitea", domain="git.example.com")])


def test_factory_passes_opener_through() -> None:
    async def _opener(url: str) -> None:
        return None

    provider = RemoteProviderFactory(opener=_opener).create("github.com", "owner/repo")

    assert provider is not None
    assert provider._opener is _opener


def test_entry_point_provider_types_are_discovered(monkeypatch) -> None:
    class GiteaService(GitHubService):
        @property
        def name(self) -> str:
            return self.format_name("Gitea")

    class DummyEntryPoints(list):
        def select(self, **kwargs):  # type: ignore[no-untyped-def]
            if kwargs.get("group") == "gitlens.remotes":
                return self
            return []

    monkeypatch.setattr(
        "gitlens.remotes.factory.metadata.entry_points",
        lambda: DummyEntryPoints([SimpleNamespace(name="Gitea", load=lambda: GiteaService)]),
    )

    assert discover_provider_types()["gitea"] is GiteaService

    factory = RemoteProviderFactory([CustomRemoteConfig(type="Gitea", domain="git.example.com")])
    provider = factory.create("git.example.com", "owner/repo")

    assert isinstance(provider, GiteaService)
    assert provider.name == "Gitea (git.example.com)"


def test_entry_point_must_be_provider_subclass(monkeypatch) -> None:
    class DummyEntryPoints(list):
        def select(self, **kwargs):  # type: ignore[no-untyped-def]
            return self

    monkeypatch.setattr(
        "gitlens.remotes.factory.metadata.entry_points",
        lambda: DummyEntryPoints([SimpleNamespace(name="bogus", load=lambda: object)]),
    )

    with pytest.raises(TypeError):
        discover_provider_types()
