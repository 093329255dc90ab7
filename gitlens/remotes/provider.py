"""Base class for hosting services that turn git resources into web URLs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Tuple, assert_never
from urllib.parse import quote

from ..host import open_url
from ..logging import get_logger
from ..models import Range
from .resources import (
    BranchesResource,
    BranchResource,
    CommitResource,
    FileResource,
    RemoteResource,
    RepoResource,
    RevisionResource,
)

UrlOpener = Callable[[str], Awaitable[Any]]


class MalformedPathError(ValueError):
    """Raised when a remote path is not of the form ``owner/repo``."""


def build_base_url(domain: str, path: str) -> str:
    return f"https://{domain}/{path}"


def split_path(path: str) -> Tuple[str, str]:
    """Split ``owner/repo`` at the first ``/``."""
    owner, sep, repo = path.partition("/")
    if not sep:
        raise MalformedPathError(f"Remote path '{path}' is missing an owner/repository separator")
    return owner, repo


def quote_path(value: str) -> str:
    """Percent-encode ``value`` for a URL path or query, keeping ``/``."""
    return quote(value)


def quote_param(value: str) -> str:
    """Percent-encode ``value`` as a single query parameter, ``/`` included."""
    return quote(value, safe="")


def format_provider_name(
    label: str,
    *,
    domain: str,
    custom: bool,
    explicit_name: Optional[str] = None,
) -> str:
    if explicit_name is not None:
        return explicit_name
    return f"{label} ({domain})" if custom else label


class RemoteProvider(ABC):
    """Contract for a hosting service such as GitHub or GitLab.

    Subclasses supply the per-service URL grammar through the
    ``get_url_for_*`` methods. Everything else, including :meth:`open`,
    is shared.
    """

    def __init__(
        self,
        domain: str,
        path: str,
        name: Optional[str] = None,
        custom: bool = False,
        *,
        opener: Optional[UrlOpener] = None,
    ) -> None:
        self._domain = domain
        self._path = path
        self._name = name
        self._custom = custom
        self._opener = opener or open_url
        self.logger = get_logger("remotes")

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def path(self) -> str:
        return self._path

    @property
    def custom(self) -> bool:
        return self._custom

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name, normally ``self.format_name("<Service>")``."""

    @property
    def base_url(self) -> str:
        return build_base_url(self._domain, self._path)

    def format_name(self, label: str) -> str:
        return format_provider_name(
            label, domain=self._domain, custom=self._custom, explicit_name=self._name
        )

    def split_path(self) -> Tuple[str, str]:
        return split_path(self._path)

    def get_url_for_repository(self) -> Optional[str]:
        return self.base_url

    @abstractmethod
    def get_url_for_branches(self) -> Optional[str]:
        """URL listing all branches."""

    @abstractmethod
    def get_url_for_branch(self, branch: str) -> Optional[str]:
        """URL showing the history of ``branch``."""

    @abstractmethod
    def get_url_for_commit(self, sha: str) -> Optional[str]:
        """URL showing a single commit."""

    @abstractmethod
    def get_url_for_file(
        self,
        file_name: str,
        branch: Optional[str] = None,
        sha: Optional[str] = None,
        range: Optional[Range] = None,
    ) -> Optional[str]:
        """URL showing ``file_name``, pinned to ``sha`` or ``branch`` when given."""

    def url_for(self, resource: RemoteResource) -> Optional[str]:
        """Resolve ``resource`` to a URL without opening it.

        This is the only place resource kinds are matched; :meth:`open`
        goes through it too.
        """
        if isinstance(resource, BranchResource):
            return self.get_url_for_branch(resource.branch)
        if isinstance(resource, BranchesResource):
            return self.get_url_for_branches()
        if isinstance(resource, CommitResource):
            return self.get_url_for_commit(resource.sha)
        if isinstance(resource, FileResource):
            return self.get_url_for_file(resource.file_name, resource.branch, None, resource.range)
        if isinstance(resource, RepoResource):
            return self.get_url_for_repository()
        if isinstance(resource, RevisionResource):
            return self.get_url_for_file(
                resource.file_name, resource.branch, resource.revision_sha, resource.range
            )
        assert_never(resource)

    async def open(self, resource: RemoteResource) -> Any:
        return await self._open_url(self.url_for(resource))

    async def open_repo(self) -> Any:
        return await self._open_url(self.get_url_for_repository())

    async def open_branches(self) -> Any:
        return await self._open_url(self.get_url_for_branches())

    async def open_branch(self, branch: str) -> Any:
        return await self._open_url(self.get_url_for_branch(branch))

    async def open_commit(self, sha: str) -> Any:
        return await self._open_url(self.get_url_for_commit(sha))

    async def open_file(
        self,
        file_name: str,
        branch: Optional[str] = None,
        sha: Optional[str] = None,
        range: Optional[Range] = None,
    ) -> Any:
        return await self._open_url(self.get_url_for_file(file_name, branch, sha, range))

    async def _open_url(self, url: Optional[str]) -> Any:
        if not url:
            self.logger.debug("%s produced no URL; nothing to open", self.name)
            return None
        self.logger.debug("Opening %s", url)
        return await self._opener(url)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self._domain!r}, path={self._path!r})"


__all__ = [
    "MalformedPathError",
    "RemoteProvider",
    "UrlOpener",
    "build_base_url",
    "format_provider_name",
    "quote_param",
    "quote_path",
    "split_path",
]
