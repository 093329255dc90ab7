"""Remote hosting providers and the resources they can link to."""

from __future__ import annotations

from .bitbucket import BitbucketService
from .bitbucket_server import BitbucketServerService
from .factory import RemoteProviderFactory, UnknownRemoteTypeError, discover_provider_types
from .github import GitHubService
from .gitlab import GitLabService
from .provider import MalformedPathError, RemoteProvider, split_path
from .resources import (
    BranchesResource,
    BranchResource,
    CommitResource,
    FileResource,
    RemoteResource,
    RepoResource,
    RevisionResource,
    get_name_from_remote_resource,
)
from .visualstudio import VisualStudioService

__all__ = [
    "BitbucketServerService",
    "BitbucketService",
    "BranchResource",
    "BranchesResource",
    "CommitResource",
    "FileResource",
    "GitHubService",
    "GitLabService",
    "MalformedPathError",
    "RemoteProvider",
    "RemoteProviderFactory",
    "RemoteResource",
    "RepoResource",
    "RevisionResource",
    "UnknownRemoteTypeError",
    "VisualStudioService",
    "discover_provider_types",
    "get_name_from_remote_resource",
    "split_path",
]
