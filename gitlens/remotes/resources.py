"""Descriptors for the things a remote provider can link to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from ..models import GitLogCommit, Range


@dataclass(frozen=True)
class BranchResource:
    branch: str

    type: ClassVar[str] = "branch"


@dataclass(frozen=True)
class BranchesResource:
    type: ClassVar[str] = "branches"


@dataclass(frozen=True)
class CommitResource:
    sha: str

    type: ClassVar[str] = "commit"


@dataclass(frozen=True)
class FileResource:
    file_name: str
    branch: Optional[str] = None
    range: Optional[Range] = None

    type: ClassVar[str] = "file"


@dataclass(frozen=True)
class RepoResource:
    type: ClassVar[str] = "repo"


@dataclass(frozen=True)
class RevisionResource:
    """A file as of a specific commit."""

    file_name: str
    branch: Optional[str] = None
    sha: Optional[str] = None
    commit: Optional[GitLogCommit] = None
    range: Optional[Range] = None

    type: ClassVar[str] = "revision"

    @property
    def revision_sha(self) -> Optional[str]:
        """The explicit sha, falling back to the attached commit's."""
        if self.sha is not None:
            return self.sha
        return self.commit.sha if self.commit is not None else None


RemoteResource = Union[
    BranchResource,
    BranchesResource,
    CommitResource,
    FileResource,
    RepoResource,
    RevisionResource,
]

_RESOURCE_LABELS = {
    BranchResource: "Branch",
    BranchesResource: "Branches",
    CommitResource: "Commit",
    FileResource: "File",
    RepoResource: "Repository",
    RevisionResource: "Revision",
}


def get_name_from_remote_resource(resource: RemoteResource) -> str:
    """Human readable label for the kind of resource, e.g. ``"Repository"``."""
    return _RESOURCE_LABELS.get(type(resource), "")


__all__ = [
    "BranchResource",
    "BranchesResource",
    "CommitResource",
    "FileResource",
    "RemoteResource",
    "RepoResource",
    "RevisionResource",
    "get_name_from_remote_resource",
]
