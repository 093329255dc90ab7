"""Core data models shared across gitlens components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class Range:
    """Inclusive, 1-based span of lines within a file."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < self.start:
            raise ValueError(f"Invalid line range {self.start}-{self.end}")

    @property
    def single_line(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class GitLogCommit:
    """A commit as it appears in the history of a single file."""

    sha: str
    file_name: str
    author: Optional[str] = None
    message: Optional[str] = None

    @property
    def short_sha(self) -> str:
        return self.sha[:8]


@dataclass(frozen=True)
class GitRemote:
    """A configured git remote, reduced to the host and owner/repo path."""

    name: str
    url: str
    domain: str
    path: str
    types: FrozenSet[str] = field(default_factory=frozenset)
