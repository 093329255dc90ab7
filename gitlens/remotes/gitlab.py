"""GitLab URL grammar."""

from __future__ import annotations

from ..models import Range
from .github import GitHubService


class GitLabService(GitHubService):
    """GitLab shares GitHub's routes apart from the line-range anchor."""

    @property
    def name(self) -> str:
        return self.format_name("GitLab")

    def _line_anchor(self, range: Range) -> str:
        if range.single_line:
            return f"#L{range.start}"
        return f"#L{range.start}-{range.end}"
