"""GitHub URL grammar."""

from __future__ import annotations

from typing import Optional

from ..models import Range
from .provider import RemoteProvider, quote_path


class GitHubService(RemoteProvider):
    """Links into github.com or a GitHub Enterprise host."""

    @property
    def name(self) -> str:
        return self.format_name("GitHub")

    def get_url_for_branches(self) -> str:
        return f"{self.base_url}/branches"

    def get_url_for_branch(self, branch: str) -> str:
        return f"{self.base_url}/commits/{quote_path(branch)}"

    def get_url_for_commit(self, sha: str) -> str:
        return f"{self.base_url}/commit/{quote_path(sha)}"

    def get_url_for_file(
        self,
        file_name: str,
        branch: Optional[str] = None,
        sha: Optional[str] = None,
        range: Optional[Range] = None,
    ) -> str:
        line = self._line_anchor(range) if range is not None else ""
        path = quote_path(file_name)
        revision = sha or branch
        if revision:
            return f"{self.base_url}/blob/{quote_path(revision)}/{path}{line}"
        return f"{self.base_url}?path={path}{line}"

    def _line_anchor(self, range: Range) -> str:
        if range.single_line:
            return f"#L{range.start}"
        return f"#L{range.start}-L{range.end}"
