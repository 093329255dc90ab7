"""Visual Studio Team Services / Azure Repos URL grammar."""

from __future__ import annotations

from typing import Optional

from ..models import Range
from .provider import RemoteProvider, quote_param, quote_path


class VisualStudioService(RemoteProvider):

    @property
    def name(self) -> str:
        return self.format_name("Visual Studio Team Services")

    def get_url_for_branches(self) -> str:
        return f"{self.base_url}/branches"

    def get_url_for_branch(self, branch: str) -> str:
        return f"{self.base_url}/?version=GB{quote_param(branch)}&_a=history"

    def get_url_for_commit(self, sha: str) -> str:
        return f"{self.base_url}/commit/{quote_path(sha)}"

    def get_url_for_file(
        self,
        file_name: str,
        branch: Optional[str] = None,
        sha: Optional[str] = None,
        range: Optional[Range] = None,
    ) -> str:
        path = quote_param(file_name)
        line = ""
        if range is not None:
            line = f"&line={range.start}"
            if not range.single_line:
                line += f"&lineEnd={range.end}"
        if sha:
            return f"{self.base_url}/commit/{quote_path(sha)}/?_a=contents&path=%2F{path}{line}"
        if branch:
            return f"{self.base_url}/?path=%2F{path}&version=GB{quote_param(branch)}&_a=contents{line}"
        return f"{self.base_url}?path=%2F{path}{line}"
