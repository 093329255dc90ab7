"""Bitbucket Cloud URL grammar."""

from __future__ import annotations

from typing import Optional

from ..models import Range
from .provider import RemoteProvider, quote_path


class BitbucketService(RemoteProvider):

    @property
    def name(self) -> str:
        return self.format_name("Bitbucket")

    def get_url_for_branches(self) -> str:
        return f"{self.base_url}/branches"

    def get_url_for_branch(self, branch: str) -> str:
        return f"{self.base_url}/commits/branch/{quote_path(branch)}"

    def get_url_for_commit(self, sha: str) -> str:
        return f"{self.base_url}/commits/{quote_path(sha)}"

    def get_url_for_file(
        self,
        file_name: str,
        branch: Optional[str] = None,
        sha: Optional[str] = None,
        range: Optional[Range] = None,
    ) -> str:
        path = quote_path(file_name)
        line = ""
        if range is not None:
            # Bitbucket anchors name the file: #src/app.py-3:9
            line = f"#{path}-{range.start}"
            if not range.single_line:
                line += f":{range.end}"
        revision = sha or branch
        if revision:
            return f"{self.base_url}/src/{quote_path(revision)}/{path}{line}"
        return f"{self.base_url}?path={path}{line}"
