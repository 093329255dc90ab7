"""Bitbucket Server (self-hosted) URL grammar."""

from __future__ import annotations

from typing import Optional, Tuple

from ..models import Range
from .provider import RemoteProvider, quote_param, quote_path, split_path

# HTTPS clone URLs look like https://host/scm/<project>/<repo>.git
_CLONE_PREFIX = "scm/"


class BitbucketServerService(RemoteProvider):
    """Bitbucket Server nests repositories under ``/projects/<KEY>/repos/<slug>``.

    Every URL depends on :meth:`split_path`, so a path without an
    owner/repository separator raises :class:`MalformedPathError`.
    """

    @property
    def name(self) -> str:
        return self.format_name("Bitbucket Server")

    def split_path(self) -> Tuple[str, str]:
        path = self.path
        if path.lower().startswith(_CLONE_PREFIX):
            path = path[len(_CLONE_PREFIX):]
        return split_path(path)

    def get_url_for_repository(self) -> str:
        project, repo = self.split_path()
        return f"https://{self.domain}/projects/{quote_path(project)}/repos/{quote_path(repo)}"

    def get_url_for_branches(self) -> str:
        return f"{self.get_url_for_repository()}/branches"

    def get_url_for_branch(self, branch: str) -> str:
        return f"{self.get_url_for_repository()}/commits?until={quote_param(branch)}"

    def get_url_for_commit(self, sha: str) -> str:
        return f"{self.get_url_for_repository()}/commits/{quote_path(sha)}"

    def get_url_for_file(
        self,
        file_name: str,
        branch: Optional[str] = None,
        sha: Optional[str] = None,
        range: Optional[Range] = None,
    ) -> str:
        line = ""
        if range is not None:
            line = f"#{range.start}" if range.single_line else f"#{range.start}-{range.end}"
        url = f"{self.get_url_for_repository()}/browse/{quote_path(file_name)}"
        revision = sha or branch
        if revision:
            return f"{url}?at={quote_param(revision)}{line}"
        return f"{url}{line}"
