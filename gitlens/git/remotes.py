"""Discovery and parsing of git remotes."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple
from urllib.parse import urlparse

from ..models import GitRemote

# git@host:owner/repo.git
_SCP_LIKE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?!//)(?P<path>.+)$")
# origin  https://github.com/owner/repo.git (fetch)
_REMOTE_LINE = re.compile(r"^(?P<name>\S+)\s+(?P<url>\S+)\s+\((?P<type>fetch|push)\)\s*$")


def parse_remote_url(url: str) -> Optional[Tuple[str, str]]:
    """Split a remote URL into ``(domain, owner/repo path)``.

    Returns None when either part cannot be determined.
    """
    url = url.strip()
    if "://" in url:
        parsed = urlparse(url)
        host = parsed.hostname or ""
        path = parsed.path
    else:
        match = _SCP_LIKE.match(url)
        if not match:
            return None
        host = match.group("host")
        path = match.group("path")

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    if not host or not path:
        return None
    return host.lower(), path


class RemoteLister:
    """Reads remotes from ``git remote -v``."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner

    def list(self, repo_path: str | Path) -> List[GitRemote]:
        output = self._runner(["git", "remote", "-v"], cwd=Path(repo_path), capture_output=True)
        return parse_remote_lines(output.splitlines())

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        import subprocess

        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


def parse_remote_lines(lines: Iterable[str]) -> List[GitRemote]:
    """Collapse fetch/push lines into one remote per name and URL."""
    order: List[Tuple[str, str]] = []
    types: Dict[Tuple[str, str], Set[str]] = {}
    for line in lines:
        match = _REMOTE_LINE.match(line.strip())
        if not match:
            continue
        key = (match.group("name"), match.group("url"))
        if key not in types:
            order.append(key)
            types[key] = set()
        types[key].add(match.group("type"))

    remotes: List[GitRemote] = []
    for name, url in order:
        parsed = parse_remote_url(url)
        if parsed is None:
            continue
        domain, path = parsed
        remotes.append(
            GitRemote(name=name, url=url, domain=domain, path=path, types=frozenset(types[(name, url)]))
        )
    return remotes


__all__ = ["RemoteLister", "parse_remote_lines", "parse_remote_url"]
