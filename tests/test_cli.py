"""CLI parser and command behaviour tests."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

import gitlens.cli as cli
from gitlens.cli import _build_parser, main
from gitlens.git.remotes import RemoteLister
from gitlens.models import Range
from gitlens.remotes import GitHubService


def _fake_lister(output: str):  # type: ignore[no-untyped-def]
    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        return output

    return lambda: RemoteLister(runner=runner)


_ORIGIN = "origin\tgit@github.com:owner/repo.git (fetch)\norigin\tgit@github.com:owner/repo.git (push)\n"


class _NoCommitLinks(GitHubService):
    def get_url_for_commit(self, sha: str) -> None:  # type: ignore[override]
        return None


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "remotes"])
    assert args.verbose is True
    assert args.command == "remotes"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["remotes", "--verbose"])
    assert args.verbose is True


def test_cli_parses_file_url_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["url", "--remote", "upstream", "file", "a.py", "--sha", "abc", "--line", "3-7"])
    assert args.command == "url"
    assert args.kind == "file"
    assert args.remote == "upstream"
    assert args.line == Range(3, 7)


def test_cli_rejects_bad_line_range() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["url", "file", "a.py", "--line", "7-3"])


def test_build_resource_uses_revision_when_sha_given() -> None:
    args = argparse.Namespace(kind="file", file_name="a.py", branch=None, sha="abc", line=None)
    resource = cli._build_resource(args)
    assert resource.type == "revision"


def test_url_command_prints_commit_url(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "RemoteLister", _fake_lister(_ORIGIN))

    main(["url", "--path", str(tmp_path), "commit", "deadbeef"])

    assert capsys.readouterr().out.strip() == "https://github.com/owner/repo/commit/deadbeef"


def test_url_command_prints_file_url_with_range(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "RemoteLister", _fake_lister(_ORIGIN))

    main(["url", "--path", str(tmp_path), "file", "src/app.py", "--branch", "main", "--line", "10"])

    assert capsys.readouterr().out.strip() == "https://github.com/owner/repo/blob/main/src/app.py#L10"


def test_url_command_uses_custom_remote_from_config(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / ".gitlens.yml").write_text(
        "remotes:\n  - type: GitLab\n    domain: git.example.com\n", encoding="utf-8"
    )
    monkeypatch.setattr(
        cli, "RemoteLister", _fake_lister("origin\thttps://git.example.com/group/repo.git (fetch)\n")
    )

    main(["url", "--path", str(tmp_path), "branches"])

    assert capsys.readouterr().out.strip() == "https://git.example.com/group/repo/branches"


def test_url_command_opens_via_provider(tmp_path: Path, monkeypatch, capsys) -> None:
    opened: list[str] = []

    async def _fake_open(url: str) -> bool:
        opened.append(url)
        return True

    monkeypatch.setattr(cli, "RemoteLister", _fake_lister(_ORIGIN))
    monkeypatch.setattr("gitlens.remotes.provider.open_url", _fake_open)

    main(["url", "--path", str(tmp_path), "--open", "repo"])

    assert opened == ["https://github.com/owner/repo"]
    assert capsys.readouterr().out.strip() == "Opened https://github.com/owner/repo"


def test_url_command_fails_for_missing_remote(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(cli, "RemoteLister", _fake_lister(""))

    with pytest.raises(SystemExit) as excinfo:
        main(["url", "--path", str(tmp_path), "repo"])

    assert excinfo.value.code == 1


def test_url_command_reports_malformed_path(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / ".gitlens.yml").write_text(
        "remotes:\n  - type: BitbucketServer\n    domain: stash.example.com\n", encoding="utf-8"
    )
    monkeypatch.setattr(
        cli, "RemoteLister", _fake_lister("origin\thttps://stash.example.com/repo (fetch)\n")
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["url", "--path", str(tmp_path), "branches"])

    assert excinfo.value.code == 1
    assert "separator" in capsys.readouterr().err


def test_remotes_command_lists_providers(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        cli,
        "RemoteLister",
        _fake_lister(_ORIGIN + "mirror\thttps://git.unknown.org/owner/repo (fetch)\n"),
    )

    main(["remotes", "--path", str(tmp_path)])

    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == [
        "origin\tgithub.com/owner/repo\tGitHub",
        "mirror\tgit.unknown.org/owner/repo\tunknown provider",
    ]


def test_watch_reports_state_changes(tmp_path: Path, monkeypatch, capsys) -> None:
    config = tmp_path / ".gitlens.yml"
    config.write_text("code_lens:\n  enabled: false\n", encoding="utf-8")

    class FakeWatcher(cli.GitCacheWatcher):
        def __init__(self, repo_path) -> None:  # type: ignore[no-untyped-def]
            super().__init__(repo_path, runner=lambda args, cwd, capture_output=False: "")

    def _sleep(seconds: float) -> None:
        config.write_text(
            "code_lens:\n  enabled: true\n  recent_change:\n    enabled: true\n", encoding="utf-8"
        )

    monkeypatch.setattr(cli, "GitCacheWatcher", FakeWatcher)
    monkeypatch.setattr(cli.time, "sleep", _sleep)

    main(["watch", "--path", str(tmp_path), "--max-polls", "1"])

    assert capsys.readouterr().out.strip().splitlines() == [
        "CodeLens inactive (toggle unavailable)",
        "CodeLens active (toggle available)",
    ]


def test_url_open_without_link_does_not_report_opened(tmp_path: Path, monkeypatch, capsys) -> None:
    opened: list[str] = []

    async def _fake_open(url: str) -> bool:
        opened.append(url)
        return True

    monkeypatch.setattr(cli, "RemoteLister", _fake_lister(_ORIGIN))
    monkeypatch.setattr("gitlens.remotes.provider.open_url", _fake_open)
    monkeypatch.setattr(cli.RemoteProviderFactory, "create", lambda self, domain, path: _NoCommitLinks(domain, path))

    with pytest.raises(SystemExit) as excinfo:
        main(["url", "--path", str(tmp_path), "--open", "commit", "abc123"])

    assert excinfo.value.code == 1
    assert opened == []
    captured = capsys.readouterr()
    assert "Opened" not in captured.out
    assert "cannot link to this commit" in captured.err


def test_watch_survives_invalid_configuration(tmp_path: Path, monkeypatch, capsys) -> None:
    config = tmp_path / ".gitlens.yml"
    config.write_text("code_lens:\n  enabled: false\n", encoding="utf-8")
    edits = iter(
        [
            "code_lens: [unclosed\n",
            "code_lens:\n  enabled: true\n  recent_change:\n    enabled: true\n",
        ]
    )

    class FakeWatcher(cli.GitCacheWatcher):
        def __init__(self, repo_path) -> None:  # type: ignore[no-untyped-def]
            super().__init__(repo_path, runner=lambda args, cwd, capture_output=False: "")

    def _sleep(seconds: float) -> None:
        config.write_text(next(edits), encoding="utf-8")

    monkeypatch.setattr(cli, "GitCacheWatcher", FakeWatcher)
    monkeypatch.setattr(cli.time, "sleep", _sleep)

    main(["watch", "--path", str(tmp_path), "--max-polls", "2"])

    captured = capsys.readouterr()
    assert captured.out.strip().splitlines() == [
        "CodeLens inactive (toggle unavailable)",
        "CodeLens active (toggle available)",
    ]
    assert "Ignoring invalid configuration" in captured.err
