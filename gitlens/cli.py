"""CLI entrypoints for gitlens commands."""

from __future__ import annotations

import argparse
import asyncio
import subprocess
import sys
import time
from pathlib import Path
from typing import Optional

from .codelens import CodeLensController
from .config import ConfigError, load_config
from .git.cache import GitCacheWatcher
from .git.remotes import RemoteLister
from .host import CommandContext, CommandContextStore, LensRegistry
from .logging import configure_logging, get_logger
from .models import GitRemote, Range
from .remotes import (
    BranchesResource,
    BranchResource,
    CommitResource,
    FileResource,
    MalformedPathError,
    RemoteProviderFactory,
    RemoteResource,
    RepoResource,
    RevisionResource,
    UnknownRemoteTypeError,
    get_name_from_remote_resource,
)
from .settings import SettingsSource


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_path_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--path",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitlens",
        description="Resolve git resources to hosting-service URLs and manage CodeLens state.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    url_parser = subparsers.add_parser(
        "url",
        help="Print (or open) the web URL for a branch, commit, file, or the repository.",
    )
    _add_verbose_option(url_parser, suppress_default=True)
    _add_path_option(url_parser)
    url_parser.add_argument(
        "--remote",
        default="origin",
        help="Name of the git remote to link to (defaults to origin).",
    )
    url_parser.add_argument(
        "--open",
        action="store_true",
        help="Open the URL in the browser instead of printing it.",
    )
    kinds = url_parser.add_subparsers(dest="kind", required=True)
    kinds.add_parser("repo", help="The repository home page.")
    kinds.add_parser("branches", help="The list of branches.")
    branch_parser = kinds.add_parser("branch", help="The history of one branch.")
    branch_parser.add_argument("name")
    commit_parser = kinds.add_parser("commit", help="A single commit.")
    commit_parser.add_argument("sha")
    file_parser = kinds.add_parser("file", help="A file, optionally at a branch or revision.")
    file_parser.add_argument("file_name")
    file_parser.add_argument("--branch", default=None)
    file_parser.add_argument("--sha", default=None, help="Pin the file to this revision.")
    file_parser.add_argument(
        "--line",
        type=_parse_range,
        default=None,
        help="Line or inclusive line range to highlight, e.g. 12 or 12-20.",
    )

    remotes_parser = subparsers.add_parser(
        "remotes",
        help="List git remotes and the hosting provider each maps to.",
    )
    _add_verbose_option(remotes_parser, suppress_default=True)
    _add_path_option(remotes_parser)

    watch_parser = subparsers.add_parser(
        "watch",
        help="Track .gitlens.yml and repository changes and report CodeLens state.",
    )
    _add_verbose_option(watch_parser, suppress_default=True)
    _add_path_option(watch_parser)
    watch_parser.add_argument(
        "--interval",
        type=float,
        default=1.0,
        help="Seconds between polls (default: 1.0).",
    )
    watch_parser.add_argument(
        "--max-polls",
        type=int,
        default=None,
        help="Stop after this many polls (default: run until interrupted).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gitlens commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        if args.command == "url":
            _run_url(parser, args)
        elif args.command == "remotes":
            _run_remotes(args)
        elif args.command == "watch":
            _run_watch(args)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ConfigError, MalformedPathError, UnknownRemoteTypeError) as exc:
        parser.exit(1, f"gitlens {args.command} failed: {exc}\n")
    except subprocess.CalledProcessError as exc:
        parser.exit(1, f"gitlens {args.command} failed: git exited with status {exc.returncode}\n")


def _run_url(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    repo = Path(args.path)
    config = load_config(repo)
    remote = _find_remote(RemoteLister().list(repo), args.remote)
    if remote is None:
        parser.exit(1, f"No remote named '{args.remote}' in {repo}\n")

    provider = RemoteProviderFactory(config.remotes).create(remote.domain, remote.path)
    if provider is None:
        parser.exit(1, f"No hosting provider recognised for {remote.domain}\n")

    resource = _build_resource(args)
    url = provider.url_for(resource)
    if url is None:
        parser.exit(1, f"{provider.name} cannot link to this {get_name_from_remote_resource(resource).lower()}\n")
    if args.open:
        asyncio.run(provider.open(resource))
        print(f"Opened {url}")
        return
    print(url)


def _run_remotes(args: argparse.Namespace) -> None:
    repo = Path(args.path)
    config = load_config(repo)
    factory = RemoteProviderFactory(config.remotes)
    remotes = RemoteLister().list(repo)
    if not remotes:
        print("No remotes configured")
        return
    for remote in remotes:
        provider = factory.create(remote.domain, remote.path)
        label = provider.name if provider is not None else "unknown provider"
        print(f"{remote.name}\t{remote.domain}/{remote.path}\t{label}")


def _run_watch(args: argparse.Namespace) -> None:
    logger = get_logger("cli")
    repo = Path(args.path)
    settings = SettingsSource(repo)
    git = GitCacheWatcher(repo)
    command_context = CommandContextStore()
    controller = CodeLensController(
        settings,
        git,
        registry=LensRegistry(),
        command_context=command_context,
    )

    controller.start()
    git.poll()
    last_state = _describe(controller, command_context)
    print(last_state)

    polls = 0
    try:
        while args.max_polls is None or polls < args.max_polls:
            time.sleep(args.interval)
            try:
                settings.poll()
            except ConfigError as exc:
                logger.error("Ignoring invalid configuration: %s", exc)
            git.poll()
            polls += 1
            state = _describe(controller, command_context)
            if state != last_state:
                print(state)
                last_state = state
    except KeyboardInterrupt:
        pass
    finally:
        controller.dispose()
        settings.dispose()
        git.dispose()


def _describe(controller: CodeLensController, command_context: CommandContextStore) -> str:
    status = "active" if controller.is_active else "inactive"
    can_toggle = bool(command_context.get(CommandContext.CAN_TOGGLE_CODE_LENS, False))
    return f"CodeLens {status} (toggle {'available' if can_toggle else 'unavailable'})"


def _find_remote(remotes: list[GitRemote], name: str) -> Optional[GitRemote]:
    for remote in remotes:
        if remote.name == name:
            return remote
    return None


def _build_resource(args: argparse.Namespace) -> RemoteResource:
    if args.kind == "repo":
        return RepoResource()
    if args.kind == "branches":
        return BranchesResource()
    if args.kind == "branch":
        return BranchResource(branch=args.name)
    if args.kind == "commit":
        return CommitResource(sha=args.sha)
    if args.sha:
        return RevisionResource(
            file_name=args.file_name, branch=args.branch, sha=args.sha, range=args.line
        )
    return FileResource(file_name=args.file_name, branch=args.branch, range=args.line)


def _parse_range(value: str) -> Range:
    start_text, _, end_text = value.partition("-")
    try:
        start = int(start_text)
        end = int(end_text) if end_text else start
        return Range(start, end)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid line range '{value}'") from exc


if __name__ == "__main__":
    main(sys.argv[1:])
