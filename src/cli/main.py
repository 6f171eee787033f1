"""Content store CLI entry points.

This module exposes read, write and configure commands.
It maps argparse commands onto store client calls.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from core.constants import DEFAULT_BRANCH, JSON_INDENT
from core.errors import ContentStoreError
from core.settings_source import EnvironmentSource, SettingsFileSource
from core.types import JSONValue, KeyValueSource
from store.file_store import FileStoreClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="contentstore",
        description="Read and write JSON files stored in a remote repository",
    )
    parser.add_argument(
        "--settings",
        help="YAML settings file to read owner/repo/token/branch from "
        "(default: CONTENTSTORE_* environment variables)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_read_command(subparsers)
    _add_write_command(subparsers)
    _add_configure_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the content store CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "read":
            return _run_read_command(_build_client(args.settings), args)
        if args.command == "write":
            return _run_write_command(_build_client(args.settings), args)
        if args.command == "configure":
            return _run_configure_command(args)
    except ContentStoreError as error:
        print(f"error={error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(settings_path: str | None) -> FileStoreClient:
    """Build a store client reading config from the selected source.

    Args:
        settings_path: Optional YAML settings file path.

    Returns:
        Configured store client.
    """
    source: KeyValueSource
    if settings_path:
        source = SettingsFileSource(settings_path)
    else:
        source = EnvironmentSource()
    return FileStoreClient(source=source)


def _run_read_command(client: FileStoreClient, args: argparse.Namespace) -> int:
    """Handle read command."""
    value = asyncio.run(client.read(args.path))
    print(json.dumps(value, indent=JSON_INDENT, ensure_ascii=False))
    return 0


def _run_write_command(client: FileStoreClient, args: argparse.Namespace) -> int:
    """Handle write command."""
    value = _load_value(args)
    asyncio.run(client.write(args.path, value, args.message))
    print(args.path)
    return 0


def _run_configure_command(args: argparse.Namespace) -> int:
    """Handle configure command."""
    source = SettingsFileSource(args.settings) if args.settings else SettingsFileSource()
    source.save(
        {
            "owner": args.owner,
            "repo": args.repo,
            "token": args.token,
            "branch": args.branch,
            "api_url": args.api_url,
        }
    )
    print(source.path)
    return 0


def _load_value(args: argparse.Namespace) -> JSONValue:
    """Parse the value to write from --value or --file.

    Raises:
        SystemExit: If the input is not valid JSON.
    """
    if args.file:
        try:
            raw_text = Path(args.file).expanduser().read_text(encoding="utf-8")
        except OSError as error:
            raise SystemExit(f"error=Failed to read {args.file}: {error}") from error
    else:
        raw_text = args.value
    try:
        return json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise SystemExit(f"error=Value is not valid JSON: {error.msg}") from error


def _add_read_command(subparsers: Any) -> None:
    """Register read subcommand."""
    parser = subparsers.add_parser("read", help="Print a stored JSON file")
    parser.add_argument("path", help="Repository-relative file path, e.g. kas.json")


def _add_write_command(subparsers: Any) -> None:
    """Register write subcommand."""
    parser = subparsers.add_parser("write", help="Create or replace a stored JSON file")
    parser.add_argument("path", help="Repository-relative file path, e.g. kas.json")
    parser.add_argument("--message", "-m", required=True, help="Commit message")
    value_group = parser.add_mutually_exclusive_group(required=True)
    value_group.add_argument("--value", help="JSON text to store")
    value_group.add_argument("--file", help="Local JSON file to store")


def _add_configure_command(subparsers: Any) -> None:
    """Register configure subcommand."""
    parser = subparsers.add_parser("configure", help="Save store settings to the settings file")
    parser.add_argument("--owner", required=True, help="Repository owner")
    parser.add_argument("--repo", required=True, help="Repository name")
    parser.add_argument("--token", required=True, help="Access token")
    parser.add_argument("--branch", default=DEFAULT_BRANCH, help="Target branch")
    parser.add_argument("--api-url", help="Contents API base URL")
