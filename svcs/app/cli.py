"""SVCS command-line interface.

Usage: svcs [--debug] <command> [arg]

Every user-facing string printed here is part of the tool's contract and
is reproduced exactly. Diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from ..core.errors import StorageError, UserError
from ..core.repository import Repository
from ..utils.env import get_root_override


COMMANDS = {
    "config": "Get and set a username.",
    "add": "Add a file to the index.",
    "log": "Show commit logs.",
    "commit": "Save changes.",
    "checkout": "Restore a file.",
}

HELP_TEXT = "These are SVCS commands:\n" + "\n".join(
    f"{name:<10} {summary}" for name, summary in COMMANDS.items()
)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svcs",
        description="A minimal single-user version control system",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument(
        "--help",
        action="store_true",
        dest="show_help",
        help="Show the list of commands",
    )
    parser.add_argument("command", nargs="?", help="One of: " + ", ".join(COMMANDS))
    # Everything after the command is passed through untouched, so values
    # such as "-x" are never read as options.
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Command argument")
    return parser


def main(args: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if args is None else args)
    parsed, unknown = create_parser().parse_known_args(_strip_command_dashes(argv))

    if parsed.debug:
        os.environ["SVCS_DEBUG"] = "1"

    if unknown:
        print(f"'{unknown[0]}' is not a SVCS command.")
        return 0

    if parsed.show_help or parsed.command is None:
        print(HELP_TEXT)
        return 0

    if parsed.command not in COMMANDS:
        print(f"'{parsed.command}' is not a SVCS command.")
        return 0

    # Only the first argument is used
    parsed.value = parsed.args[0] if parsed.args else None

    try:
        repo = Repository(root=_determine_root())
        repo.init()

        if parsed.command == "config":
            return cmd_config(parsed, repo)
        if parsed.command == "add":
            return cmd_add(parsed, repo)
        if parsed.command == "commit":
            return cmd_commit(parsed, repo)
        if parsed.command == "log":
            return cmd_log(repo)
        if parsed.command == "checkout":
            return cmd_checkout(parsed, repo)
    except UserError as e:
        print(str(e))
        return 0
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(HELP_TEXT)
    return 1


def cmd_config(args: argparse.Namespace, repo: Repository) -> int:
    if args.value is None:
        name = repo.get_author()
        if name is None:
            print("Please, tell me who you are.")
        else:
            print(f"The username is {name}.")
        return 0

    repo.set_author(args.value)
    print(f"The username is {args.value}.")
    return 0


def cmd_add(args: argparse.Namespace, repo: Repository) -> int:
    if args.value is None:
        tracked = repo.tracked()
        if not tracked:
            print("Add a file to the index.")
            return 0
        print("Tracked files:")
        for path in tracked:
            print(path)
        return 0

    repo.add(args.value)
    print(f"The file '{args.value}' is tracked.")
    return 0


def cmd_commit(args: argparse.Namespace, repo: Repository) -> int:
    if args.value is None:
        print("Message was not passed.")
        return 0

    repo.commit(args.value)
    print("Changes are committed.")
    return 0


def cmd_log(repo: Repository) -> int:
    records = repo.log()
    if not records:
        print("No commits yet.")
        return 0

    print("\n\n".join(record.format() for record in records))
    return 0


def cmd_checkout(args: argparse.Namespace, repo: Repository) -> int:
    if args.value is None:
        print("Commit id was not passed.")
        return 0

    result = repo.checkout(args.value)
    print(f"Switched to commit {result.commit_id}.")
    return 0


def _determine_root() -> Path:
    return get_root_override() or Path.cwd()


def _strip_command_dashes(argv: list[str]) -> list[str]:
    """Accept commands spelled with a leading "--" (e.g. --log)."""
    result = list(argv)
    for i, arg in enumerate(result):
        if arg in ("--debug", "--help"):
            continue
        if arg.startswith("--"):
            result[i] = arg[2:]
        break
    return result


if __name__ == "__main__":
    sys.exit(main())
