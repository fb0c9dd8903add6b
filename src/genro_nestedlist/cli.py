# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Command shell for NestedList.

Reads one command per line (from a script file or stdin) and applies it
to a store. Paths are comma-separated names (',' alone is the root),
data is a JSON object.

Usage:
    genro-nestedlist [--load FILE] [--allow-duplicates] [--script FILE] [-v]

Commands:
    group NAME [PATH]          add a group
    entry NAME [PATH [JSON]]   add an entry
    remove PATH                remove a group or entry
    rename PATH NAME           rename a group or entry
    merge PATH JSON            merge JSON into an entry's data
    replace PATH JSON          replace an entry's data with JSON
    get PATH                   print a node as JSON
    show                       print the tree outline
    dump                       print the whole tree as JSON

Example:
    $ printf 'group A\\ngroup B A\\nentry x A,B {"k": 1}\\nshow\\n' | genro-nestedlist
    A/
      B/
        x {"k": 1}
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, TextIO

from .exceptions import NestedListError
from .render import render_tree
from .store import MERGE, REPLACE, NestedList
from .text import format_data, parse_data, parse_path

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when a command line is malformed."""

    pass


class Shell:
    """Applies text commands to a NestedList.

    Args:
        store: The store to drive.
        out: Stream for command output (default stdout).
    """

    def __init__(self, store: NestedList, out: TextIO | None = None) -> None:
        self.store = store
        self.out = out if out is not None else sys.stdout
        self._commands: dict[str, Callable[[str], None]] = {
            'group': self.do_group,
            'entry': self.do_entry,
            'remove': self.do_remove,
            'rename': self.do_rename,
            'merge': self.do_merge,
            'replace': self.do_replace,
            'get': self.do_get,
            'show': self.do_show,
            'dump': self.do_dump,
        }

    def execute(self, line: str) -> None:
        """Run a single command line.

        Raises:
            CommandError: If the command is unknown or malformed.
            NestedListError: If the store rejects the operation.
        """
        line = line.strip()
        if not line or line.startswith('#'):
            return
        command, _, rest = line.partition(' ')
        handler = self._commands.get(command)
        if handler is None:
            raise CommandError(f"Unknown command: {command}")
        handler(rest.strip())

    def run(self, lines: Iterable[str]) -> int:
        """Run every line, logging failures. Returns the number of failures."""
        failures = 0
        for lineno, line in enumerate(lines, 1):
            try:
                self.execute(line)
            except (CommandError, NestedListError) as exc:
                failures += 1
                logger.warning("line %d: %s (%s)", lineno, exc, type(exc).__name__)
        return failures

    # ==================== Commands ====================

    def do_group(self, args: str) -> None:
        name, path = _split(args, 1, 2)
        self.store.add_group(name, parse_path(path))

    def do_entry(self, args: str) -> None:
        name, path, data = _split(args, 1, 3)
        self.store.add_entry(name, parse_path(path), parse_data(data) if data else None)

    def do_remove(self, args: str) -> None:
        (path,) = _split(args, 1, 1)
        self.store.remove_entry(parse_path(path))

    def do_rename(self, args: str) -> None:
        path, name = _split(args, 2, 2)
        self.store.rename_entry(parse_path(path), name)

    def do_merge(self, args: str) -> None:
        path, data = _split(args, 2, 2)
        self.store.change_entry_data(parse_path(path), parse_data(data), MERGE)

    def do_replace(self, args: str) -> None:
        path, data = _split(args, 2, 2)
        self.store.change_entry_data(parse_path(path), parse_data(data), REPLACE)

    def do_get(self, args: str) -> None:
        (path,) = _split(args, 1, 1)
        node = self.store.get_entry(parse_path(path))
        print(format_data(node.as_dict()), file=self.out)

    def do_show(self, args: str) -> None:
        _split(args, 0, 0)
        print(render_tree(self.store.snapshot), file=self.out)

    def do_dump(self, args: str) -> None:
        _split(args, 0, 0)
        print(json.dumps(self.store.as_list(), indent=2), file=self.out)


def _split(args: str, required: int, maximum: int) -> list[str]:
    """Split command arguments on whitespace.

    The last argument takes the rest of the line, so JSON may contain
    spaces. Missing optional arguments are returned as ''.
    """
    parts = args.split(None, maximum - 1) if maximum and args else []
    if len(parts) < required:
        raise CommandError(f"Expected at least {required} argument(s), got {len(parts)}")
    if maximum == 0 and args:
        raise CommandError("Command takes no arguments")
    return parts + [''] * (maximum - len(parts))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='genro-nestedlist',
        description='Apply path-addressed commands to a nested list of groups and entries.',
    )
    parser.add_argument(
        '--load', metavar='FILE', type=Path,
        help='JSON file with the initial list of nodes',
    )
    parser.add_argument(
        '--allow-duplicates', action='store_true',
        help='allow siblings with the same name',
    )
    parser.add_argument(
        '--script', metavar='FILE', type=Path,
        help='read commands from FILE instead of stdin',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='log every committed change',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        initial = None
        if args.load is not None:
            initial = json.loads(args.load.read_text(encoding='utf-8'))
        store = NestedList(initial, unique=not args.allow_duplicates)
    except (OSError, ValueError) as exc:
        logger.error("cannot load %s: %s", args.load, exc)
        return 2

    shell = Shell(store)
    if args.script is not None:
        try:
            with args.script.open(encoding='utf-8') as fh:
                failures = shell.run(fh)
        except OSError as exc:
            logger.error("cannot read %s: %s", args.script, exc)
            return 2
    else:
        failures = shell.run(sys.stdin)
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
