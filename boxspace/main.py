"""
Command runner for object spaces.

Loads a space configuration, then executes commands read from a script
file or stdin, one per line:

    insert SPACE VALUE...          store a new tuple
    replace SPACE VALUE...         replace the tuple with the same primary key
    put SPACE VALUE...             insert or replace
    update SPACE KEY... OP...      update fields in place, OP is one of
                                   set|add|and|xor|or|insert FIELDNO VALUE,
                                   delete FIELDNO, splice FIELDNO OFFSET LENGTH TEXT
    delete SPACE KEY...            delete by primary key
    select SPACE INDEX KEY...      point lookups
    range SPACE INDEX [START [END]]
    count SPACE

Values are strings unless written as #NUMBER (#-NUMBER for a negative
add). Lines starting with ';' are comments. Run with:

    python -m boxspace.main --config box.cfg script.txt
"""
import argparse
import logging
import re
import shlex
import sys
from typing import Any, Optional, TextIO

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .catalog import SpaceRegistry
from .core.exceptions import DbException, InvalidArgumentError, ParsingException
from .core.tuple import Tuple

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r'^#-?\d+$')

# update operator name -> number of value arguments after FIELDNO
_UPDATE_ARITY = {
    "set": 1, "add": 1, "and": 1, "xor": 1, "or": 1, "insert": 1,
    "delete": 0, "splice": 3,
}


def configure_logging(verbose: bool = False) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def parse_value(token: str) -> Any:
    """'#42' is the integer 42 ('#-1' is -1), anything else is a string."""
    if _NUMBER.match(token):
        return int(token[1:])
    return token


class CommandRunner:
    """Executes text commands against a SpaceRegistry and renders results."""

    def __init__(self, registry: SpaceRegistry, console: Optional[Console] = None):
        self.registry = registry
        self.console = console or Console()
        self.failures = 0
        self._commands = {
            "insert": self._insert,
            "replace": self._replace,
            "put": self._put,
            "update": self._update,
            "delete": self._delete,
            "select": self._select,
            "range": self._range,
            "count": self._count,
        }

    def run_script(self, stream: TextIO) -> int:
        """Run every command in a stream; returns the number of failed commands."""
        for line in stream:
            self.run_line(line)
        return self.failures

    def run_line(self, line: str):
        """
        Execute one command line and print its result.

        Returns:
            The command result, or None for blank/comment lines and failures
        """
        line = line.strip()
        if not line or line.startswith(";"):
            return None

        try:
            tokens = shlex.split(line)
            command, args = tokens[0].lower(), tokens[1:]
            if command not in self._commands:
                raise ParsingException(f"Unknown command: {command}")
            result = self._commands[command](args)
        except (DbException, ParsingException, ValueError) as e:
            self.failures += 1
            self.console.print(f"[bold red]✗[/bold red] {line}: {e}")
            return None

        self._render(line, result)
        return result

    # ------------------------------------------------------------------
    # commands

    def _insert(self, args: list[str]) -> list[Tuple]:
        space, values = self._space_and_rest(args, "insert SPACE VALUE...")
        return [space.insert(values)]

    def _replace(self, args: list[str]) -> list[Tuple]:
        space, values = self._space_and_rest(args, "replace SPACE VALUE...")
        space.replace(values)
        return [space.get(self._primary_key(space, values))]

    def _put(self, args: list[str]) -> list[Tuple]:
        space, values = self._space_and_rest(args, "put SPACE VALUE...")
        space.put(values)
        return [space.get(self._primary_key(space, values))]

    def _update(self, args: list[str]) -> list[Tuple]:
        if len(args) < 2:
            raise InvalidArgumentError("usage: update SPACE KEY... OP...")
        space = self.registry.space(_int_arg(args[0]))
        arity = space.primary.key_builder.arity
        key = tuple(parse_value(token) for token in args[1:1 + arity])
        ops = _parse_update_ops(args[1 + arity:])
        updated = space.update(key, ops)
        return [updated] if updated is not None else []

    def _delete(self, args: list[str]) -> list[Tuple]:
        space, key = self._space_and_rest(args, "delete SPACE KEY...")
        removed = space.delete(tuple(key))
        return [removed] if removed is not None else []

    def _select(self, args: list[str]) -> list[Tuple]:
        if len(args) < 3:
            raise InvalidArgumentError("usage: select SPACE INDEX KEY...")
        space = self.registry.space(_int_arg(args[0]))
        index_no = _int_arg(args[1])
        parts = [parse_value(token) for token in args[2:]]
        arity = space.index(index_no).key_builder.arity
        if len(parts) % arity:
            raise InvalidArgumentError(
                f"{len(parts)} key parts do not split into keys of {arity}")
        keys = [tuple(parts[i:i + arity]) for i in range(0, len(parts), arity)]
        return space.select(keys, index=index_no)

    def _range(self, args: list[str]) -> list[Tuple]:
        if len(args) < 2:
            raise InvalidArgumentError("usage: range SPACE INDEX [START [END]]")
        space = self.registry.space(_int_arg(args[0]))
        index_no = _int_arg(args[1])
        parts = [parse_value(token) for token in args[2:]]
        arity = space.index(index_no).key_builder.arity
        if len(parts) not in (0, arity, 2 * arity):
            raise InvalidArgumentError(
                f"range bounds need {arity} parts each, got {len(parts)}")
        start = tuple(parts[:arity]) if parts else None
        end = tuple(parts[arity:]) if len(parts) == 2 * arity else None
        return space.select_range(index_no, start=start, end=end)

    def _count(self, args: list[str]) -> int:
        if len(args) != 1:
            raise InvalidArgumentError("usage: count SPACE")
        return self.registry.space(_int_arg(args[0])).count()

    # ------------------------------------------------------------------
    # helpers

    def _space_and_rest(self, args: list[str], usage: str):
        if len(args) < 2:
            raise InvalidArgumentError(f"usage: {usage}")
        space = self.registry.space(_int_arg(args[0]))
        return space, [parse_value(token) for token in args[1:]]

    @staticmethod
    def _primary_key(space, values: list) -> tuple:
        return tuple(values[kf.fieldno] for kf in space.primary.spec.key_fields)

    def _render(self, title: str, result) -> None:
        if isinstance(result, int):
            self.console.print(f"[bold cyan]ℹ[/bold cyan] {title}: {result}")
            return

        width = max((t.cardinality for t in result), default=0)
        table = Table(title=title, box=box.ROUNDED, title_justify="left")
        table.add_column("#", style="dim")
        for i in range(width):
            table.add_column(f"field {i}")
        for row_no, tuple_obj in enumerate(result):
            cells = [repr(value) for value in tuple_obj]
            table.add_row(str(row_no), *cells, *([""] * (width - len(cells))))
        self.console.print(table)


def _int_arg(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidArgumentError(f"Expected a number, got {token!r}")


def _parse_update_ops(tokens: list[str]) -> list[tuple]:
    """Split `OP FIELDNO ARG...` groups into (fieldno, op, arg) operations."""
    ops = []
    pos = 0
    while pos < len(tokens):
        op = tokens[pos].lower()
        if op not in _UPDATE_ARITY:
            raise InvalidArgumentError(f"Unknown update operator: {tokens[pos]}")
        count = _UPDATE_ARITY[op]
        group = tokens[pos + 1:pos + 2 + count]
        if len(group) != count + 1:
            raise InvalidArgumentError(f"'{op}' needs FIELDNO and {count} argument(s)")

        fieldno = _int_arg(group[0])
        if op == "splice":
            arg = (_int_arg(group[1]), _int_arg(group[2]), group[3])
        elif count:
            arg = parse_value(group[1])
        else:
            arg = None
        ops.append((fieldno, op, arg))
        pos += 2 + count
    return ops


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boxspace", description="Run commands against in-memory object spaces.")
    parser.add_argument("--config", required=True, help="space configuration file")
    parser.add_argument("--format", choices=["cfg", "json"], default=None,
                        help="config format (default: guessed from the file suffix)")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    parser.add_argument("script", nargs="?", help="command file (default: stdin)")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point of the application."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    console = Console()

    try:
        registry = SpaceRegistry.from_file(args.config, args.format)
    except (DbException, ParsingException) as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        return 2

    logger.info("Loaded %s", registry)
    runner = CommandRunner(registry, console)
    if args.script:
        with open(args.script, encoding="utf-8") as stream:
            failures = runner.run_script(stream)
    else:
        failures = runner.run_script(sys.stdin)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
