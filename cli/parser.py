"""Command parser for bench CLI input."""

import shlex

from cli.models import (
    CommandRequest,
    ReadCommand,
    RunCommand,
    StatusCommand,
    TickCommand,
    WriteCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a command object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        One of Tick/Run/Read/Write/Status commands

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    command_name = tokens[0].lower()

    if command_name == "tick":
        return _parse_tick(tokens[1:])
    elif command_name == "run":
        return _parse_run(tokens[1:])
    elif command_name == "read":
        return _parse_read(tokens[1:])
    elif command_name == "write":
        return _parse_write(tokens[1:])
    elif command_name == "status":
        if len(tokens) > 1:
            raise ParseError("status takes no arguments")
        return StatusCommand()
    else:
        raise ParseError(f"Unknown command: {tokens[0]}")


def _parse_tick(args: list[str]) -> TickCommand:
    """Parse 'tick [count]' command."""
    if not args:
        return TickCommand()
    if len(args) > 1 or not args[0].isdigit() or int(args[0]) < 1:
        raise ParseError("tick takes an optional positive cycle count")
    return TickCommand(count=int(args[0]))


def _parse_run(args: list[str]) -> RunCommand:
    """Parse 'run <seconds>' command."""
    if len(args) != 1:
        raise ParseError("run requires exactly 1 argument: <seconds>")
    try:
        seconds = float(args[0])
    except ValueError:
        raise ParseError(f"Invalid number of seconds: {args[0]}")
    if seconds <= 0:
        raise ParseError("run requires a positive number of seconds")
    return RunCommand(seconds=seconds)


def _parse_read(args: list[str]) -> ReadCommand:
    """Parse 'read <block> [surface]' command."""
    if len(args) == 1:
        return ReadCommand(block=args[0])
    if len(args) == 2 and args[1].isdigit():
        return ReadCommand(block=args[0], surface=int(args[1]))
    raise ParseError("read requires <block> and an optional surface index")


def _parse_write(args: list[str]) -> WriteCommand:
    """Parse 'write <block> [surface] <text>' command.

    A literal \\n in the text becomes a line break.
    """
    if len(args) < 2:
        raise ParseError("write requires <block> [surface] <text>")

    block = args[0]
    rest = args[1:]
    surface = 0
    if len(rest) > 1 and rest[0].isdigit():
        surface = int(rest[0])
        rest = rest[1:]

    text = " ".join(rest).replace("\\n", "\n")
    return WriteCommand(block=block, text=text, surface=surface)
