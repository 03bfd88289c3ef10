"""Command data types for the bench CLI."""

from dataclasses import dataclass
from typing import Literal, Union


@dataclass(frozen=True)
class TickCommand:
    """Run replication cycles by hand."""

    count: int = 1
    command: Literal["tick"] = "tick"


@dataclass(frozen=True)
class RunCommand:
    """Let the scheduler drive the relays for a number of seconds."""

    seconds: float
    command: Literal["run"] = "run"


@dataclass(frozen=True)
class ReadCommand:
    """Show the text of a surface."""

    block: str
    surface: int = 0
    command: Literal["read"] = "read"


@dataclass(frozen=True)
class WriteCommand:
    """Replace the text of a surface."""

    block: str
    text: str
    surface: int = 0
    command: Literal["write"] = "write"


@dataclass(frozen=True)
class StatusCommand:
    """Show relays, tags and message count."""

    command: Literal["status"] = "status"


CommandRequest = Union[TickCommand, RunCommand, ReadCommand, WriteCommand, StatusCommand]
