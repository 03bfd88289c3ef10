"""Command handler functions for bench CLI operations."""

import asyncio

from common.logging_config import get_logger
from cli.bench import Bench, BenchError
from cli.models import (
    ReadCommand,
    RunCommand,
    StatusCommand,
    TickCommand,
    WriteCommand,
)

logger = get_logger(__name__)


def handle_tick(cmd: TickCommand, bench: Bench) -> str:
    """
    Handle 'tick' command.

    Args:
        cmd: TickCommand with the number of cycles
        bench: Bench to drive

    Returns:
        Summary of the cycles
    """
    if not bench.loops():
        return "No relay is running on any grid"
    report = bench.tick(cmd.count)
    return (
        f"{cmd.count} cycle(s): sent {report.transmitted}, unchanged {report.unchanged}, "
        f"received {report.received}, dropped {report.dropped}, "
        f"written {report.writes}, failed {report.failed_writes + report.skipped_transmitters}"
    )


def handle_run(cmd: RunCommand, bench: Bench) -> str:
    """
    Handle 'run' command.

    Args:
        cmd: RunCommand with the duration
        bench: Bench to drive

    Returns:
        Number of ticks executed
    """
    ticks = asyncio.run(bench.run_for(cmd.seconds))
    return f"Ran {ticks} tick(s) in {cmd.seconds:g}s"


def handle_read(cmd: ReadCommand, bench: Bench) -> str:
    """
    Handle 'read' command.

    Args:
        cmd: ReadCommand with block and surface index
        bench: Bench holding the surface

    Returns:
        Surface text or error message
    """
    try:
        grid_name, surface = bench.find_surface(cmd.block, cmd.surface)
    except BenchError as e:
        return f"Error: {e}"
    return f"[{grid_name}/{cmd.block.rpartition('/')[2]}#{cmd.surface}]\n{surface.read_text()}"


def handle_write(cmd: WriteCommand, bench: Bench) -> str:
    """
    Handle 'write' command.

    Args:
        cmd: WriteCommand with block, surface index and text
        bench: Bench holding the surface

    Returns:
        Success or error message
    """
    try:
        grid_name, surface = bench.find_surface(cmd.block, cmd.surface)
    except BenchError as e:
        return f"Error: {e}"
    surface.write_text(cmd.text)
    logger.debug(f"Bench wrote {len(cmd.text)} chars to {grid_name}/{cmd.block}#{cmd.surface}")
    return f"Wrote {len(cmd.text)} chars"


def handle_status(cmd: StatusCommand, bench: Bench) -> str:
    """Handle 'status' command."""
    return "\n".join(bench.status_lines())
