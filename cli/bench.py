"""In-memory bench: grids of blocks sharing one broadcast channel."""

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from common.logging_config import get_logger
from cli.layout import BlockEntry, HostLayout
from relay.bootstrap import bootstrap_relay
from relay.exceptions import HostBootstrapError
from relay.host import (
    InMemoryBlockRegistry,
    InMemoryBroadcastChannel,
    InMemoryTextSurface,
    ProgramBlock,
    SurfaceProviderBlock,
    TerminalBlock,
)
from relay.replication_loop import CycleReport, ReplicationLoop
from relay.scheduler import ReplicationScheduler

logger = get_logger(__name__)


class BenchError(Exception):
    """Raised when a bench command refers to something that does not exist."""

    pass


@dataclass
class GridHost:
    """One grid with its registry and, if it has a running program block, its relay."""
    name: str
    registry: InMemoryBlockRegistry
    loop: Optional[ReplicationLoop] = None
    program_name: Optional[str] = None


def build_block(entry: BlockEntry) -> TerminalBlock:
    """Create an in-memory block from its layout entry."""
    if entry.type == "program":
        return ProgramBlock(entry.name, custom_data=entry.custom_data, is_running=entry.running)
    if entry.type == "panel":
        return SurfaceProviderBlock(entry.name, [InMemoryTextSurface(text) for text in entry.surfaces])
    return TerminalBlock(entry.name)


class Bench:
    """
    Simulated host for one or more relays.

    Grids without a running program block still hold surfaces that other
    grids' relays cannot reach; each relay only sees its own grid.
    """

    def __init__(self, layout: HostLayout):
        """
        Build every grid and boot its relay.

        Args:
            layout: Validated host layout

        Raises:
            MalformedConfigError: If a program block's configuration is invalid
        """
        self.channel = InMemoryBroadcastChannel()
        self.grids: Dict[str, GridHost] = {}

        for grid_entry in layout.grids:
            registry = InMemoryBlockRegistry(build_block(entry) for entry in grid_entry.blocks)
            grid = GridHost(name=grid_entry.name, registry=registry)

            try:
                program, loop = bootstrap_relay(registry, registry.blocks(), self.channel)
            except HostBootstrapError as e:
                logger.warning(f"Grid {grid_entry.name} has no relay: {e}")
            else:
                grid.loop = loop
                grid.program_name = program.name

            self.grids[grid.name] = grid

        self.scheduler = ReplicationScheduler(self.loops())

    def loops(self) -> List[ReplicationLoop]:
        return [grid.loop for grid in self.grids.values() if grid.loop is not None]

    def block_names(self) -> List[str]:
        """Names of every block with text surfaces, across all grids."""
        return sorted({
            block.name
            for grid in self.grids.values()
            for block in grid.registry.blocks()
            if isinstance(block, SurfaceProviderBlock)
        })

    def find_surface(self, block_name: str, index: int) -> Tuple[str, InMemoryTextSurface]:
        """
        Find a surface by block name, optionally qualified as 'grid/block'.

        Returns:
            Tuple of (grid name, surface)

        Raises:
            BenchError: If no such block or surface exists, or an unqualified
                name matches blocks on more than one grid
        """
        grid_name, _, name = block_name.rpartition("/")
        if grid_name and grid_name not in self.grids:
            raise BenchError(f"Unknown grid: {grid_name}")
        grids = [self.grids[grid_name]] if grid_name else list(self.grids.values())

        matches = [
            (grid, grid.registry.get_block_with_name(name))
            for grid in grids
            if grid.registry.get_block_with_name(name) is not None
        ]
        if not matches:
            raise BenchError(f"Unknown block: {block_name}")
        if len(matches) > 1:
            grid_names = ", ".join(grid.name for grid, _ in matches)
            raise BenchError(f"Block {name} exists on several grids ({grid_names}), use 'grid/block'")

        grid, block = matches[0]
        if not isinstance(block, SurfaceProviderBlock):
            raise BenchError(f"Block {name} has no text surfaces")
        if not 0 <= index < block.surface_count:
            raise BenchError(f"Block {name} has no surface {index}")
        return grid.name, block.get_surface(index)

    def tick(self, count: int = 1) -> CycleReport:
        """Run count cycles on every relay and return summed counters."""
        total = CycleReport()
        for _ in range(count):
            for loop in self.loops():
                report = loop.run_cycle()
                for key, value in vars(report).items():
                    setattr(total, key, getattr(total, key) + value)
        return total

    async def run_for(self, seconds: float) -> int:
        """
        Let the scheduler drive the relays for a while.

        Returns:
            Number of ticks executed
        """
        start_ticks = self.scheduler.ticks
        await self.scheduler.start()
        try:
            await asyncio.sleep(seconds)
        finally:
            await self.scheduler.stop()
        return self.scheduler.ticks - start_ticks

    def status_lines(self) -> List[str]:
        lines = []
        for grid in self.grids.values():
            if grid.loop is None:
                lines.append(f"{grid.name}: no relay")
                continue
            snapshot = grid.loop.snapshot()
            lines.append(f"{grid.name}: relay on {grid.program_name}, {snapshot['cycles']} cycle(s)")
            for tag, ref in snapshot["transmitters"].items():
                lines.append(f"  tx {tag} <- {ref}")
            for tag, refs in snapshot["receivers"].items():
                lines.append(f"  rx {tag} -> {', '.join(refs)}")
        lines.append(f"messages sent: {len(self.channel.sent)}")
        return lines
