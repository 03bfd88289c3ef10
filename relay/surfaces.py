"""
Text surface abstractions and resolution of surface references.

The host environment supplies the block registry; the relay only needs to
turn a SurfaceReference into something it can read from and write to.
"""

from typing import Optional, Protocol, runtime_checkable

from common.types import SurfaceReference
from relay.exceptions import UnresolvedSurfaceError


@runtime_checkable
class TextSurface(Protocol):
    """A display that exposes its full text content."""

    def read_text(self) -> str:
        ...

    def write_text(self, text: str, append: bool = False) -> None:
        ...


@runtime_checkable
class SurfaceProvider(Protocol):
    """A block that owns one or more text surfaces."""

    @property
    def surface_count(self) -> int:
        ...

    def get_surface(self, index: int) -> TextSurface:
        ...


class BlockRegistry(Protocol):
    """Host lookup of blocks by their unique name."""

    def get_block_with_name(self, name: str) -> Optional[object]:
        ...


class SurfaceResolver:
    """
    Resolves SurfaceReferences against a block registry.

    Resolution is repeated on every use; nothing is cached, so a block that
    disappears or comes back is picked up on the next attempt.
    """

    def __init__(self, registry: BlockRegistry):
        """
        Initialize the resolver.

        Args:
            registry: Host block registry
        """
        self.registry = registry

    def resolve(self, reference: SurfaceReference) -> TextSurface:
        """
        Resolve a reference to a live surface.

        Args:
            reference: Surface to look up

        Returns:
            The text surface

        Raises:
            UnresolvedSurfaceError: If the block is missing, has no surfaces,
                or the index is out of range
        """
        block = self.registry.get_block_with_name(reference.provider_name)
        if block is None:
            raise UnresolvedSurfaceError(
                reference, f"block {reference.provider_name} not found"
            )

        if not isinstance(block, SurfaceProvider):
            raise UnresolvedSurfaceError(
                reference, f"block {reference.provider_name} is not a text surface provider"
            )

        if not 0 <= reference.surface_index < block.surface_count:
            raise UnresolvedSurfaceError(
                reference,
                f"block {reference.provider_name} has {block.surface_count} surface(s), "
                f"no surface with index {reference.surface_index}"
            )

        return block.get_surface(reference.surface_index)
