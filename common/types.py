"""Shared data type definitions (SurfaceReference, BroadcastMessage)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SurfaceReference:
    """
    Address of one text surface on a named block.

    Two references point at the same surface iff both fields are equal.
    """
    provider_name: str
    surface_index: int

    def __str__(self) -> str:
        return f"{self.provider_name}#{self.surface_index}"


@dataclass(frozen=True)
class BroadcastMessage:
    """
    A single message delivered by the broadcast channel.

    `data` is whatever the sender posted; receivers only act on text.
    """
    tag: str
    data: Any
