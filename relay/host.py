"""
In-memory host environment.

Stands in for the game world: named blocks (some of them carrying text
surfaces, some of them program blocks) and a shared broadcast channel.
Used by the bench CLI and by the tests.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Iterable, List, Optional

from common.types import BroadcastMessage


class InMemoryTextSurface:
    """Text surface backed by a string."""

    def __init__(self, text: str = ""):
        self._text = text
        self.write_count = 0

    def read_text(self) -> str:
        return self._text

    def write_text(self, text: str, append: bool = False) -> None:
        self._text = self._text + text if append else text
        self.write_count += 1

    def __repr__(self) -> str:
        return f"InMemoryTextSurface({self._text!r})"


class TerminalBlock:
    """A named block without any text surface."""

    def __init__(self, name: str):
        self.name = name


class SurfaceProviderBlock(TerminalBlock):
    """A named block owning one or more text surfaces (panel, cockpit, ...)."""

    def __init__(self, name: str, surfaces: Optional[List[InMemoryTextSurface]] = None):
        super().__init__(name)
        self.surfaces = surfaces if surfaces is not None else [InMemoryTextSurface()]

    @classmethod
    def with_texts(cls, name: str, *texts: str) -> 'SurfaceProviderBlock':
        """Create a provider with one surface per given text."""
        return cls(name, [InMemoryTextSurface(text) for text in texts])

    @property
    def surface_count(self) -> int:
        return len(self.surfaces)

    def get_surface(self, index: int) -> InMemoryTextSurface:
        return self.surfaces[index]


class ProgramBlock(SurfaceProviderBlock):
    """
    A programmable block.

    Its `custom_data` holds the relay configuration text. It also owns a
    surface, like the real block's built-in screen.
    """

    def __init__(self, name: str, custom_data: str = "", is_running: bool = True):
        super().__init__(name)
        self.custom_data = custom_data
        self.is_running = is_running


class InMemoryBlockRegistry:
    """Block lookup over a fixed set of blocks, keyed by name."""

    def __init__(self, blocks: Iterable[TerminalBlock] = ()):
        self._blocks: Dict[str, TerminalBlock] = {}
        for block in blocks:
            self.add(block)

    def add(self, block: TerminalBlock) -> None:
        self._blocks[block.name] = block

    def remove(self, name: str) -> None:
        self._blocks.pop(name, None)

    def get_block_with_name(self, name: str) -> Optional[TerminalBlock]:
        return self._blocks.get(name)

    def blocks(self) -> List[TerminalBlock]:
        return list(self._blocks.values())


class InMemoryBroadcastListener:
    """Queue of messages for one tag."""

    def __init__(self, tag: str):
        self._tag = tag
        self._pending: Deque[BroadcastMessage] = deque()

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def has_pending_message(self) -> bool:
        return bool(self._pending)

    def accept_message(self) -> BroadcastMessage:
        return self._pending.popleft()

    def deliver(self, message: BroadcastMessage) -> None:
        self._pending.append(message)


@dataclass
class InMemoryBroadcastChannel:
    """
    Broadcast channel delivering every message to every listener of its tag.

    Attributes:
        listeners: Registered listeners grouped by tag
        sent: Every message ever sent, in order
    """
    listeners: Dict[str, List[InMemoryBroadcastListener]] = field(default_factory=dict)
    sent: List[BroadcastMessage] = field(default_factory=list)

    def register_broadcast_listener(self, tag: str) -> InMemoryBroadcastListener:
        listener = InMemoryBroadcastListener(tag)
        self.listeners.setdefault(tag, []).append(listener)
        return listener

    def send_broadcast_message(self, tag: str, data: Any) -> None:
        message = BroadcastMessage(tag=tag, data=data)
        self.sent.append(message)
        for listener in self.listeners.get(tag, []):
            listener.deliver(message)

    def sent_on(self, tag: str) -> List[BroadcastMessage]:
        """Messages sent on a given tag, in order."""
        return [message for message in self.sent if message.tag == tag]
