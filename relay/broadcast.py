"""Broadcast channel interfaces consumed by the replication loop."""

from typing import Any, Protocol

from common.types import BroadcastMessage


class BroadcastListener(Protocol):
    """Tag-filtered, non-blocking receiver of broadcast messages."""

    @property
    def tag(self) -> str:
        ...

    @property
    def has_pending_message(self) -> bool:
        ...

    def accept_message(self) -> BroadcastMessage:
        ...


class BroadcastChannel(Protocol):
    """
    Many-to-many message bus keyed by tag.

    Sending never blocks and is never acknowledged. Every listener
    registered for a tag receives every message sent on it.
    """

    def register_broadcast_listener(self, tag: str) -> BroadcastListener:
        ...

    def send_broadcast_message(self, tag: str, data: Any) -> None:
        ...


def drain(listener: BroadcastListener):
    """
    Yield every message currently pending on a listener, in arrival order.

    Args:
        listener: Listener to drain

    Yields:
        BroadcastMessage objects
    """
    while listener.has_pending_message:
        yield listener.accept_message()
