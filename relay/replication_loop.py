"""
Transmit/receive cycle that mirrors surface content across broadcast tags.

Each call to run_cycle():

1. Transmit: for every transmitter, read the surface, hash the text and
   publish it on the tag only if the hash changed since the last send.
2. Receive: drain every listener and overwrite each receiving surface of
   the message's tag with the payload.

Any failure while handling one transmitter, message or receiving surface
only affects that entry; the rest of the cycle still runs.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from common.content_hash import HashFunction, compute_content_hash
from common.types import BroadcastMessage, SurfaceReference
from relay.broadcast import BroadcastChannel, BroadcastListener, drain
from relay.exceptions import PayloadTypeMismatch, UnresolvedSurfaceError
from relay.replication_table import ReplicationTable
from relay.surfaces import SurfaceResolver

logger = logging.getLogger(__name__)


class LoopState(Enum):
    IDLE = "idle"
    TRANSMITTING = "transmitting"
    RECEIVING = "receiving"


@dataclass
class CycleReport:
    """Counters for one run of the replication cycle."""
    transmitted: int = 0
    unchanged: int = 0
    skipped_transmitters: int = 0
    received: int = 0
    dropped: int = 0
    writes: int = 0
    failed_writes: int = 0


class ReplicationLoop:
    """
    Runs one replication cycle per external tick.

    Listeners are registered at construction, one per distinct receiver tag,
    and kept for the lifetime of the loop.
    """

    def __init__(
        self,
        table: ReplicationTable,
        resolver: SurfaceResolver,
        channel: BroadcastChannel,
        hash_function: HashFunction = compute_content_hash,
    ):
        """
        Initialize the loop and subscribe to receiver tags.

        Args:
            table: Replication table built at startup
            resolver: Surface resolver used on every access
            channel: Host broadcast channel
            hash_function: Digest used for change suppression
        """
        self.table = table
        self.resolver = resolver
        self.channel = channel
        self.hash_function = hash_function
        self.state = LoopState.IDLE
        self.cycles = 0

        self.listeners: List[BroadcastListener] = [
            channel.register_broadcast_listener(tag) for tag in table.receiver_tags()
        ]

        logger.info(
            f"Replication loop ready [transmitters={len(table.transmitters)}, "
            f"listeners={len(self.listeners)}]"
        )

    def run_cycle(self) -> CycleReport:
        """
        Execute one transmit phase followed by one receive phase.

        Returns:
            CycleReport with the counters of this cycle
        """
        report = CycleReport()
        try:
            self.state = LoopState.TRANSMITTING
            self._transmit(report)

            self.state = LoopState.RECEIVING
            self._receive(report)
        finally:
            self.state = LoopState.IDLE
            self.cycles += 1

        logger.debug(f"Cycle {self.cycles} finished: {report}")
        return report

    def _transmit(self, report: CycleReport) -> None:
        for tag, reference in self.table.transmitters.items():
            try:
                self._transmit_entry(tag, reference, report)
            except UnresolvedSurfaceError as e:
                logger.warning(f"Transmitter '{tag}' skipped this cycle: {e}")
                report.skipped_transmitters += 1
            except Exception as e:
                logger.warning(f"Transmitter '{tag}' failed on {reference}: {e}")
                report.skipped_transmitters += 1

    def _transmit_entry(self, tag: str, reference: SurfaceReference, report: CycleReport) -> None:
        surface = self.resolver.resolve(reference)
        text = surface.read_text()
        content_hash = self.hash_function(text)

        if content_hash == self.table.last_hash(tag):
            report.unchanged += 1
            return

        self.channel.send_broadcast_message(tag, text)
        self.table.record_hash(tag, content_hash)
        report.transmitted += 1
        logger.debug("Transmitted on '%s' from %s: %s", tag, reference, text)

    def _receive(self, report: CycleReport) -> None:
        for listener in self.listeners:
            for message in drain(listener):
                report.received += 1
                try:
                    self._deliver(message, report)
                except PayloadTypeMismatch:
                    report.dropped += 1

    def _deliver(self, message: BroadcastMessage, report: CycleReport) -> None:
        references = self.table.receivers_for(message.tag)
        if not references:
            report.dropped += 1
            return

        if not isinstance(message.data, str):
            raise PayloadTypeMismatch(message.tag, type(message.data))

        for reference in references:
            try:
                surface = self.resolver.resolve(reference)
            except UnresolvedSurfaceError as e:
                logger.warning(f"Receiver on '{message.tag}' not updated: {e}")
                report.failed_writes += 1
                continue

            try:
                surface.write_text(message.data, append=False)
            except Exception as e:
                logger.warning(f"Receiver {reference} on '{message.tag}' rejected write: {e}")
                report.failed_writes += 1
                continue

            report.writes += 1
            logger.debug("Wrote '%s' payload to %s: %s", message.tag, reference, message.data)

    def snapshot(self) -> Dict[str, object]:
        """Summary of the loop for status displays."""
        return {
            "state": self.state.value,
            "cycles": self.cycles,
            "transmitters": {tag: str(ref) for tag, ref in self.table.transmitters.items()},
            "receivers": {
                tag: [str(ref) for ref in refs] for tag, refs in self.table.receivers.items()
            },
        }
