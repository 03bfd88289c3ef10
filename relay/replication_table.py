"""
Tag-to-surface table built once from parsed configuration.

A tag maps to at most one transmitting surface and to any number of
receiving surfaces. The last content hash sent for each transmitter is kept
here, in a map keyed by tag, not on the references themselves.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from common.constants import (
    BLOCK_KEY,
    DEFAULT_SURFACE_INDEX,
    RECEIVER_SECTION,
    SURFACE_KEY,
    TAG_KEY,
    TRANSMITTER_SECTION,
)
from common.types import SurfaceReference
from relay.config_parser import ConfigSection
from relay.exceptions import MissingFieldWarning, UnresolvedSurfaceError
from relay.surfaces import SurfaceResolver

logger = logging.getLogger(__name__)


@dataclass
class ReplicationTable:
    """
    Transmitters and receivers keyed by tag.

    Attributes:
        transmitters: Tag -> the single surface whose content is published
        receivers: Tag -> surfaces that get every payload of that tag, in config order
        content_hashes: Tag -> digest of the last transmitted content

    The hash state is keyed by transmitter tag rather than by surface
    (provider name, index). The same surface published under two tags
    therefore keeps one state per tag, and replacing a tag's transmitter
    resets that tag's state.
    """
    transmitters: Dict[str, SurfaceReference] = field(default_factory=dict)
    receivers: Dict[str, List[SurfaceReference]] = field(default_factory=dict)
    content_hashes: Dict[str, Optional[str]] = field(default_factory=dict)

    def add_transmitter(self, tag: str, reference: SurfaceReference) -> None:
        """Register a transmitter; an existing one for the tag is replaced."""
        if tag in self.transmitters:
            logger.debug(f"Transmitter for tag '{tag}' replaced by {reference}")
        self.transmitters[tag] = reference
        self.content_hashes[tag] = None

    def add_receiver(self, tag: str, reference: SurfaceReference) -> None:
        """Append a receiver to the tag's list."""
        self.receivers.setdefault(tag, []).append(reference)

    def receiver_tags(self) -> List[str]:
        """Distinct receiver tags, in first-configured order."""
        return list(self.receivers.keys())

    def receivers_for(self, tag: str) -> List[SurfaceReference]:
        return self.receivers.get(tag, [])

    def last_hash(self, tag: str) -> Optional[str]:
        """Digest last sent for the tag, None if nothing was sent yet."""
        return self.content_hashes.get(tag)

    def record_hash(self, tag: str, content_hash: str) -> None:
        self.content_hashes[tag] = content_hash


def _read_reference(section: ConfigSection) -> SurfaceReference:
    block = section.get(BLOCK_KEY, "")
    if block == "":
        raise MissingFieldWarning(section.name, BLOCK_KEY)
    index = section.get_int(SURFACE_KEY, DEFAULT_SURFACE_INDEX)
    return SurfaceReference(provider_name=block, surface_index=index)


def _read_tag(section: ConfigSection, reference: SurfaceReference) -> str:
    tag = section.get(TAG_KEY, "")
    return tag if tag != "" else reference.provider_name


def build_replication_table(root: ConfigSection, resolver: SurfaceResolver) -> ReplicationTable:
    """
    Build the replication table from a parsed configuration.

    Sections with a missing block or an unresolvable surface are skipped
    with a warning. Sections other than transmitter/receiver are ignored.

    Args:
        root: Root section returned by parse_config
        resolver: Resolver used to check that each surface exists

    Returns:
        ReplicationTable

    Raises:
        MalformedConfigError: If a surface index is not an integer
    """
    table = ReplicationTable()

    for section_name, register in (
        (TRANSMITTER_SECTION, table.add_transmitter),
        (RECEIVER_SECTION, table.add_receiver),
    ):
        for section in root.sections(section_name):
            try:
                reference = _read_reference(section)
                resolver.resolve(reference)
            except (MissingFieldWarning, UnresolvedSurfaceError) as e:
                logger.warning(f"Skipping [{section.name}] section: {e}")
                continue

            tag = _read_tag(section, reference)
            register(tag, reference)
            logger.debug(f"Added {section.name} for tag '{tag}' on {reference}")

    logger.info(
        f"Replication table built [transmitters={len(table.transmitters)}, "
        f"receiver_tags={len(table.receivers)}]"
    )
    return table
