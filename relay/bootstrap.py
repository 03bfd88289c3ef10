"""
Startup wiring: find the hosting program block, parse its configuration and
build a ready-to-run ReplicationLoop.
"""

import logging
from typing import Iterable, Tuple

from common.content_hash import HashFunction, compute_content_hash
from relay.broadcast import BroadcastChannel
from relay.config_parser import parse_config
from relay.exceptions import HostBootstrapError
from relay.replication_loop import ReplicationLoop
from relay.replication_table import build_replication_table
from relay.surfaces import BlockRegistry, SurfaceResolver

logger = logging.getLogger(__name__)


def locate_program_block(blocks: Iterable[object]):
    """
    Find the single running program block among the host's blocks.

    Args:
        blocks: Every block visible to the host

    Returns:
        The running program block

    Raises:
        HostBootstrapError: If zero or several running program blocks exist
    """
    candidates = [
        block for block in blocks
        if hasattr(block, 'custom_data') and getattr(block, 'is_running', False)
    ]

    if len(candidates) != 1:
        raise HostBootstrapError(
            f"Expected exactly one running program block, found {len(candidates)}"
        )

    return candidates[0]


def create_relay(
    config_text: str,
    registry: BlockRegistry,
    channel: BroadcastChannel,
    hash_function: HashFunction = compute_content_hash,
) -> ReplicationLoop:
    """
    Parse configuration text and build a replication loop from it.

    Args:
        config_text: Raw configuration text
        registry: Host block registry
        channel: Host broadcast channel
        hash_function: Digest used for change suppression

    Returns:
        ReplicationLoop with its listeners registered

    Raises:
        MalformedConfigError: If the configuration is structurally invalid
    """
    root = parse_config(config_text)
    resolver = SurfaceResolver(registry)
    table = build_replication_table(root, resolver)
    return ReplicationLoop(table, resolver, channel, hash_function=hash_function)


def bootstrap_relay(
    registry: BlockRegistry,
    blocks: Iterable[object],
    channel: BroadcastChannel,
) -> Tuple[object, ReplicationLoop]:
    """
    Locate the program block once and build its relay from its custom data.

    Args:
        registry: Host block registry
        blocks: Every block visible to the host
        channel: Host broadcast channel

    Returns:
        Tuple of (program block, ReplicationLoop)

    Raises:
        HostBootstrapError: If the program block cannot be located
        MalformedConfigError: If its configuration is invalid
    """
    program = locate_program_block(blocks)
    logger.info(f"Starting relay from program block {getattr(program, 'name', program)}")
    return program, create_relay(program.custom_data, registry, channel)
