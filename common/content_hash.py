"""Provides content hashing used to suppress redundant broadcasts."""

import hashlib
from typing import Callable


HashFunction = Callable[[str], str]


def compute_content_hash(text: str) -> str:
    """
    Compute a digest over the full text of a surface.

    Only 8 bytes of a BLAKE2b digest are kept. Collisions are tolerated:
    a changed text whose digest collides is simply not retransmitted.

    Args:
        text: Full surface text

    Returns:
        Hexadecimal digest string
    """
    return hashlib.blake2b(text.encode('utf-8'), digest_size=8).hexdigest()
