"""
Fixed-size partitioning of timelines for model requests.
"""

from collections.abc import Sequence

from .models import SubtitleBlock

DEFAULT_CHUNK_SIZE = 50


def chunk_blocks(
    blocks: Sequence[SubtitleBlock], size: int = DEFAULT_CHUNK_SIZE
) -> list[list[SubtitleBlock]]:
    """Split blocks into consecutive chunks of at most ``size`` items, order preserved."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(blocks[i : i + size]) for i in range(0, len(blocks), size)]
