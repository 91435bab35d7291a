"""
Conversion of raw caption entries into subtitle blocks.
"""

import logging
from collections.abc import Sequence
from typing import Any, Optional

from .errors import EmptyTranscriptError, NoTranscriptError
from .models import SubtitleBlock

logger = logging.getLogger("subtitler")

_MISSING = object()


def _field(obj: Any, name: str) -> Any:
    """Read a field from a mapping or an attribute object."""
    if isinstance(obj, dict):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def parse_ms(value: Any) -> int:
    """Parse a millisecond value; anything non-numeric becomes 0."""
    if value is _MISSING or value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _to_block(segment: Any) -> Optional[SubtitleBlock]:
    start = _field(segment, "start_ms")
    end = _field(segment, "end_ms")
    snippet = _field(segment, "snippet")
    if start is _MISSING or end is _MISSING or snippet is _MISSING or snippet is None:
        return None

    text = _field(snippet, "text")
    if text is _MISSING or text is None:
        text = ""

    offset = parse_ms(start)
    return SubtitleBlock(text=str(text), offset=offset, duration=parse_ms(end) - offset)


def normalize_segments(raw_segments: Optional[Sequence[Any]]) -> list[SubtitleBlock]:
    """Convert raw caption segments into a timeline.

    Entries without start/end timing or a snippet (section headers and other
    structural entries) are dropped. Durations are end minus start and are
    passed through as-is, even when the source timing makes them negative.

    Raises:
        NoTranscriptError: raw_segments is None (no caption track)
        EmptyTranscriptError: nothing usable is left after filtering
    """
    if raw_segments is None:
        raise NoTranscriptError()

    blocks: list[SubtitleBlock] = []
    for segment in raw_segments:
        block = _to_block(segment)
        if block is not None:
            blocks.append(block)

    dropped = len(raw_segments) - len(blocks)
    if dropped:
        logger.debug(f"Dropped {dropped} non-caption entries")
    if not blocks:
        raise EmptyTranscriptError()

    logger.info(f"Normalized {len(blocks)} subtitle blocks")
    return blocks
