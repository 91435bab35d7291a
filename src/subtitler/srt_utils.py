"""
SRT export for subtitle timelines.
"""

import logging
from collections.abc import Sequence

from .models import SubtitleBlock

logger = logging.getLogger("subtitler")


def format_timestamp(ms: int) -> str:
    """Format milliseconds as HH:MM:SS,mmm (negative values clamp to zero)."""
    ms = max(0, int(ms))
    h, rest = divmod(ms, 3_600_000)
    m, rest = divmod(rest, 60_000)
    s, millis = divmod(rest, 1000)
    return f"{h:02}:{m:02}:{s:02},{millis:03}"


def timeline_to_srt(blocks: Sequence[SubtitleBlock]) -> str:
    """Render a timeline as SRT text."""
    return "".join(
        f"{i}\n{format_timestamp(b.offset)} --> {format_timestamp(b.offset + b.duration)}\n{b.text}\n\n"
        for i, b in enumerate(blocks, 1)
    )


def write_srt(blocks: Sequence[SubtitleBlock], path: str) -> None:
    """Write a timeline to an SRT file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(timeline_to_srt(blocks))
    logger.info(f"Saved SRT -> {path} ({len(blocks)} cues)")
