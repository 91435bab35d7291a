"""
YouTube link parsing.
"""

import re
from typing import Optional

_VIDEO_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"^([a-zA-Z0-9_-]{11})$"),
)


def extract_video_id(url: str) -> Optional[str]:
    """Extract the video id from a watch, short-link or embed URL, or a bare id.

    Returns None when the input matches none of the supported forms.
    """
    if not url:
        return None
    candidate = url.strip()
    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.search(candidate)
        if match:
            return match.group(1)
    return None
