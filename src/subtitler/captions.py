"""
Caption track fetching.
"""

import logging
from collections.abc import Sequence
from typing import Any, Optional, Protocol

from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled, YouTubeTranscriptApi

logger = logging.getLogger("subtitler")


class CaptionSource(Protocol):
    """Anything that can return raw caption segments for a video id.

    ``fetch`` returns None when the video has no caption track and may raise
    for any other failure.
    """

    def fetch(self, video_id: str) -> Optional[Sequence[Any]]: ...


class YouTubeCaptionSource:
    """Caption source backed by youtube-transcript-api."""

    def __init__(
        self,
        languages: Sequence[str] = ("en",),
        api: Optional[YouTubeTranscriptApi] = None,
    ) -> None:
        self.languages = tuple(languages)
        self.api = api or YouTubeTranscriptApi()

    def _pick_transcript(self, transcript_list):
        try:
            return transcript_list.find_transcript(list(self.languages))
        except NoTranscriptFound:
            logger.info(
                f"No transcript in preferred languages {list(self.languages)}, using first available"
            )
        # manual tracks first, then generated
        for transcript in transcript_list:
            return transcript
        return None

    def fetch(self, video_id: str) -> Optional[list[dict[str, Any]]]:
        """Fetch raw caption segments for a video.

        Returns:
            List of raw segments ({"start_ms", "end_ms", "snippet": {"text"}}),
            or None if the video has no usable caption track
        """
        try:
            transcript_list = self.api.list(video_id)
            transcript = self._pick_transcript(transcript_list)
            if transcript is None:
                return None
            kind = "auto-generated" if transcript.is_generated else "manual"
            logger.info(f"Using transcript language: {transcript.language_code} ({kind})")
            fetched = transcript.fetch()
        except (TranscriptsDisabled, NoTranscriptFound) as e:
            logger.info(f"No captions for {video_id}: {type(e).__name__}")
            return None

        raw: list[dict[str, Any]] = []
        for snippet in fetched:
            start = float(getattr(snippet, "start", 0.0))
            duration = float(getattr(snippet, "duration", 0.0))
            raw.append(
                {
                    "start_ms": str(round(start * 1000)),
                    "end_ms": str(round((start + duration) * 1000)),
                    "snippet": {"text": getattr(snippet, "text", None)},
                }
            )
        logger.info(f"Found {len(raw)} transcript entries for {video_id}")
        return raw
