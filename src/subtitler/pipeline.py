"""
End-to-end pipeline: link -> captions -> blocks -> chunks -> translation.
"""

import logging
from typing import Any, Optional

from tqdm import tqdm

from .cache import FileTimelineCache, MemoryTimelineCache, TimelineCache
from .captions import CaptionSource, YouTubeCaptionSource
from .chunking import DEFAULT_CHUNK_SIZE, chunk_blocks
from .config import Settings, make_openai_client
from .errors import InvalidUrlError, ProcessingError
from .models import ProcessResult, SubtitleBlock
from .segments import normalize_segments
from .translation import Translator
from .youtube import extract_video_id

logger = logging.getLogger("subtitler")


class VideoPipeline:
    """Fetches, translates and caches subtitle timelines for videos."""

    def __init__(
        self,
        caption_source: CaptionSource,
        translator: Translator,
        cache: TimelineCache,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        show_progress: bool = False,
    ) -> None:
        self.caption_source = caption_source
        self.translator = translator
        self.cache = cache
        self.chunk_size = chunk_size
        self.show_progress = show_progress

    def translate_timeline(self, blocks: list[SubtitleBlock]) -> list[SubtitleBlock]:
        """Translate a timeline chunk by chunk, in order."""
        chunks = chunk_blocks(blocks, self.chunk_size)
        translated: list[SubtitleBlock] = []
        for i, chunk in enumerate(
            tqdm(chunks, desc="Translating chunks", disable=not self.show_progress), 1
        ):
            logger.info(f"Translating chunk {i}/{len(chunks)} ({len(chunk)} lines)...")
            translated.extend(self.translator.translate_chunk(chunk))
        return translated

    def _run(self, video_id: str) -> list[SubtitleBlock]:
        cached = self.cache.get(video_id)
        if cached is not None:
            logger.info(f"Cache hit for {video_id} ({len(cached)} blocks)")
            return cached

        logger.info(f"Fetching transcript for video ID: {video_id}")
        blocks = normalize_segments(self.caption_source.fetch(video_id))
        translated = self.translate_timeline(blocks)
        self.cache.set(video_id, translated)
        return translated

    def process_video(self, url: str) -> ProcessResult:
        """Produce a translated timeline for a video link or id.

        Never raises: every failure is returned as ProcessResult.failure.
        """
        video_id: Optional[str] = None
        try:
            video_id = extract_video_id(url)
            if not video_id:
                raise InvalidUrlError()
            return ProcessResult.ok(self._run(video_id), video_id=video_id)
        except ProcessingError as e:
            logger.warning(f"Processing failed: {e}")
            return ProcessResult.failure(str(e), video_id=video_id)
        except Exception as e:
            logger.exception("Processing error")
            return ProcessResult.failure(str(e) or "An unknown error occurred", video_id=video_id)


def build_pipeline(
    settings: Settings,
    *,
    client: Any = None,
    cache: Optional[TimelineCache] = None,
    caption_source: Optional[CaptionSource] = None,
    show_progress: bool = False,
) -> VideoPipeline:
    """Wire a pipeline from settings, creating the default collaborators as needed."""
    if client is None:
        client = make_openai_client(settings)
    if cache is None:
        if settings.cache_dir:
            cache = FileTimelineCache(settings.cache_dir, ttl_seconds=settings.cache_ttl_seconds)
        else:
            cache = MemoryTimelineCache(ttl_seconds=settings.cache_ttl_seconds)
    if caption_source is None:
        caption_source = YouTubeCaptionSource(languages=settings.source_languages)
    return VideoPipeline(
        caption_source=caption_source,
        translator=Translator(client, settings),
        cache=cache,
        chunk_size=settings.chunk_size,
        show_progress=show_progress,
    )
