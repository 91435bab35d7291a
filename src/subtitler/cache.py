"""
Timeline caches keyed by video id.

Expiry is checked on read; entries are never evicted otherwise. Concurrent
writers for the same key simply overwrite each other.
"""

import hashlib
import json
import logging
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional, Protocol

from .config import DEFAULT_CACHE_TTL_SECONDS
from .models import SubtitleBlock

logger = logging.getLogger("subtitler")


class TimelineCache(Protocol):
    def get(self, key: str) -> Optional[list[SubtitleBlock]]: ...

    def set(self, key: str, timeline: Sequence[SubtitleBlock]) -> None: ...


class MemoryTimelineCache:
    """In-process cache with a fixed TTL measured from insertion."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[str, tuple[float, list[SubtitleBlock]]] = {}

    def get(self, key: str) -> Optional[list[SubtitleBlock]]:
        """Return a copy of the cached timeline, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, timeline = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            return None
        return list(timeline)

    def set(self, key: str, timeline: Sequence[SubtitleBlock]) -> None:
        self._entries[key] = (self.clock() + self.ttl_seconds, list(timeline))

    def __len__(self) -> int:
        return len(self._entries)


class FileTimelineCache:
    """JSON-file cache, one file per video id, so results survive across runs."""

    def __init__(
        self,
        directory: str,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.directory = Path(directory)
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def _path(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode()).hexdigest()[:16]
        return self.directory / f"timeline_{digest}.json"

    def get(self, key: str) -> Optional[list[SubtitleBlock]]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            created_at = float(payload["created_at"])
            blocks = [SubtitleBlock.from_dict(item) for item in payload["timeline"]]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable cache file {path}: {e}")
            return None
        if payload.get("key") != key:
            return None
        if self.clock() - created_at >= self.ttl_seconds:
            logger.debug(f"Cache entry expired: {key}")
            path.unlink(missing_ok=True)
            return None
        return blocks

    def set(self, key: str, timeline: Sequence[SubtitleBlock]) -> None:
        """Store a timeline; write failures are logged and the entry is skipped."""
        payload = {
            "key": key,
            "created_at": self.clock(),
            "timeline": [b.to_dict() for b in timeline],
        }
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write cache file {path}: {e}")


class NullTimelineCache:
    """Cache that never stores anything."""

    def get(self, key: str) -> Optional[list[SubtitleBlock]]:
        return None

    def set(self, key: str, timeline: Sequence[SubtitleBlock]) -> None:
        return None
