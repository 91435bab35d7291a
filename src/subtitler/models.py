"""
Data models for the subtitle translation pipeline.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SubtitleBlock:
    """A single timed subtitle line."""

    text: str
    offset: int  # milliseconds
    duration: int  # milliseconds

    def with_text(self, text: str) -> "SubtitleBlock":
        """Return a copy carrying new text and the same timing."""
        return SubtitleBlock(text=text, offset=self.offset, duration=self.duration)

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "offset": self.offset, "duration": self.duration}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubtitleBlock":
        return cls(
            text=str(data.get("text", "")),
            offset=int(data.get("offset", 0)),
            duration=int(data.get("duration", 0)),
        )


@dataclass
class ProcessResult:
    """Outcome of processing one video: a timeline or an error message."""

    success: bool
    data: Optional[list[SubtitleBlock]] = None
    error: Optional[str] = None
    video_id: Optional[str] = field(default=None, compare=False)

    @classmethod
    def ok(cls, data: list[SubtitleBlock], video_id: Optional[str] = None) -> "ProcessResult":
        return cls(success=True, data=data, video_id=video_id)

    @classmethod
    def failure(cls, error: str, video_id: Optional[str] = None) -> "ProcessResult":
        return cls(success=False, error=error, video_id=video_id)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the consumer contract shape."""
        if self.success:
            return {"success": True, "data": [b.to_dict() for b in self.data or []]}
        return {"success": False, "error": self.error or ""}
