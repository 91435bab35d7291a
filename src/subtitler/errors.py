"""
Error types raised inside the pipeline.

Every error here carries a message that is safe to show to the caller.
Anything else that escapes a pipeline stage is reported as an unknown error.
"""


class ProcessingError(Exception):
    """Base class for user-reportable processing failures."""


class InvalidUrlError(ProcessingError):
    """No video id could be extracted from the input."""

    def __init__(self, message: str = "Invalid YouTube URL. Please enter a valid YouTube link.") -> None:
        super().__init__(message)


class NoTranscriptError(ProcessingError):
    """The video has no caption track."""

    def __init__(
        self, message: str = "No transcript found. The video may not have captions enabled."
    ) -> None:
        super().__init__(message)


class EmptyTranscriptError(ProcessingError):
    """A caption track exists but yields no usable segments."""

    def __init__(
        self, message: str = "Empty transcript: no usable caption segments were found."
    ) -> None:
        super().__init__(message)


class TranslationTransientError(ProcessingError):
    """A single translation attempt failed (request or response parsing)."""
