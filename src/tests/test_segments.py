"""
Tests for caption segment normalization.
"""

from types import SimpleNamespace

import pytest

from subtitler.errors import EmptyTranscriptError, NoTranscriptError
from subtitler.models import SubtitleBlock
from subtitler.segments import normalize_segments, parse_ms

from conftest import raw_segment


def test_normalize_filters_structural_entries():
    """Test that section headers are dropped and captions kept in order."""
    raw = [
        {"header": {"text": "Intro"}},
        raw_segment(0, 1500, "Hello world."),
        {"start_ms": "1500", "snippet": {"text": "no end time"}},
        raw_segment(1500, 4000, "This is a test."),
    ]

    blocks = normalize_segments(raw)

    assert blocks == [
        SubtitleBlock(text="Hello world.", offset=0, duration=1500),
        SubtitleBlock(text="This is a test.", offset=1500, duration=2500),
    ]


def test_missing_text_becomes_empty_string():
    """Test that a snippet without text is kept with empty text."""
    raw = [
        {"start_ms": "0", "end_ms": "1000", "snippet": {}},
        {"start_ms": "1000", "end_ms": "2000", "snippet": {"text": None}},
    ]

    blocks = normalize_segments(raw)

    assert [b.text for b in blocks] == ["", ""]


def test_unparseable_timing_defaults_to_zero():
    """Test that each timing side falls back to 0 independently."""
    raw = [
        raw_segment("abc", 2000, "bad start"),
        raw_segment(3000, "n/a", "bad end"),
        raw_segment("12.9", "20", "fractional"),
    ]

    blocks = normalize_segments(raw)

    assert (blocks[0].offset, blocks[0].duration) == (0, 2000)
    assert (blocks[1].offset, blocks[1].duration) == (3000, -3000)
    assert (blocks[2].offset, blocks[2].duration) == (12, 8)


def test_negative_duration_is_passed_through():
    """Test that end < start yields a negative duration rather than an error."""
    blocks = normalize_segments([raw_segment(5000, 4000, "backwards")])

    assert blocks[0].duration == -1000


def test_attribute_style_segments():
    """Test raw segments given as objects instead of dicts."""
    raw = [
        SimpleNamespace(title="Chapter 1"),
        SimpleNamespace(start_ms="100", end_ms="900", snippet=SimpleNamespace(text="Hi")),
    ]

    blocks = normalize_segments(raw)

    assert blocks == [SubtitleBlock(text="Hi", offset=100, duration=800)]


def test_no_track_raises_no_transcript():
    """Test that a missing caption track is reported as NoTranscriptError."""
    with pytest.raises(NoTranscriptError):
        normalize_segments(None)


def test_only_headers_raises_empty_transcript():
    """Test that a track with nothing usable is reported as EmptyTranscriptError."""
    with pytest.raises(EmptyTranscriptError):
        normalize_segments([{"header": {"text": "Intro"}}])
    with pytest.raises(EmptyTranscriptError):
        normalize_segments([])


def test_parse_ms():
    """Test millisecond parsing of assorted inputs."""
    assert parse_ms("1234") == 1234
    assert parse_ms(1234.7) == 1234
    assert parse_ms(None) == 0
    assert parse_ms("nan") == 0
    assert parse_ms("inf") == 0
    assert parse_ms(True) == 0
