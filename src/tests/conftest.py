"""
Shared fakes for the pipeline tests.
"""

import json
from types import SimpleNamespace

import pytest

from subtitler.config import Settings


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    """Replays scripted responses; the last one repeats once the script runs out.

    A response may be a string, an exception to raise, or a callable that
    receives the request kwargs and returns either of those.
    """

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if callable(item):
            item = item(kwargs)
        if isinstance(item, Exception):
            raise item
        return _response(item)


class FakeClient:
    """Stands in for openai.OpenAI (only chat.completions.create is used)."""

    def __init__(self, *responses):
        self.completions = FakeCompletions(responses)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


def prompt_items(kwargs):
    """Pull the JSON input chunk back out of a translation request."""
    content = kwargs["messages"][-1]["content"]
    payload = content.split("Input:\n", 1)[1].split("\n\nOutput format", 1)[0]
    return json.loads(payload)


def echo_translation(kwargs):
    """Model stub that 'translates' by prefixing each line with vi: and mangling timing."""
    items = prompt_items(kwargs)
    return json.dumps(
        [{"text": f"vi:{it['text']}", "offset": it["offset"] + 1, "duration": 0} for it in items]
    )


class FakeCaptionSource:
    def __init__(self, raw):
        self.raw = raw
        self.calls = []

    def fetch(self, video_id):
        self.calls.append(video_id)
        if isinstance(self.raw, Exception):
            raise self.raw
        return self.raw


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def raw_segment(start_ms, end_ms, text):
    return {"start_ms": str(start_ms), "end_ms": str(end_ms), "snippet": {"text": text}}


@pytest.fixture
def settings():
    return Settings(openai_api_key="test-key", target_language="Vietnamese")


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def clock():
    return FakeClock()
