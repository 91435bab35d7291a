"""
Chunk translation with GPT while preserving subtitle timing.
"""

import json
import logging
import re
import time
from collections.abc import Callable, Sequence
from typing import Any, Optional

from .config import Settings
from .errors import TranslationTransientError
from .models import SubtitleBlock

logger = logging.getLogger("subtitler")

FAILURE_MARKER = "[translation failed] "

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)

SYSTEM_PROMPT = (
    "You are a professional subtitle translator. Translations must be natural, "
    "conversational and faithful to the meaning and tone of the original."
)

TONE_NOTES = {
    "Vietnamese": [
        'Use "mình" instead of "tôi" for casual contexts',
        'Use "bạn" for "you" in friendly contexts',
        "Avoid overly formal or literary language",
        "Sound like a native Vietnamese speaker",
    ],
}


def build_prompt(chunk: Sequence[SubtitleBlock], target_language: str) -> str:
    """Build the user prompt for one chunk."""
    rules = [
        'Keep "offset" and "duration" values EXACTLY the same - DO NOT MODIFY',
        'Only translate the "text" field',
        f"Use natural, conversational {target_language}",
        "Preserve the meaning and tone of the original",
        "Return ONLY a valid JSON array: no explanations, no markdown, no code fences",
    ]
    rules.extend(TONE_NOTES.get(target_language, []))
    numbered = "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, 1))
    payload = json.dumps([b.to_dict() for b in chunk], ensure_ascii=False)
    return (
        f"Translate the following subtitle data to {target_language} with these STRICT RULES:\n\n"
        f"{numbered}\n\n"
        f"Input:\n{payload}\n\n"
        'Output format: [{"text":"translated text","offset":123,"duration":456},...]'
    )


def extract_json_array(content: str) -> str:
    """Strip code fences and cut out the outermost [...] literal, if any."""
    cleaned = _FENCE_RE.sub("", content).replace("```", "").strip()
    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start != -1 and end > start:
        return cleaned[start : end + 1]
    return cleaned


def parse_translation(content: str) -> list[Any]:
    """Parse model output into a non-empty list.

    Raises:
        TranslationTransientError: output is not JSON or not a non-empty array
    """
    try:
        items = json.loads(extract_json_array(content))
    except json.JSONDecodeError as e:
        raise TranslationTransientError(f"Model did not return valid JSON: {e}") from e
    if not isinstance(items, list) or not items:
        raise TranslationTransientError("Model did not return a non-empty JSON array")
    return items


def _translated_text(item: Any) -> Optional[str]:
    if isinstance(item, dict):
        item = item.get("text")
    if isinstance(item, str) and item.strip():
        return item.strip()
    return None


def reconcile(chunk: Sequence[SubtitleBlock], items: Sequence[Any]) -> list[SubtitleBlock]:
    """Merge parsed model output back onto the original chunk by position.

    Timing always comes from the original; the model's echoed numbers are
    ignored. Positions without usable text keep the original text.
    """
    out: list[SubtitleBlock] = []
    missing = 0
    for i, block in enumerate(chunk):
        text = _translated_text(items[i]) if i < len(items) else None
        if text is None:
            missing += 1
            out.append(block)
        else:
            out.append(block.with_text(text))
    if missing:
        logger.warning(f"{missing}/{len(chunk)} lines kept untranslated (missing in model output)")
    if len(items) > len(chunk):
        logger.debug(f"Ignoring {len(items) - len(chunk)} extra items in model output")
    return out


def mark_failed(chunk: Sequence[SubtitleBlock]) -> list[SubtitleBlock]:
    """Return the chunk with every text prefixed by the failure marker."""
    return [block.with_text(FAILURE_MARKER + block.text) for block in chunk]


class Translator:
    """Translates chunks of subtitle blocks with an OpenAI-compatible client.

    Args:
        client: Object exposing ``chat.completions.create`` (e.g. openai.OpenAI)
        settings: Model name, generation parameters, target language and retry policy
        sleep: Function used to wait between attempts
    """

    def __init__(
        self,
        client: Any,
        settings: Settings,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if client is None:
            raise RuntimeError("OpenAI client is not initialized (missing OPENAI_API_KEY)")
        self.client = client
        self.settings = settings
        self.sleep = sleep

    def request(self, chunk: Sequence[SubtitleBlock]) -> str:
        """Send one chunk to the model and return the raw response text."""
        try:
            response = self.client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": build_prompt(chunk, self.settings.target_language),
                    },
                ],
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise TranslationTransientError(f"Model request failed: {e}") from e
        if not content:
            raise TranslationTransientError("Model returned an empty response")
        return content

    def translate_chunk(self, chunk: Sequence[SubtitleBlock]) -> list[SubtitleBlock]:
        """Translate one chunk, retrying transient failures with linear backoff.

        Never raises for model failures: after the last attempt the original
        lines are returned, each prefixed with FAILURE_MARKER.
        """
        if not chunk:
            return []

        max_attempts = max(1, self.settings.max_attempts)
        last_error: Optional[TranslationTransientError] = None
        for attempt in range(1, max_attempts + 1):
            logger.debug(f"Translating {len(chunk)} lines (attempt {attempt}/{max_attempts})")
            try:
                items = parse_translation(self.request(chunk))
                return reconcile(chunk, items)
            except TranslationTransientError as e:
                last_error = e
                logger.warning(f"Translation attempt {attempt}/{max_attempts} failed: {e}")
            if attempt < max_attempts:
                self.sleep(attempt * self.settings.retry_backoff_seconds)

        logger.error(
            f"Translation failed after {max_attempts} attempts, keeping original text: {last_error}"
        )
        return mark_failed(chunk)
