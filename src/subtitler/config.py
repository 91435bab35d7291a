"""
Runtime settings and model client construction.
"""

import logging
import os
import pathlib
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from openai import OpenAI

logger = logging.getLogger("subtitler")

DEFAULT_CACHE_TTL_SECONDS = 24 * 60 * 60

LANGUAGE_NAMES = {
    "ru": "Russian",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "pt": "Portuguese",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "ar": "Arabic",
    "hi": "Hindi",
    "en": "English",
    "uk": "Ukrainian",
    "pl": "Polish",
    "nl": "Dutch",
    "sv": "Swedish",
    "tr": "Turkish",
    "he": "Hebrew",
    "th": "Thai",
    "vi": "Vietnamese",
}


def get_language_name(language: str) -> str:
    """Get human-readable language name from a language code.

    Values that are not known codes (e.g. "Vietnamese") are returned unchanged.
    """
    return LANGUAGE_NAMES.get(language.strip().lower(), language.strip())


@dataclass
class Settings:
    """Model, translation and cache parameters for one pipeline."""

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.2
    max_tokens: int = 4000
    target_language: str = "Vietnamese"
    source_languages: tuple[str, ...] = ("en",)
    chunk_size: int = 50
    max_attempts: int = 3
    retry_backoff_seconds: float = 1.0
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    cache_dir: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[dict[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            Settings with defaults for every variable that is not set
        """
        env = os.environ if env is None else env
        defaults = cls()

        def _get(name: str) -> Optional[str]:
            value = env.get(name)
            return value.strip() if value and value.strip() else None

        languages = _get("SUBTITLER_SOURCE_LANGUAGES")
        return cls(
            openai_api_key=_get("OPENAI_API_KEY"),
            openai_base_url=_get("OPENAI_BASE_URL"),
            model=_get("SUBTITLER_MODEL") or defaults.model,
            temperature=float(_get("SUBTITLER_TEMPERATURE") or defaults.temperature),
            max_tokens=int(_get("SUBTITLER_MAX_TOKENS") or defaults.max_tokens),
            target_language=get_language_name(
                _get("SUBTITLER_TARGET_LANGUAGE") or defaults.target_language
            ),
            source_languages=(
                tuple(code.strip() for code in languages.split(",") if code.strip())
                if languages
                else defaults.source_languages
            ),
            chunk_size=int(_get("SUBTITLER_CHUNK_SIZE") or defaults.chunk_size),
            max_attempts=int(_get("SUBTITLER_MAX_ATTEMPTS") or defaults.max_attempts),
            retry_backoff_seconds=float(
                _get("SUBTITLER_RETRY_BACKOFF") or defaults.retry_backoff_seconds
            ),
            cache_ttl_seconds=float(_get("SUBTITLER_CACHE_TTL") or defaults.cache_ttl_seconds),
            cache_dir=_get("SUBTITLER_CACHE_DIR"),
        )


def load_env() -> None:
    """Load variables from a .env file.

    Looks for .env in the project root (parent of the src directory) first,
    then falls back to the current directory.
    """
    project_root = pathlib.Path(__file__).parent.parent.parent
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()


def make_openai_client(settings: Settings) -> OpenAI:
    """Create the OpenAI client used by the translator."""
    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY is not set. Put it in .env or environment.")
    if settings.openai_base_url:
        logger.debug(f"Using OpenAI-compatible endpoint {settings.openai_base_url}")
        return OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    return OpenAI(api_key=settings.openai_api_key)
