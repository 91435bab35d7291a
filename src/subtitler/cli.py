"""
Command-line interface for the subtitle translation pipeline.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Optional

from .cache import NullTimelineCache
from .config import Settings, get_language_name, load_env
from .pipeline import build_pipeline
from .srt_utils import write_srt

logger = logging.getLogger("subtitler")


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    ap = argparse.ArgumentParser(description="Translate YouTube captions with GPT")

    ap.add_argument("url", help="YouTube watch/short/embed URL or bare 11-character video id")

    # Outputs
    ap.add_argument("--srt", default=None, help="Write the translated timeline as SRT")
    ap.add_argument("--json", default=None, help="Write the result ({success, data|error}) as JSON")

    # Translation
    ap.add_argument(
        "--target-language",
        default=None,
        help="Target language name or code (e.g. 'vi', 'German'); default from env or Vietnamese",
    )
    ap.add_argument("--model", default=None, help="GPT model used for translation")
    ap.add_argument(
        "--source-language",
        action="append",
        default=None,
        help="Preferred caption language code (repeatable)",
    )
    ap.add_argument("--chunk-size", type=int, default=None, help="Subtitle lines per model request")

    # Cache control
    cache_opts = ap.add_mutually_exclusive_group()
    cache_opts.add_argument("--cache-dir", default=None, help="Directory for cached timelines")
    cache_opts.add_argument("--no-cache", action="store_true", help="Always fetch and translate")

    # Logging
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    return ap.parse_args(argv)


def settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    """Apply command line overrides on top of environment settings."""
    overrides = {}
    if args.target_language:
        overrides["target_language"] = get_language_name(args.target_language)
    if args.model:
        overrides["model"] = args.model
    if args.source_language:
        overrides["source_languages"] = tuple(args.source_language)
    if args.chunk_size is not None:
        overrides["chunk_size"] = args.chunk_size
    if args.cache_dir:
        overrides["cache_dir"] = args.cache_dir
    return replace(base, **overrides)


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    load_env()
    args = parse_args(argv)
    setup_logging(args.verbose)

    settings = settings_from_args(args, Settings.from_env())
    pipeline = build_pipeline(
        settings,
        cache=NullTimelineCache() if args.no_cache else None,
        show_progress=True,
    )

    logger.info(f"Translating captions to {settings.target_language} using {settings.model}")
    result = pipeline.process_video(args.url)

    if args.json:
        with open(args.json, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info(f"Saved result -> {args.json}")

    if not result.success:
        logger.error(result.error)
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if args.srt:
        write_srt(result.data, args.srt)
    if not args.srt and not args.json:
        json.dump(result.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")

    logger.info(f"Done ({len(result.data)} subtitle blocks for {result.video_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
