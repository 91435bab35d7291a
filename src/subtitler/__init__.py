"""
Subtitler - YouTube caption translation with generative language models.

A small pipeline for:
- Extracting video ids from YouTube links
- Fetching caption tracks and normalizing them into subtitle blocks
- Translating blocks in fixed-size chunks with retry and reconciliation
- Caching finished timelines per video
- Exporting timelines as SRT
"""

__version__ = "0.1.0"
