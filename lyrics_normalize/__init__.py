"""Normalize timed lyric files (LRC, ASS, LQE, LYL, ESLyRiC, LyRiC A2, SRT) to TTML."""

from lyrics_normalize.dispatch import convert_to_ttml, detect_format, parse_lyrics
from lyrics_normalize.export.ttml import to_ttml
from lyrics_normalize.formats.model import Line, LyricDocument, LyricFormat, ParseResult, Word

__all__ = [
    "Line",
    "LyricDocument",
    "LyricFormat",
    "ParseResult",
    "Word",
    "convert_to_ttml",
    "detect_format",
    "parse_lyrics",
    "to_ttml",
]
