from __future__ import annotations

import logging
from enum import Enum

import regex

from .model import LyricDocument, LyricFormat, Line, ParseResult, Word
from .timecodes import parse_srt_time

logger = logging.getLogger(__name__)

_DETECT_RE = regex.compile(r"\d{2}:\d{2}:\d{2},\d{3}\s+-->\s+\d{2}:\d{2}:\d{2},\d{3}")
_TIMING_RE = regex.compile(r"(?P<start>\d{1,2}:\d{2}:\d{2},\d{3})\s*-->\s*(?P<end>\d{1,2}:\d{2}:\d{2},\d{3})")
_INDEX_RE = regex.compile(r"^\d+$")


class _State(Enum):
    SEEK_INDEX = "seek_index"
    SEEK_TIMING = "seek_timing"
    TEXT = "text"
    SKIP = "skip"


def is_srt_format(content: str) -> bool:
    return any(_DETECT_RE.search(ln.strip()) for ln in content.splitlines())


def parse_srt(content: str) -> ParseResult:
    """
    One line per cue, the whole cue text is a single word (newlines kept).
    Cues without a timing line are dropped.
    """
    lines: list[Line] = []
    warnings: list[str] = []

    state = _State.SEEK_INDEX
    start_ms = end_ms = 0
    text_lines: list[str] = []
    block_no = 0

    def flush() -> None:
        text = "\n".join(text_lines)
        if state is _State.TEXT and text:
            lines.append(Line.from_words([Word(text=text, start_ms=start_ms, end_ms=end_ms)]))

    for raw in content.splitlines() + [""]:
        line = raw.strip()
        if not line:
            # blank line closes the block
            if state is not _State.SEEK_INDEX:
                flush()
            state = _State.SEEK_INDEX
            text_lines = []
            continue

        if state is _State.SEEK_INDEX:
            block_no += 1
            state = _State.SEEK_TIMING
            if _INDEX_RE.match(line):
                continue

        if state is _State.SEEK_TIMING:
            m = _TIMING_RE.search(line)
            if not m:
                warnings.append(f"block {block_no}: missing timing line, dropped")
                state = _State.SKIP
                continue
            start_ms = parse_srt_time(m.group("start"))
            end_ms = parse_srt_time(m.group("end"))
            if end_ms < start_ms:
                warnings.append(f"block {block_no}: end {end_ms}ms before start {start_ms}ms")
                end_ms = start_ms
            state = _State.TEXT
            continue

        if state is _State.TEXT:
            text_lines.append(line)

    if warnings:
        logger.debug("SRT parse warnings: %s", warnings)
    return ParseResult(
        document=LyricDocument(lines=tuple(lines)),
        warnings=tuple(warnings),
        fmt=LyricFormat.SRT,
    )
