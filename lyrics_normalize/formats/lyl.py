from __future__ import annotations

import logging

import regex

from .model import LyricDocument, LyricFormat, Line, ParseResult, Word

logger = logging.getLogger(__name__)

TYPE_MARKER = "[type:LyricifyLines]"

_LINE_RE = regex.compile(r"^\[(?P<start>\d+),(?P<end>\d+)\](?P<text>.*)$")
_SAMPLE_LINES = 4


def is_lyl_format(content: str) -> bool:
    lines = [ln for ln in content.split("\n") if ln.strip()]
    if not lines or TYPE_MARKER not in lines[0]:
        return False
    return any(_LINE_RE.match(ln.strip()) for ln in lines[1 : 1 + _SAMPLE_LINES])


def parse_lyl(content: str) -> ParseResult:
    """
    Lyricify Lines: one `[startMs,endMs]text` record per line, no word timing.
    Example: [9997,12647]告訴我
    """
    lines: list[Line] = []
    warnings: list[str] = []

    for lineno, raw in enumerate(content.split("\n"), start=1):
        line = raw.strip()
        if not line or TYPE_MARKER in line:
            continue

        m = _LINE_RE.match(line)
        if not m:
            warnings.append(f"line {lineno}: unrecognized record")
            continue

        start_ms = int(m.group("start"))
        end_ms = int(m.group("end"))
        text = m.group("text").strip()
        if not text:
            continue
        if end_ms < start_ms:
            # kept as-is, only reported
            warnings.append(f"line {lineno}: end {end_ms}ms before start {start_ms}ms")

        lines.append(Line.from_words([Word(text=text, start_ms=start_ms, end_ms=end_ms)]))

    if warnings:
        logger.debug("LYL parse warnings: %s", warnings)
    return ParseResult(
        document=LyricDocument(lines=tuple(lines)),
        warnings=tuple(warnings),
        fmt=LyricFormat.LYL,
    )
