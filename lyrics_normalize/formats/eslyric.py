"""
Per-character timed formats sharing the .lrc extension.

ESLyRiC:   [00:09.997]告[00:10.596]訴[00:11.645]我[00:12.647]
LyRiC A2:  [00:09.997]<00:09.997>告<00:10.596>訴<00:11.645>我<00:12.647>

Each `text<ts>` pair is a word running from the previous timestamp to `ts`.
Text after the last timestamp becomes a zero-length word.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import regex

from .model import LyricDocument, LyricFormat, Line, ParseResult, Word
from .timecodes import parse_lyric_time

logger = logging.getLogger(__name__)

_TS = r"\d{2}:\d{2}\.\d{3}"
_SAMPLE_LINES = 5


@dataclass(frozen=True)
class _Variant:
    fmt: LyricFormat
    head: regex.Pattern
    stamp: regex.Pattern
    detect: regex.Pattern


ESLYRIC = _Variant(
    fmt=LyricFormat.ESLYRIC,
    head=regex.compile(rf"^\[(?P<line>{_TS})\]"),
    stamp=regex.compile(rf"\[(?P<ts>{_TS})\]"),
    # exactly one grapheme between the first two stamps
    detect=regex.compile(rf"^\[{_TS}\](?![\[<])\X\[{_TS}\]"),
)

LYRIC_A2 = _Variant(
    fmt=LyricFormat.LYRIC_A2,
    head=regex.compile(rf"^\[(?P<line>{_TS})\]<(?P<start>{_TS})>"),
    stamp=regex.compile(rf"<(?P<ts>{_TS})>"),
    detect=regex.compile(rf"^\[{_TS}\]<{_TS}>"),
)


def _sample(content: str) -> list[str]:
    return [ln for ln in content.split("\n") if ln.strip()][:_SAMPLE_LINES]


def is_eslyric_format(content: str) -> bool:
    return any(ESLYRIC.detect.match(ln) for ln in _sample(content))


def is_lyric_a2_format(content: str) -> bool:
    return any(LYRIC_A2.detect.match(ln) for ln in _sample(content))


def _line_words(line: str, variant: _Variant) -> list[Word] | None:
    head = variant.head.match(line)
    if not head:
        return None
    # A2: the angle-bracket stamp wins over the bracket one
    cursor = parse_lyric_time(head.groupdict().get("start") or head.group("line"))

    words: list[Word] = []
    pos = head.end()
    for stamp in variant.stamp.finditer(line, pos):
        text = line[pos : stamp.start()]
        ts = parse_lyric_time(stamp.group("ts"))
        if text:
            words.append(Word(text=text, start_ms=cursor, end_ms=max(ts, cursor)))
        cursor = ts
        pos = stamp.end()

    tail = line[pos:]
    if tail.strip():
        words.append(Word(text=tail, start_ms=cursor, end_ms=cursor))

    # whitespace-only edge words are dropped before trimming
    while words and not words[0].text.strip():
        words.pop(0)
    while words and not words[-1].text.strip():
        words.pop()
    if words:
        words[0] = replace(words[0], text=words[0].text.lstrip())
        words[-1] = replace(words[-1], text=words[-1].text.rstrip())
    return words


def _parse(content: str, variant: _Variant) -> ParseResult:
    lines: list[Line] = []
    warnings: list[str] = []

    for lineno, raw in enumerate(content.split("\n"), start=1):
        raw = raw.rstrip("\r")
        if not raw.strip():
            continue
        words = _line_words(raw, variant)
        if words is None:
            warnings.append(f"line {lineno}: missing line timestamp")
            continue
        if words:
            lines.append(Line.from_words(words))

    if warnings:
        logger.debug("%s parse warnings: %s", variant.fmt.value, warnings)
    return ParseResult(
        document=LyricDocument(lines=tuple(lines)),
        warnings=tuple(warnings),
        fmt=variant.fmt,
    )


def parse_eslyric(content: str) -> ParseResult:
    return _parse(content, ESLYRIC)


def parse_lyric_a2(content: str) -> ParseResult:
    return _parse(content, LYRIC_A2)
