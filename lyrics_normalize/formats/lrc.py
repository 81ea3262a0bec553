from __future__ import annotations

import logging
from dataclasses import dataclass

import regex

from .errors import TimeFormatError
from .model import LyricDocument, LyricFormat, Line, ParseResult, Word
from .timecodes import lrc_time_to_ms

logger = logging.getLogger(__name__)

_TS_RE = regex.compile(r"\[(\d{1,3}):(\d{2})(?:[.:](\d{1,3}))?\]")  # [mm:ss] / [mm:ss.xx] / [mm:ss.xxx]
_OFFSET_RE = regex.compile(r"^\[offset:\s*([+-]?\d+)\s*\]\s*$", regex.IGNORECASE)
_TAG_RE = regex.compile(r"^\[([a-zA-Z][\w ]{0,31}):(.*)\]\s*$")


@dataclass(frozen=True, slots=True)
class _Entry:
    t_ms: int
    text: str


def parse_lrc(text: str) -> ParseResult:
    """
    Supported:
    - [mm:ss], [mm:ss.xx], [mm:ss.xxx]
    - multiple timestamps per line
    - [offset:+/-ms]
    - basic tags: [ar:], [ti:], [al:], ...

    Each timed entry becomes a one-word Line that ends where the next entry
    starts; the last Line ends at its own start. Entries with empty text only
    close the previous Line.
    """
    offset_ms = 0
    metadata: dict[str, list[str]] = {}
    warnings: list[str] = []
    timed: list[tuple[list[tuple[int, int, str | None]], str, int]] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        off = _OFFSET_RE.match(line)
        if off:
            offset_ms = int(off.group(1))
            continue

        tag = _TAG_RE.match(line)
        if tag and not _TS_RE.match(line):
            k = tag.group(1).strip().lower()
            v = tag.group(2).strip()
            if k and v:
                metadata.setdefault(k, []).append(v)
            continue

        stamps: list[tuple[int, int, str | None]] = []
        pos = 0
        while True:
            m = _TS_RE.match(line, pos)
            if not m:
                break
            stamps.append((int(m.group(1)), int(m.group(2)), m.group(3)))
            pos = m.end()
        if not stamps:
            warnings.append(f"line {lineno}: no timestamp, ignored")
            continue
        timed.append((stamps, line[pos:].strip(), lineno))

    # offset may be declared after the first timed line, so apply it last
    entries: list[_Entry] = []
    for stamps, payload, lineno in timed:
        for mm, ss, frac in stamps:
            try:
                t_ms = lrc_time_to_ms(mm, ss, frac) + offset_ms
            except TimeFormatError as e:
                warnings.append(f"line {lineno}: {e}")
                continue
            entries.append(_Entry(t_ms=max(t_ms, 0), text=payload))

    entries.sort(key=lambda e: e.t_ms)

    lines: list[Line] = []
    for i, e in enumerate(entries):
        if not e.text:
            continue
        end = entries[i + 1].t_ms if i + 1 < len(entries) else e.t_ms
        lines.append(Line.from_words([Word(text=e.text, start_ms=e.t_ms, end_ms=end)]))

    if warnings:
        logger.debug("LRC parse warnings: %s", warnings)
    return ParseResult(
        document=LyricDocument(lines=tuple(lines), metadata=metadata),
        warnings=tuple(warnings),
        fmt=LyricFormat.LRC,
    )
