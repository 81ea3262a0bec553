from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import regex

from .errors import TimeFormatError
from .model import LyricDocument, LyricFormat, Line, ParseResult, Word
from .timecodes import parse_ass_time

logger = logging.getLogger(__name__)

# Default Aegisub event layout:
# Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
_EVENT_FIELDS = ("layer", "start", "end", "style", "name", "margin_l", "margin_r", "margin_v", "effect", "text")
_EVENT_RE = regex.compile(r"^(?P<kind>Comment|Dialogue):\s*(?P<body>.*)$")
_OVERRIDE_RE = regex.compile(r"\{(?P<body>[^}]*)\}")
# \k, \K, \kf, \ko (centiseconds)
_KARAOKE_RE = regex.compile(r"\\(?:kf|ko|k|K)(?P<cs>\d+)")
_NEWLINE_RE = regex.compile(r"\\[Nn]")

_HEAD_CHARS = 2048
_HEAD_LINES = 30


@dataclass(frozen=True, slots=True)
class AssEvent:
    kind: str
    layer: str
    start_ms: int
    end_ms: int
    style: str
    name: str
    effect: str
    text: str


@dataclass(slots=True)
class _Segment:
    duration_cs: int | None
    raw: str = ""


def is_ass_format(content: str) -> bool:
    if not content:
        return False
    head = content[:_HEAD_CHARS]
    if regex.search(r"\[Script Info\]", head, regex.IGNORECASE) and regex.search(
        r"\[Events\]", content, regex.IGNORECASE
    ):
        return True
    if regex.search(r"Aegisub", head, regex.IGNORECASE):
        return True
    lines = [ln for ln in head.splitlines() if ln][:_HEAD_LINES]
    return any(_EVENT_RE.match(ln) for ln in lines)


def clean_text(text: str) -> str:
    """Drop override blocks, turn \\N / \\n / \\h into spaces. No trimming."""
    cleaned = _OVERRIDE_RE.sub("", text)
    cleaned = _NEWLINE_RE.sub(" ", cleaned)
    return cleaned.replace("\\h", " ")


def parse_event(line: str) -> AssEvent | None:
    """
    Returns None for lines that are not Dialogue/Comment records.
    Raises TimeFormatError / ValueError for malformed records.
    """
    m = _EVENT_RE.match(line)
    if not m:
        return None
    parts = m.group("body").split(",", len(_EVENT_FIELDS) - 1)
    if len(parts) != len(_EVENT_FIELDS):
        raise ValueError(f"expected {len(_EVENT_FIELDS)} fields, got {len(parts)}")
    fields = dict(zip(_EVENT_FIELDS, parts))
    return AssEvent(
        kind=m.group("kind"),
        layer=fields["layer"].strip(),
        start_ms=parse_ass_time(fields["start"]),
        end_ms=parse_ass_time(fields["end"]),
        style=fields["style"].strip(),
        name=fields["name"].strip(),
        effect=fields["effect"].strip(),
        text=fields["text"].strip(),
    )


def _split_segments(text: str) -> list[_Segment]:
    # first segment holds whatever precedes the first karaoke tag
    segments = [_Segment(duration_cs=None)]
    pos = 0
    for block in _OVERRIDE_RE.finditer(text):
        segments[-1].raw += text[pos : block.start()]
        for tag in _KARAOKE_RE.finditer(block.group("body")):
            segments.append(_Segment(duration_cs=int(tag.group("cs"))))
        pos = block.end()
    segments[-1].raw += text[pos:]
    return segments


def event_words(event: AssEvent) -> list[Word]:
    line_end = max(event.end_ms, event.start_ms)
    segments = _split_segments(event.text)
    if len(segments) == 1:
        cleaned = clean_text(segments[0].raw)
        return [Word(text=cleaned, start_ms=event.start_ms, end_ms=line_end)] if cleaned else []

    words: list[Word] = []
    cursor = event.start_ms
    for seg in segments:
        cleaned = clean_text(seg.raw)
        if seg.duration_cs is None:
            if cleaned:
                words.append(Word(text=cleaned, start_ms=cursor, end_ms=cursor))
            continue
        seg_end = cursor + max(0, seg.duration_cs * 10)
        if cleaned:
            words.append(Word(text=cleaned, start_ms=cursor, end_ms=seg_end))
        cursor = seg_end

    if words and words[-1].end_ms < line_end:
        words[-1] = replace(words[-1], end_ms=line_end)
    return words


def parse_ass(content: str) -> ParseResult:
    lines: list[Line] = []
    warnings: list[str] = []

    for lineno, raw in enumerate(content.splitlines(), start=1):
        try:
            event = parse_event(raw)
        except (TimeFormatError, ValueError) as e:
            warnings.append(f"line {lineno}: malformed event ({e})")
            continue
        if event is None or event.kind == "Comment":
            continue

        if event.end_ms < event.start_ms:
            warnings.append(f"line {lineno}: end {event.end_ms}ms before start {event.start_ms}ms")
        words = event_words(event)
        if words:
            lines.append(Line.from_words(words))

    if warnings:
        logger.debug("ASS parse warnings: %s", warnings)
    return ParseResult(
        document=LyricDocument(lines=tuple(lines)),
        warnings=tuple(warnings),
        fmt=LyricFormat.ASS,
    )
