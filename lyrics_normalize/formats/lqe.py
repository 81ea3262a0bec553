"""
Lyricify Quick Export (LQE).

    [Lyricify Quick Export]
    [version:1.0]
    [ti:Song]
    [lyrics: format@Lrc, language@ja]
    [00:01.00]...
    [translation: format@Lrc, language@zh]
    [00:01.00]...
    [pronunciation: format@Lrc, language@ja-Latn]
    [00:01.00]...

Each section is an embedded lyric file. Translation and pronunciation lines
are attached to the main lines by start time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum

import regex

from .errors import StructuralError
from .lrc import parse_lrc
from .model import LyricDocument, LyricFormat, Line, ParseResult, Word

logger = logging.getLogger(__name__)

HEADER = "[Lyricify Quick Export]"

EXACT_TOLERANCE_MS = 100
NEAREST_TOLERANCE_MS = 2000
WORD_FALLBACK_MS = 500

_SECTION_RE = regex.compile(r"^\[(?P<kind>lyrics|translation|pronunciation):(?P<params>.*)\]\s*$")
_META_RE = regex.compile(r"^\[(?P<key>[A-Za-z][\w ]*?):(?P<value>.*)\]\s*$")
_VERSION_RE = regex.compile(r"^\[version:", regex.IGNORECASE)
_KNOWN_SUBFORMATS = ("lrc", "ass", "yrc", "lys", "qrc")


class _State(Enum):
    HEADER = "header"
    LYRICS = "lyrics"
    TRANSLATION = "translation"
    PRONUNCIATION = "pronunciation"


@dataclass(slots=True)
class _Section:
    state: _State
    subformat: str = "lrc"
    language: str | None = None
    buffer: list[str] = field(default_factory=list)


def is_lqe_format(content: str) -> bool:
    if not content:
        return False
    return content.lstrip().startswith(HEADER)


def parse_section_params(params: str) -> tuple[str, str | None, list[str]]:
    """`format@Lrc, language@ja` -> ("lrc", "ja", warnings)"""
    subformat = "lrc"
    language: str | None = None
    warnings: list[str] = []
    for param in params.split(","):
        key, _, value = (p.strip() for p in param.partition("@"))
        if key == "format":
            value = value.lower()
            if value not in _KNOWN_SUBFORMATS:
                warnings.append(f"unknown section format {value!r}, using lrc")
                value = "lrc"
            subformat = value
        elif key == "language":
            language = value or None
    return subformat, language, warnings


def _parse_section(section: _Section, warnings: list[str]) -> tuple[Line, ...]:
    text = "\n".join(section.buffer)
    if not text.strip():
        return ()
    if section.subformat != "lrc":
        warnings.append(f"{section.state.value}: format {section.subformat!r} not supported, parsed as lrc")
    res = parse_lrc(text + "\n")
    warnings.extend(f"{section.state.value}: {w}" for w in res.warnings)
    return res.lines


def _flush(section: _Section, parsed: dict[_State, tuple[Line, ...]], warnings: list[str]) -> None:
    # an empty repeated section keeps the lines of the earlier one
    if section.state is _State.HEADER:
        return
    lines = _parse_section(section, warnings)
    if lines:
        parsed[section.state] = lines


def _match_line(target: Line, candidates: tuple[Line, ...], exact_ms: int, nearest_ms: int) -> Line | None:
    if not candidates:
        return None
    for cand in candidates:
        if abs(cand.start_ms - target.start_ms) < exact_ms:
            return cand
    closest = min(candidates, key=lambda c: abs(c.start_ms - target.start_ms))
    if abs(closest.start_ms - target.start_ms) < nearest_ms:
        return closest
    return None


def _fix_word(word: Word, line_start: int, fallback_ms: int) -> Word:
    start = word.start_ms if word.start_ms is not None and word.start_ms >= 0 else line_start
    end = word.end_ms
    if end is None or end <= start:
        end = start + fallback_ms
    if (start, end) == (word.start_ms, word.end_ms):
        return word
    return replace(word, start_ms=start, end_ms=end)


def merge_tracks(
    main: tuple[Line, ...],
    translation: tuple[Line, ...] = (),
    pronunciation: tuple[Line, ...] = (),
    *,
    exact_tolerance_ms: int = EXACT_TOLERANCE_MS,
    nearest_tolerance_ms: int = NEAREST_TOLERANCE_MS,
    word_fallback_ms: int = WORD_FALLBACK_MS,
) -> tuple[Line, ...]:
    """
    Attach translation / pronunciation text to main lines.

    A candidate starting within `exact_tolerance_ms` of the main line wins
    outright; otherwise the nearest candidate is used if it starts within
    `nearest_tolerance_ms`.
    """
    merged: list[Line] = []
    for line in main:
        trans = _match_line(line, translation, exact_tolerance_ms, nearest_tolerance_ms)
        pron = _match_line(line, pronunciation, exact_tolerance_ms, nearest_tolerance_ms)
        words = tuple(_fix_word(w, line.start_ms, word_fallback_ms) for w in line.words)
        translated = trans.text if trans else line.translation
        romanized = pron.text if pron else line.romanization
        if not words:
            merged.append(replace(line, translation=translated, romanization=romanized))
            continue
        # line bounds follow the corrected words
        merged.append(Line.from_words(words, translation=translated, romanization=romanized))
    return tuple(merged)


def parse_lqe(
    content: str,
    *,
    exact_tolerance_ms: int = EXACT_TOLERANCE_MS,
    nearest_tolerance_ms: int = NEAREST_TOLERANCE_MS,
    word_fallback_ms: int = WORD_FALLBACK_MS,
) -> ParseResult:
    if not is_lqe_format(content):
        raise StructuralError(f"missing {HEADER} header")

    raw_lines = content.splitlines()
    warnings: list[str] = []

    if not any(ln.strip().startswith("[lyrics:") for ln in raw_lines):
        logger.debug("LQE without [lyrics:] section, trying plain LRC")
        res = parse_lrc(content)
        if res.lines:
            return ParseResult(
                document=res.document,
                warnings=("no [lyrics:] section, parsed as lrc",) + res.warnings,
                fmt=LyricFormat.LQE,
            )

    metadata: dict[str, list[str]] = {}
    parsed: dict[_State, tuple[Line, ...]] = {}
    current = _Section(state=_State.HEADER)

    for raw in raw_lines:
        line = raw.strip()
        section = _SECTION_RE.match(line)
        if section:
            _flush(current, parsed, warnings)
            subformat, language, param_warnings = parse_section_params(section.group("params"))
            warnings.extend(param_warnings)
            current = _Section(state=_State(section.group("kind")), subformat=subformat, language=language)
            continue

        if line.startswith(HEADER) or _VERSION_RE.match(line):
            continue

        meta = _META_RE.match(line)
        if meta:
            metadata.setdefault(meta.group("key").strip().lower(), []).append(meta.group("value").strip())

        current.buffer.append(raw)

    _flush(current, parsed, warnings)

    main = parsed.get(_State.LYRICS, ())
    translation = parsed.get(_State.TRANSLATION, ())
    pronunciation = parsed.get(_State.PRONUNCIATION, ())

    if not main:
        if translation:
            main, translation = translation, ()
            warnings.append("empty lyrics section, using translation as main lyrics")
        elif pronunciation:
            main, pronunciation = pronunciation, ()
            warnings.append("empty lyrics section, using pronunciation as main lyrics")

    main = merge_tracks(
        main,
        translation,
        pronunciation,
        exact_tolerance_ms=exact_tolerance_ms,
        nearest_tolerance_ms=nearest_tolerance_ms,
        word_fallback_ms=word_fallback_ms,
    )

    if warnings:
        logger.debug("LQE parse warnings: %s", warnings)
    return ParseResult(
        document=LyricDocument(lines=main, metadata=metadata),
        warnings=tuple(warnings),
        fmt=LyricFormat.LQE,
    )
