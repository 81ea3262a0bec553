from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Callable

from lyrics_normalize.config import PipelineConfig
from lyrics_normalize.export.ttml import DEFAULT_TITLE, to_ttml
from lyrics_normalize.formats.ass import is_ass_format, parse_ass
from lyrics_normalize.formats.eslyric import (
    is_eslyric_format,
    is_lyric_a2_format,
    parse_eslyric,
    parse_lyric_a2,
)
from lyrics_normalize.formats.lqe import is_lqe_format, parse_lqe
from lyrics_normalize.formats.lrc import parse_lrc
from lyrics_normalize.formats.lyl import is_lyl_format, parse_lyl
from lyrics_normalize.formats.model import LyricDocument, LyricFormat, ParseResult
from lyrics_normalize.formats.srt import is_srt_format, parse_srt

logger = logging.getLogger(__name__)

_EXTENSIONS: dict[str, LyricFormat] = {
    ".lrc": LyricFormat.LRC,
    ".ass": LyricFormat.ASS,
    ".ssa": LyricFormat.ASS,
    ".lqe": LyricFormat.LQE,
    ".lyl": LyricFormat.LYL,
    ".srt": LyricFormat.SRT,
}

# first match wins
_DETECTORS: tuple[tuple[LyricFormat, Callable[[str], bool]], ...] = (
    (LyricFormat.SRT, is_srt_format),
    (LyricFormat.LQE, is_lqe_format),
    (LyricFormat.ASS, is_ass_format),
    (LyricFormat.LYL, is_lyl_format),
    (LyricFormat.ESLYRIC, is_eslyric_format),
    (LyricFormat.LYRIC_A2, is_lyric_a2_format),
)

TITLES: dict[LyricFormat, str] = {
    LyricFormat.LYL: "Converted LYL Lyrics",
    LyricFormat.SRT: "SRT Converted",
}


def format_from_filename(filename: str | None) -> LyricFormat | None:
    if not filename:
        return None
    return _EXTENSIONS.get(PurePath(filename).suffix.lower())


def detect_format(content: str) -> LyricFormat:
    for fmt, detector in _DETECTORS:
        if detector(content):
            return fmt
    return LyricFormat.LRC


def resolve_format(content: str, filename: str | None = None) -> LyricFormat:
    fmt = format_from_filename(filename)
    if fmt is None:
        return detect_format(content)
    if fmt is LyricFormat.LRC:
        # per-character variants share the .lrc extension
        if is_eslyric_format(content):
            return LyricFormat.ESLYRIC
        if is_lyric_a2_format(content):
            return LyricFormat.LYRIC_A2
    return fmt


def _parser_for(fmt: LyricFormat, cfg: PipelineConfig) -> Callable[[str], ParseResult]:
    if fmt is LyricFormat.LQE:
        return lambda content: parse_lqe(
            content,
            exact_tolerance_ms=cfg.exact_merge_tolerance_ms,
            nearest_tolerance_ms=cfg.nearest_merge_tolerance_ms,
            word_fallback_ms=cfg.word_fallback_ms,
        )
    return {
        LyricFormat.LRC: parse_lrc,
        LyricFormat.ASS: parse_ass,
        LyricFormat.LYL: parse_lyl,
        LyricFormat.ESLYRIC: parse_eslyric,
        LyricFormat.LYRIC_A2: parse_lyric_a2,
        LyricFormat.SRT: parse_srt,
    }[fmt]


def parse_lyrics(content: str, filename: str | None = None, *, cfg: PipelineConfig | None = None) -> ParseResult:
    """
    Pick one parser (by extension, else by detection) and run it.

    Never raises for bad input: an LQE failure is retried as LRC, any other
    failure yields an empty document with the error in `warnings`.
    """
    cfg = cfg or PipelineConfig()
    content = content.lstrip("\ufeff")
    fmt = resolve_format(content, filename)
    logger.debug("Parsing %s as %s", filename or "<text>", fmt.value)

    try:
        res = _parser_for(fmt, cfg)(content)
    except Exception as e:
        if fmt is not LyricFormat.LQE:
            logger.warning("%s parse failed: %s", fmt.value, e)
            return ParseResult(document=LyricDocument(), warnings=(f"{fmt.value} parse failed: {e}",), fmt=fmt)
        logger.warning("LQE parse failed (%s), retrying as LRC", e)
        return _retry_as_lrc(content, f"lqe parse failed: {e}")

    if fmt is LyricFormat.LQE and not res.lines:
        return _retry_as_lrc(content, "lqe parse produced no lines", res.warnings)
    return res


def _retry_as_lrc(content: str, reason: str, earlier: tuple[str, ...] = ()) -> ParseResult:
    try:
        res = parse_lrc(content)
    except Exception as e:
        logger.warning("LRC fallback failed: %s", e)
        return ParseResult(
            document=LyricDocument(),
            warnings=earlier + (reason, f"lrc fallback failed: {e}"),
            fmt=LyricFormat.LRC,
        )
    return ParseResult(document=res.document, warnings=earlier + (reason,) + res.warnings, fmt=LyricFormat.LRC)


def convert_to_ttml(
    content: str,
    filename: str | None = None,
    *,
    title: str | None = None,
    cfg: PipelineConfig | None = None,
) -> str:
    cfg = cfg or PipelineConfig()
    res = parse_lyrics(content, filename, cfg=cfg)
    return to_ttml(res.document, title=title or TITLES.get(res.fmt, DEFAULT_TITLE), cfg=cfg)
