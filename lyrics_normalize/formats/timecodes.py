"""
Time-string codecs. Everything is normalized to integer milliseconds.

- ASS:    H:MM:SS.CC      (centiseconds)
- lyric:  MM:SS.mmm       (per-character formats)
- SRT:    HH:MM:SS,mmm
- LRC:    mm:ss[.x|.xx|.xxx]
- TTML:   HH:MM:SS.mmm    (output only)
"""

from __future__ import annotations

import regex

from .errors import TimeFormatError

_ASS_TIME_RE = regex.compile(r"(?P<h>\d+):(?P<m>\d{2}):(?P<s>\d{2})\.(?P<cs>\d{2})")
_LYRIC_TIME_RE = regex.compile(r"(?P<m>\d+):(?P<s>\d{2})\.(?P<ms>\d{3})")
_SRT_TIME_RE = regex.compile(r"(?P<h>\d+):(?P<m>\d{2}):(?P<s>\d{2}),(?P<ms>\d{3})")


def parse_ass_time(value: str) -> int:
    m = _ASS_TIME_RE.fullmatch(value.strip())
    if not m:
        raise TimeFormatError(f"Invalid ASS time: {value!r}")
    return (
        int(m.group("h")) * 3_600_000
        + int(m.group("m")) * 60_000
        + int(m.group("s")) * 1_000
        + int(m.group("cs")) * 10
    )


def parse_lyric_time(value: str) -> int:
    m = _LYRIC_TIME_RE.fullmatch(value.strip())
    if not m:
        raise TimeFormatError(f"Invalid MM:SS.mmm time: {value!r}")
    return int(m.group("m")) * 60_000 + int(m.group("s")) * 1_000 + int(m.group("ms"))


def parse_srt_time(value: str) -> int:
    m = _SRT_TIME_RE.fullmatch(value.strip())
    if not m:
        raise TimeFormatError(f"Invalid SRT time: {value!r}")
    return (int(m.group("h")) * 3600 + int(m.group("m")) * 60 + int(m.group("s"))) * 1000 + int(m.group("ms"))


def lrc_time_to_ms(m: int, s: int, frac: str | None) -> int:
    if not (0 <= s <= 59):
        raise TimeFormatError(f"Invalid seconds: {s}")
    if frac is None:
        ms = 0
    else:
        # "2" -> 200ms, "23" -> 230ms, "234" -> 234ms
        ms = int(frac.ljust(3, "0")[:3])
    return (m * 60 + s) * 1000 + ms


def _split(ms: int) -> tuple[int, int, int, int]:
    h, rem = divmod(int(ms), 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return h, m, s, ms2


def format_ttml_time(ms: int) -> str:
    h, m, s, ms2 = _split(ms)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms2:03d}"


def format_ass_time(ms: int) -> str:
    h, m, s, ms2 = _split(ms)
    return f"{h}:{m:02d}:{s:02d}.{ms2 // 10:02d}"


def format_lyric_time(ms: int) -> str:
    m, rem = divmod(int(ms), 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{m:02d}:{s:02d}.{ms2:03d}"


def format_srt_time(ms: int) -> str:
    h, m, s, ms2 = _split(ms)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def format_lrc_time(ms: int) -> str:
    m, rem = divmod(int(ms), 60_000)
    s, ms2 = divmod(rem, 1_000)
    # keep 2 decimals for compatibility
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"
