from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class LyricFormat(str, Enum):
    LRC = "lrc"
    ASS = "ass"
    LQE = "lqe"
    LYL = "lyl"
    ESLYRIC = "eslyric"
    LYRIC_A2 = "lyric_a2"
    SRT = "srt"


@dataclass(frozen=True, slots=True)
class Word:
    text: str
    start_ms: int
    end_ms: int


@dataclass(frozen=True, slots=True)
class Line:
    words: tuple[Word, ...]
    start_ms: int
    end_ms: int
    translation: str = ""
    romanization: str = ""

    @classmethod
    def from_words(cls, words: Iterable[Word], translation: str = "", romanization: str = "") -> "Line":
        ws = tuple(words)
        if not ws:
            raise ValueError("Line needs at least one word")
        return cls(
            words=ws,
            start_ms=ws[0].start_ms,
            end_ms=ws[-1].end_ms,
            translation=translation,
            romanization=romanization,
        )

    @property
    def text(self) -> str:
        return "".join(w.text for w in self.words)


@dataclass(frozen=True, slots=True)
class LyricDocument:
    lines: tuple[Line, ...] = ()
    metadata: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ParseResult:
    document: LyricDocument
    warnings: tuple[str, ...] = ()
    fmt: LyricFormat | None = None

    @property
    def lines(self) -> tuple[Line, ...]:
        return self.document.lines
