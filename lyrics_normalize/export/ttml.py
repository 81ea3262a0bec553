"""
Canonical TTML output.

The envelope is fixed apart from the title. Before emission every line and
word goes through `normalize_document`, which clamps missing or inverted
times and fills empty text, so `to_ttml` never raises.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from xml.sax.saxutils import escape

import regex

from lyrics_normalize.config import PipelineConfig
from lyrics_normalize.formats.model import LyricDocument
from lyrics_normalize.formats.timecodes import format_ttml_time

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Converted Lyrics"

_ENTITIES = {'"': "&quot;", "'": "&apos;"}

# characters outside the XML 1.0 Char production
_XML_ILLEGAL_RE = regex.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

_HEAD = """<?xml version="1.0" encoding="utf-8"?>
<tt xmlns="http://www.w3.org/ns/ttml" xmlns:ttm="http://www.w3.org/ns/ttml#metadata" xmlns:tts="http://www.w3.org/ns/ttml#styling" xml:lang="en">
  <head>
    <metadata>
      <ttm:title>{title}</ttm:title>
    </metadata>
    <styling>
      <style xml:id="normal" tts:fontFamily="Arial" tts:fontSize="100%" tts:textAlign="center"/>
    </styling>
    <layout>
      <region xml:id="bottom" tts:origin="0% 0%" tts:extent="100% 100%" tts:textAlign="center" tts:displayAlign="after"/>
    </layout>
  </head>
  <body>
    <div>
"""

_TAIL = """    </div>
  </body>
</tt>"""


@dataclass(frozen=True, slots=True)
class SpanOut:
    text: str
    begin_ms: int
    end_ms: int


@dataclass(frozen=True, slots=True)
class ParagraphOut:
    begin_ms: int
    end_ms: int
    spans: tuple[SpanOut, ...]


def escape_xml(text: str) -> str:
    return escape(text, _ENTITIES)


def _valid_time(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value) and not math.isinf(value) and value >= 0


def strip_illegal_xml(text: str) -> str:
    return _XML_ILLEGAL_RE.sub("", text)


def _text(value: object, placeholder: str) -> str:
    if not isinstance(value, str):
        return placeholder
    return strip_illegal_xml(value) or placeholder


def normalize_document(doc: LyricDocument, cfg: PipelineConfig | None = None) -> tuple[ParagraphOut, ...]:
    cfg = cfg or PipelineConfig()
    out: list[ParagraphOut] = []
    for line in doc.lines or ():
        start = int(line.start_ms) if _valid_time(line.start_ms) else 0
        end = line.end_ms
        if not _valid_time(end) or end <= start:
            end = start + cfg.line_fallback_ms
        end = int(end)

        spans: list[SpanOut] = []
        for word in line.words or ():
            w_start = int(word.start_ms) if _valid_time(word.start_ms) else start
            w_end = word.end_ms
            if not _valid_time(w_end) or w_end <= w_start:
                w_end = w_start + cfg.word_fallback_ms
            spans.append(SpanOut(text=_text(word.text, cfg.empty_word_text), begin_ms=w_start, end_ms=int(w_end)))
        if not spans:
            logger.debug("Line at %dms has no words, adding placeholder", start)
            spans.append(SpanOut(text=cfg.empty_line_text, begin_ms=start, end_ms=end))

        out.append(ParagraphOut(begin_ms=start, end_ms=end, spans=tuple(spans)))
    return tuple(out)


def _render_span(span: SpanOut) -> str:
    # multi-line cue text keeps its line breaks
    body = escape_xml(span.text).replace("\n", "<br/>")
    return f'<span begin="{format_ttml_time(span.begin_ms)}" end="{format_ttml_time(span.end_ms)}">{body}</span>'


def to_ttml(doc: LyricDocument, title: str = DEFAULT_TITLE, cfg: PipelineConfig | None = None) -> str:
    out = [_HEAD.format(title=escape_xml(strip_illegal_xml(title or "") or DEFAULT_TITLE))]
    for p in normalize_document(doc, cfg):
        spans = "".join(_render_span(s) for s in p.spans)
        out.append(
            f'      <p begin="{format_ttml_time(p.begin_ms)}" end="{format_ttml_time(p.end_ms)}" region="bottom">'
            f"{spans}</p>\n"
        )
    out.append(_TAIL)
    return "".join(out)
