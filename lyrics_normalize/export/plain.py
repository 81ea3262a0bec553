from __future__ import annotations

import json

from lyrics_normalize.formats.model import LyricDocument
from lyrics_normalize.formats.timecodes import format_lrc_time, format_srt_time


def export_json(doc: LyricDocument) -> str:
    return json.dumps(
        {
            "metadata": doc.metadata or {},
            "lines": [
                {
                    "start_ms": line.start_ms,
                    "end_ms": line.end_ms,
                    "translation": line.translation,
                    "romanization": line.romanization,
                    "words": [{"text": w.text, "start_ms": w.start_ms, "end_ms": w.end_ms} for w in line.words],
                }
                for line in doc.lines
            ],
        },
        ensure_ascii=False,
        indent=2,
    )


def export_lrc(doc: LyricDocument, include_tags: bool = True) -> str:
    out: list[str] = []
    if include_tags and doc.metadata:
        for k in sorted(doc.metadata.keys()):
            for v in doc.metadata[k]:
                out.append(f"[{k}:{v}]")

    for line in doc.lines:
        # LRC is one physical line per entry
        text = line.text.replace("\n", " ")
        out.append(f"[{format_lrc_time(line.start_ms)}]{text}")
    return "\n".join(out) + ("\n" if out else "")


def export_srt(doc: LyricDocument, min_duration_ms: int = 1) -> str:
    """
    Cue times come from the line; cues shorter than `min_duration_ms` are
    stretched so players don't drop them.
    """
    if not doc.lines:
        return ""
    out: list[str] = []
    for i, line in enumerate(doc.lines, start=1):
        start = max(line.start_ms, 0)
        end = max(line.end_ms, start + min_duration_ms)
        out.append(str(i))
        out.append(f"{format_srt_time(start)} --> {format_srt_time(end)}")
        out.append(line.text)
        out.append("")
    return "\n".join(out)
