from unittest.mock import patch

import pytest

from lyrics_normalize.dispatch import convert_to_ttml, detect_format, parse_lyrics, resolve_format
from lyrics_normalize.formats.model import LyricFormat

ASS = "[Script Info]\n[Events]\nDialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,{\\k100}hi\n"
LQE = "[Lyricify Quick Export]\n[version:1.0]\n[lyrics: format@Lrc]\n[00:01.00]hi\n"
LYL = "[type:LyricifyLines]\n[1000,2500]Hello"
SRT = "1\n00:00:01,000 --> 00:00:04,000\nHello world\n"
ESLYRIC = "[00:09.997]告[00:10.596]訴"
A2 = "[00:09.997]<00:09.997>告<00:10.596>"


@pytest.mark.parametrize(
    "content, expected",
    [
        (SRT, LyricFormat.SRT),
        (LQE, LyricFormat.LQE),
        (ASS, LyricFormat.ASS),
        (LYL, LyricFormat.LYL),
        (ESLYRIC, LyricFormat.ESLYRIC),
        (A2, LyricFormat.LYRIC_A2),
        ("[00:01.00]plain lrc", LyricFormat.LRC),
        ("no markers at all", LyricFormat.LRC),
    ],
)
def test_detect_format(content, expected):
    assert detect_format(content) == expected


def test_srt_wins_over_lqe():
    assert detect_format(LQE + "\n00:00:01,000 --> 00:00:02,000\n") == LyricFormat.SRT


def test_extension_skips_detection():
    # SRT timing in a .ass file is not enough to switch parsers
    assert resolve_format(SRT, "song.ass") == LyricFormat.ASS
    assert resolve_format(ASS, "song.LYL") == LyricFormat.LYL


def test_lrc_extension_checks_per_character_variants():
    assert resolve_format(ESLYRIC, "song.lrc") == LyricFormat.ESLYRIC
    assert resolve_format(A2, "song.lrc") == LyricFormat.LYRIC_A2
    assert resolve_format("[00:01.00]x", "song.lrc") == LyricFormat.LRC


def test_unknown_extension_falls_back_to_detection():
    assert resolve_format(LYL, "song.txt") == LyricFormat.LYL


def test_unknown_text_does_not_raise():
    res = parse_lyrics("Just some words\nwith no timing\n")
    assert res.fmt == LyricFormat.LRC
    assert res.lines == ()


def test_lyl_scenario():
    res = parse_lyrics(LYL)
    (line,) = res.lines
    assert (line.words[0].text, line.start_ms, line.end_ms) == ("Hello", 1000, 2500)


def test_bom_stripped():
    assert parse_lyrics("\ufeff" + LQE).fmt == LyricFormat.LQE


def test_lqe_failure_retried_as_lrc():
    with patch("lyrics_normalize.dispatch.parse_lqe", side_effect=RuntimeError("boom")):
        res = parse_lyrics(LQE, "song.lqe")
    assert res.fmt == LyricFormat.LRC
    assert [line.text for line in res.lines] == ["hi"]
    assert any("boom" in w for w in res.warnings)


def test_other_failures_give_empty_document():
    with patch("lyrics_normalize.dispatch.parse_srt", side_effect=RuntimeError("boom")):
        res = parse_lyrics(SRT, "song.srt")
    assert res.fmt == LyricFormat.SRT
    assert res.lines == ()
    assert res.warnings


def test_lqe_without_header_via_extension_retried():
    res = parse_lyrics("[00:01.00]hi\n", "song.lqe")
    assert res.fmt == LyricFormat.LRC
    assert [line.text for line in res.lines] == ["hi"]


def test_convert_uses_format_title():
    assert "<ttm:title>SRT Converted</ttm:title>" in convert_to_ttml(SRT)
    assert "<ttm:title>Converted LYL Lyrics</ttm:title>" in convert_to_ttml(LYL)
    assert "<ttm:title>Custom</ttm:title>" in convert_to_ttml(ASS, title="Custom")


def test_convert_empty_document_is_valid():
    out = convert_to_ttml("nothing here")
    assert "<p " not in out
    assert out.endswith("</tt>")
