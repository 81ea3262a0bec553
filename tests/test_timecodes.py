import pytest

from lyrics_normalize.formats.errors import TimeFormatError
from lyrics_normalize.formats.timecodes import (
    format_ass_time,
    format_lyric_time,
    format_srt_time,
    format_ttml_time,
    parse_ass_time,
    parse_lyric_time,
    parse_srt_time,
)


def test_parse_ass_time():
    assert parse_ass_time("1:02:03.45") == 3_600_000 + 2 * 60_000 + 3_000 + 450
    assert parse_ass_time("0:00:00.00") == 0


def test_parse_ass_time_rejects_garbage():
    with pytest.raises(TimeFormatError):
        parse_ass_time("00:01.00")


def test_parse_lyric_time():
    assert parse_lyric_time("00:09.997") == 9997
    assert parse_lyric_time("03:20.005") == 200_005


def test_parse_srt_time():
    assert parse_srt_time("01:00:01,250") == 3_601_250


def test_format_ttml_time():
    assert format_ttml_time(0) == "00:00:00.000"
    assert format_ttml_time(3_723_004) == "01:02:03.004"


@pytest.mark.parametrize("ms", [0, 10, 9990, 3_599_990, 7_384_560])
def test_ass_round_trip_centiseconds(ms):
    assert parse_ass_time(format_ass_time(ms)) == ms


@pytest.mark.parametrize("ms", [0, 1, 9997, 599_999])
def test_millisecond_round_trips(ms):
    assert parse_lyric_time(format_lyric_time(ms)) == ms
    assert parse_srt_time(format_srt_time(ms)) == ms
