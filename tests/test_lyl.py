from lyrics_normalize.formats.lyl import is_lyl_format, parse_lyl


def test_detect():
    assert is_lyl_format("[type:LyricifyLines]\n[1000,2500]Hello")
    assert not is_lyl_format("[1000,2500]Hello")
    assert not is_lyl_format("[type:LyricifyLines]\nno records")


def test_single_line():
    res = parse_lyl("[type:LyricifyLines]\n[1000,2500]Hello")
    (line,) = res.lines
    (word,) = line.words
    assert (word.text, word.start_ms, word.end_ms) == ("Hello", 1000, 2500)
    assert (line.start_ms, line.end_ms) == (1000, 2500)
    assert res.warnings == ()


def test_bad_lines_warned_and_skipped():
    res = parse_lyl("[type:LyricifyLines]\n[1000,2500]a\ngarbage\n[3000,4000]b\n")
    assert [line.text for line in res.lines] == ["a", "b"]
    assert len(res.warnings) == 1
    assert "line 3" in res.warnings[0]


def test_inverted_times_kept_with_warning():
    res = parse_lyl("[type:LyricifyLines]\n[5000,4000]late")
    word = res.lines[0].words[0]
    assert (word.start_ms, word.end_ms) == (5000, 4000)
    assert len(res.warnings) == 1
