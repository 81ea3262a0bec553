from lyrics_normalize.formats.lrc import parse_lrc


def test_parse_multiple_timestamps():
    res = parse_lrc("[00:01.00][00:02.5]hey\n")
    assert [line.start_ms for line in res.lines] == [1000, 2500]
    assert [line.text for line in res.lines] == ["hey", "hey"]


def test_parse_offset_clamped():
    res = parse_lrc("[offset:-1500]\n[00:01.00]x\n")
    assert res.lines[0].start_ms == 0


def test_line_ends_at_next_entry():
    res = parse_lrc("[00:01.00]a\n[00:03.00]b\n")
    a, b = res.lines
    assert (a.start_ms, a.end_ms) == (1000, 3000)
    assert (b.start_ms, b.end_ms) == (3000, 3000)
    assert a.words[0].end_ms == 3000


def test_empty_entry_closes_previous_line_and_is_dropped():
    res = parse_lrc("[00:01.00]a\n[00:02.00]\n[00:05.00]b\n")
    assert [line.text for line in res.lines] == ["a", "b"]
    assert res.lines[0].end_ms == 2000


def test_tags_collected_as_metadata():
    res = parse_lrc("[ti:Song]\n[ar:Someone]\n[00:01.00]x\n")
    assert res.document.metadata == {"ti": ["Song"], "ar": ["Someone"]}


def test_bad_lines_become_warnings():
    res = parse_lrc("just text\n[00:75.00]bad seconds\n[00:01.00]ok\n")
    assert [line.text for line in res.lines] == ["ok"]
    assert len(res.warnings) == 2
