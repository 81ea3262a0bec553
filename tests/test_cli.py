from __future__ import annotations

import json

from typer.testing import CliRunner

from lyrics_normalize.cli import app

runner = CliRunner()

LYL = "[type:LyricifyLines]\n[1000,2500]Hello\n[3000,2000]backwards\n"


def _write(tmp_path, name: str, text: str):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_detect(tmp_path):
    path = _write(tmp_path, "song.txt", "[00:09.997]告[00:10.596]訴")
    result = runner.invoke(app, ["detect", str(path)])
    assert result.exit_code == 0
    assert result.stdout.strip() == "eslyric"


def test_parse_stats(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    path = _write(tmp_path, "song.lyl", LYL)
    result = runner.invoke(app, ["parse", str(path)])
    assert result.exit_code == 0
    assert "format=lyl" in result.stdout
    assert "lines_total=2" in result.stdout
    assert "warnings_total=1" in result.stdout


def test_convert_ttml_to_file(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    path = _write(tmp_path, "song.srt", "1\n00:00:01,000 --> 00:00:04,000\nHello world\n")
    out = tmp_path / "song.ttml"
    result = runner.invoke(app, ["convert", str(path), "--out", str(out)])
    assert result.exit_code == 0
    text = out.read_text(encoding="utf-8")
    assert '<p begin="00:00:01.000" end="00:00:04.000" region="bottom">' in text
    assert ">Hello world</span>" in text


def test_convert_json_stdout(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    path = _write(tmp_path, "song.lyl", LYL)
    result = runner.invoke(app, ["convert", str(path), "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["lines"][0]["words"][0]["text"] == "Hello"


def test_convert_bad_format(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    path = _write(tmp_path, "song.lyl", LYL)
    result = runner.invoke(app, ["convert", str(path), "--format", "docx"])
    assert result.exit_code != 0
