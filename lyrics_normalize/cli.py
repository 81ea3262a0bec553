from __future__ import annotations

from pathlib import Path

import typer
from colorama import Fore, Style, just_fix_windows_console

from lyrics_normalize.config import load_config
from lyrics_normalize.dispatch import TITLES, parse_lyrics, resolve_format
from lyrics_normalize.export.plain import export_json, export_lrc, export_srt
from lyrics_normalize.export.ttml import DEFAULT_TITLE, to_ttml
from lyrics_normalize.logging_setup import setup_logging


app = typer.Typer(no_args_is_help=True, add_completion=False)


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8-sig")


def _warn(msg: str) -> None:
    typer.echo(f"{Fore.YELLOW}warning:{Style.RESET_ALL} {msg}", err=True)


@app.command()
def detect(lyrics_path: Path):
    """Print the detected lyric format."""
    typer.echo(resolve_format(_read(lyrics_path), lyrics_path.name).value)


@app.command()
def parse(
    lyrics_path: Path,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Parse a lyric file and print stats."""
    setup_logging(debug)
    res = parse_lyrics(_read(lyrics_path), lyrics_path.name, cfg=load_config())
    doc = res.document
    typer.echo(f"format={res.fmt.value if res.fmt else 'unknown'}")
    typer.echo(f"lines_total={len(doc.lines)}")
    typer.echo(f"words_total={sum(len(line.words) for line in doc.lines)}")
    typer.echo(f"translated_lines={sum(1 for line in doc.lines if line.translation)}")
    typer.echo(f"warnings_total={len(res.warnings)}")
    typer.echo(f"metadata={doc.metadata or {}}")
    for w in res.warnings:
        _warn(w)


@app.command()
def convert(
    lyrics_path: Path,
    fmt: str = typer.Option("ttml", "--format", case_sensitive=False, help="ttml|json|lrc|srt"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    title: str | None = typer.Option(None, "--title", help="TTML title"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Convert a lyric file to TTML/JSON/LRC/SRT."""
    setup_logging(debug)
    cfg = load_config()
    res = parse_lyrics(_read(lyrics_path), lyrics_path.name, cfg=cfg)
    fmt_l = fmt.lower()
    if fmt_l == "ttml":
        data = to_ttml(res.document, title=title or TITLES.get(res.fmt, DEFAULT_TITLE), cfg=cfg)
    elif fmt_l == "json":
        data = export_json(res.document)
    elif fmt_l == "lrc":
        data = export_lrc(res.document)
    elif fmt_l == "srt":
        data = export_srt(res.document)
    else:
        raise typer.BadParameter("format must be one of: ttml, json, lrc, srt")

    if debug:
        for w in res.warnings:
            _warn(w)

    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


def main() -> None:
    just_fix_windows_console()
    app()


if __name__ == "__main__":
    main()
