from __future__ import annotations

from dataclasses import replace
from pathlib import Path
import typer

from uta.app import download
from uta.catalog.client import CatalogClient
from uta.config import load_config
from uta.convert import OutputMode, convert as convert_markup
from uta.errors import ConversionError, UtaError
from uta.logging_setup import setup_logging


app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.command()
def fetch(
    url: str = typer.Option(..., "--url", "-u", help="URL of the song or album"),
    syllable: bool = typer.Option(False, "--syllable", "-s", help="Need syllable lyrics"),
    fmt: OutputMode = typer.Option(OutputMode.TTML, "--format", case_sensitive=False, help="ttml|lrc"),
    out: Path | None = typer.Option(None, "--out", help="Output directory (default: UTA_OUTPUT_DIR or cwd)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Download lyrics of a song or a whole album.
    """
    cfg = load_config()
    if out is not None:
        cfg = replace(cfg, output_dir=out)

    setup_logging(debug)
    try:
        client = CatalogClient.bootstrap(cfg)
        report = download(client, url, syllable=syllable, mode=fmt, out_dir=cfg.output_dir)
    except UtaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for path in report.saved:
        typer.echo(f"Saved {path}")
    for s in report.skipped:
        typer.echo(f"{s.label} skipped: {s.reason}")
    if not report.saved:
        raise typer.Exit(code=1)


@app.command()
def convert(
    ttml_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="TTML file to convert"),
    artist: str = typer.Option(..., "--artist", "-a", help="Artist name for the [ar:] tag"),
    title: str = typer.Option(..., "--title", "-t", help="Track title for the [ti:] tag"),
    fmt: OutputMode = typer.Option(OutputMode.LRC, "--format", case_sensitive=False, help="ttml|lrc"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Convert a local TTML file to LRC (or pretty TTML)."""
    # bytes, so expat decodes and reports bad encodings itself
    text = ttml_path.read_bytes()
    try:
        data = convert_markup(text, artist, title, fmt)
    except ConversionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
