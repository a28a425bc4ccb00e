from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from .config import ExtractionConfig
from .convert.render import RENDERERS
from .errors import ArticleBodyError
from .pipeline import RunConfig, run
from .utils.io import STDIN
from .utils.logging import setup_logger
from .version import __version__


app = typer.Typer(add_completion=False, help="Find the main article element of an HTML page.")


@app.command()
def main(
    source: str = typer.Argument(STDIN, help="HTML file to read, or '-' for stdin"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write the result to this file"),
    fmt: str = typer.Option("html", "-f", "--format", help="Output format: html, text or markdown"),
    title: Optional[str] = typer.Option(None, "--title", help="Page title used to spot duplicated headings"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="Decode input with this encoding"),
    char_threshold: Optional[int] = typer.Option(None, "--char-threshold", help="Characters a pass must yield"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    version: bool = typer.Option(False, "--version", help="Print version and exit"),
):
    # ARTICLEBODY_* tunables may come from a .env file
    load_dotenv()
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    setup_logger(log_level)
    if fmt not in RENDERERS:
        typer.echo(f"Unknown format {fmt!r}; choose from {', '.join(RENDERERS)}", err=True)
        raise typer.Exit(code=2)

    try:
        extraction = ExtractionConfig.from_env().with_overrides(char_threshold=char_threshold)
        out = run(
            RunConfig(
                source=source,
                output=output,
                format=fmt,
                title=title,
                encoding=encoding,
                log_level=log_level,
                extraction=extraction,
            )
        )
    except ArticleBodyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    if out.path is None:
        typer.echo(out.rendered, nl=False)


def entrypoint():
    app()


if __name__ == "__main__":
    entrypoint()
