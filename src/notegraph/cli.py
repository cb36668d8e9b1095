from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import Settings
from .errors import DuplicateTitleError, UnknownNoteError
from .graph.build import Vault, scan_vault
from .graph.query import backlinks, most_linked, outgoing, resolve_title
from .graph.report import build_report, render_table
from .ingest.files import read_vault
from .logging_setup import setup_logging


app = typer.Typer(add_completion=False, help="Wiki-link graph checks for Markdown note vaults.")
console = Console()
err_console = Console(stderr=True)

REPORT_FORMATS = ("json", "table")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scan progress to stderr"),
):
    """Scan a vault, resolve [[links]], report dangling links and orphan notes."""
    settings = Settings()
    setup_logging("DEBUG" if verbose else settings.log_level)


def _load_vault(vault_dir: Path, *, workers: int | None = None) -> Vault:
    settings = Settings()
    try:
        files = read_vault(
            vault_dir,
            workers=int(workers if workers is not None else settings.workers),
            ignore_dirs=settings.ignore_dirs,
        )
        return scan_vault(files, status_markers=settings.status_markers)
    except DuplicateTitleError as e:
        err_console.print(str(e), style="red", markup=False, soft_wrap=True)
        err_console.print("Fix: rename one of the files so every note title is unique.", style="yellow", soft_wrap=True)
        raise typer.Exit(code=2)
    except OSError as e:
        err_console.print(f"Could not read vault: {e}", style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)


@app.command()
def report(
    vault: Path = typer.Argument(..., exists=True, file_okay=False, dir_okay=True, readable=True),
    root: list[str] | None = typer.Option(None, "--root", "-r", help="Index/root note excluded from orphans (repeatable)"),
    fmt: str | None = typer.Option(None, "--format", "-f", help="Output format: json or table"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to this file"),
    workers: int | None = typer.Option(None, "--workers", help="Threads used to read files"),
    fail_on_dangling: bool = typer.Option(False, "--fail-on-dangling", help="Exit 1 when any link is dangling"),
):
    """Report totals, dangling links and orphan notes for a vault."""
    settings = Settings()
    fmt = (fmt or settings.report_format).lower()
    if fmt not in REPORT_FORMATS:
        raise typer.BadParameter(f"--format must be one of: {', '.join(REPORT_FORMATS)}")

    roots = list(root) if root else list(settings.default_roots)
    res = build_report(_load_vault(vault, workers=workers), roots=roots)

    if fmt == "json":
        text = res.to_json()
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(text + "\n", encoding="utf-8")
        else:
            console.out(text, highlight=False)
    else:
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            with output.open("w", encoding="utf-8") as f:
                render_table(res, Console(file=f, width=120))
        else:
            render_table(res, console)

    if output is not None:
        err_console.print(f"Wrote report to {output}", markup=False, soft_wrap=True)

    if fail_on_dangling and res.dangling_links:
        raise typer.Exit(code=1)


@app.command()
def links(
    vault: Path = typer.Argument(..., exists=True, file_okay=False, dir_okay=True, readable=True),
    title: str = typer.Argument(..., help="Note title (file name without .md)"),
):
    """Show outgoing links and backlinks for one note."""
    v = _load_vault(vault)
    try:
        out = outgoing(v, title)
        back = backlinks(v, title)
    except UnknownNoteError as e:
        err_console.print(str(e), style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=2)

    console.print(f"{title}", markup=False, style="bold")
    console.print(f"outgoing ({len(out)}):", markup=False)
    for t in out:
        if resolve_title(v, t, source=title) is not None:
            console.print(f"- {t}", markup=False)
        else:
            console.print(f"- {t} (missing)", markup=False, style="red")
    console.print(f"backlinks ({len(back)}):", markup=False)
    for t in back:
        console.print(f"- {t}", markup=False)


@app.command()
def stats(
    vault: Path = typer.Argument(..., exists=True, file_okay=False, dir_okay=True, readable=True),
    root: list[str] | None = typer.Option(None, "--root", "-r", help="Index/root note excluded from orphans (repeatable)"),
    top: int = typer.Option(10, help="How many of the most linked notes to show"),
):
    """Show vault stats and the most linked notes."""
    settings = Settings()
    v = _load_vault(vault)
    roots = list(root) if root else list(settings.default_roots)
    res = build_report(v, roots=roots)

    table = Table(title="Vault Stats")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Notes", str(res.total_notes))
    table.add_row("Edges", str(res.total_edges))
    table.add_row("Dangling links", str(len(res.dangling_links)))
    table.add_row("Orphan notes", str(len(res.orphan_notes)))
    table.add_row("Tagged notes", str(sum(1 for n in v.notes if n.tags)))
    console.print(table)

    ranked = most_linked(v, limit=top)
    if ranked:
        t2 = Table(title="Most Linked Notes")
        t2.add_column("title")
        t2.add_column("inbound", justify="right")
        for title, n in ranked:
            t2.add_row(Text(title), str(n))
        console.print(t2)


if __name__ == "__main__":
    app()
