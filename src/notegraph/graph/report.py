from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .build import Vault
from .query import LinkEdge, find_orphans, resolve_edges


@dataclass(frozen=True)
class Report:
    total_notes: int
    total_edges: int  # resolved edges only; dangling ones are listed below
    dangling_links: tuple[LinkEdge, ...] = ()
    orphan_notes: tuple[str, ...] = ()
    roots: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalNotes": self.total_notes,
            "totalEdges": self.total_edges,
            "danglingLinks": [{"fromTitle": e.from_title, "toTitle": e.to_title} for e in self.dangling_links],
            "orphanNotes": list(self.orphan_notes),
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


def build_report(vault: Vault, *, roots: Iterable[str] = ()) -> Report:
    roots = tuple(dict.fromkeys(roots))
    edges = resolve_edges(vault)
    return Report(
        total_notes=len(vault),
        total_edges=sum(1 for e in edges if not e.dangling),
        dangling_links=tuple(e for e in edges if e.dangling),
        orphan_notes=tuple(find_orphans(vault, roots=roots)),
        roots=tuple(r for r in roots if r in vault),
    )


def render_table(report: Report, console: Console) -> None:
    # Note titles may contain "[...]"; build cells from Text so rich markup is off.
    summary = Table(title="Vault Report")
    summary.add_column("Metric")
    summary.add_column("Value", justify="right")
    summary.add_row("Notes", str(report.total_notes))
    summary.add_row("Edges", str(report.total_edges))
    summary.add_row("Dangling links", str(len(report.dangling_links)))
    summary.add_row("Orphan notes", str(len(report.orphan_notes)))
    if report.roots:
        summary.add_row("Roots", Text(", ".join(report.roots)))
    console.print(summary)

    if report.dangling_links:
        t = Table(title="Dangling Links")
        t.add_column("from")
        t.add_column("to (missing)", style="red")
        for e in report.dangling_links:
            t.add_row(Text(e.from_title), Text(e.to_title))
        console.print(t)

    if report.orphan_notes:
        t = Table(title="Orphan Notes")
        t.add_column("#", justify="right", width=4)
        t.add_column("title", style="yellow")
        for i, title in enumerate(report.orphan_notes, start=1):
            t.add_row(Text(str(i)), Text(title))
        console.print(t)
