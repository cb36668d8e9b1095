from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from ..errors import UnknownNoteError
from .build import Vault
from .extract import split_anchor


@dataclass(frozen=True)
class LinkEdge:
    from_title: str
    to_title: str
    dangling: bool = False


def resolve_title(vault: Vault, target: str, *, source: str | None = None) -> str | None:
    """Note title a link target points at, or None when it dangles.

    An exact title wins, so "C# vs JavaScript" links to that note. Only when no
    note has the exact title is a "#Heading" / "^block" suffix dropped; an
    anchor with nothing before it ("#Heading") points back at ``source``.
    """
    if target in vault:
        return target
    base, _ = split_anchor(target)
    if base == target:
        return None
    if not base:
        return source if source in vault else None
    return base if base in vault else None


def resolve_edges(vault: Vault) -> list[LinkEdge]:
    """One edge per outgoing link, in note scan order then link order."""
    edges: list[LinkEdge] = []
    for note in vault.notes:
        for target in note.outgoing_links:
            title = resolve_title(vault, target, source=note.title)
            if title is None:
                edges.append(LinkEdge(from_title=note.title, to_title=target, dangling=True))
            else:
                edges.append(LinkEdge(from_title=note.title, to_title=title))
    return edges


def find_dangling(vault: Vault) -> list[LinkEdge]:
    return [e for e in resolve_edges(vault) if e.dangling]


def _inbound(vault: Vault) -> list[LinkEdge]:
    return [e for e in resolve_edges(vault) if not e.dangling and e.from_title != e.to_title]


def find_orphans(vault: Vault, *, roots: Iterable[str] = ()) -> list[str]:
    """Titles with no inbound link from another note, minus ``roots``."""
    excluded = set(roots)
    linked = {e.to_title for e in _inbound(vault)}
    return [t for t in vault.titles() if t not in linked and t not in excluded]


def backlinks(vault: Vault, title: str) -> list[str]:
    if title not in vault:
        raise UnknownNoteError(title)
    return list(dict.fromkeys(e.from_title for e in _inbound(vault) if e.to_title == title))


def outgoing(vault: Vault, title: str) -> list[str]:
    note = vault.get(title)
    if note is None:
        raise UnknownNoteError(title)
    return list(dict.fromkeys(note.outgoing_links))


def most_linked(vault: Vault, *, limit: int = 10) -> list[tuple[str, int]]:
    """Existing notes ranked by inbound edge count (ties keep scan order)."""
    counts = Counter(e.to_title for e in _inbound(vault))
    order = {t: i for i, t in enumerate(vault.titles())}
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], order[kv[0]]))
    return ranked[: max(0, int(limit))]
