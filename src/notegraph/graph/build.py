from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from ..errors import DuplicateTitleError
from .extract import DEFAULT_STATUS_MARKERS, WikiLink, extract_tags, iter_wikilinks


log = logging.getLogger(__name__)

NOTE_EXT = ".md"


@dataclass(frozen=True)
class Note:
    title: str
    path: str
    outgoing_links: tuple[str, ...] = ()
    links: tuple[WikiLink, ...] = ()
    tags: tuple[str, ...] = ()
    markers: tuple[str, ...] = ()


@dataclass(frozen=True)
class Vault:
    notes: tuple[Note, ...] = ()

    def __post_init__(self) -> None:
        # Frozen dataclass: the lookup table is attached once here.
        object.__setattr__(self, "_by_title", {n.title: n for n in self.notes})

    def __len__(self) -> int:
        return len(self.notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes)

    def __contains__(self, title: object) -> bool:
        return title in self._by_title

    def get(self, title: str) -> Note | None:
        return self._by_title.get(title)

    def titles(self) -> list[str]:
        return [n.title for n in self.notes]


def title_for_path(path: str) -> str:
    # Collaborators hand us "/"-separated relative paths; a backslash is a legal name character.
    name = path.rsplit("/", 1)[-1]
    if name.endswith(NOTE_EXT):
        name = name[: -len(NOTE_EXT)]
    return name


def make_note(path: str, text: str, *, status_markers: Iterable[str] = DEFAULT_STATUS_MARKERS) -> Note:
    """Build one Note from a single file. Independent of every other file."""
    links = tuple(iter_wikilinks(text, status_markers=status_markers))
    return Note(
        title=title_for_path(path),
        path=path,
        outgoing_links=tuple(link.target for link in links),
        links=links,
        tags=tuple(extract_tags(text)),
        markers=tuple(link.marker for link in links if link.marker),
    )


def assemble_vault(notes: Iterable[Note]) -> Vault:
    """Combine per-file notes into a Vault, rejecting duplicate titles."""
    seen: dict[str, Note] = {}
    ordered: list[Note] = []
    for note in notes:
        prev = seen.get(note.title)
        if prev is not None:
            raise DuplicateTitleError(note.title, prev.path, note.path)
        seen[note.title] = note
        ordered.append(note)
    return Vault(notes=tuple(ordered))


def scan_vault(
    files: Iterable[tuple[str, str]],
    *,
    status_markers: Iterable[str] = DEFAULT_STATUS_MARKERS,
) -> Vault:
    """Scan ``(relative_path, contents)`` pairs into a Vault.

    Raises DuplicateTitleError when two paths map to the same title; no
    partial vault is returned in that case.
    """
    markers = tuple(status_markers)
    notes: list[Note] = []
    for path, text in files:
        note = make_note(path, text, status_markers=markers)
        log.debug("note %r: %d link(s) from %s", note.title, len(note.outgoing_links), path)
        notes.append(note)

    vault = assemble_vault(notes)
    log.info(
        "scanned %d note(s), %d raw link(s)",
        len(vault),
        sum(len(n.outgoing_links) for n in vault.notes),
    )
    return vault
