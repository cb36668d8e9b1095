from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

# Non-greedy: the first "]]" after "[[" closes the link, even across lines.
_WIKILINK_RE = re.compile(r"(!?)\[\[(.*?)\]\]", re.S)

# Fenced blocks and inline code spans are not prose; tags inside them are code.
_CODE_BLOCK_RE = re.compile(r"(```|~~~).*?(?:\1|\Z)", re.S)
_CODE_SPAN_RE = re.compile(r"(`+)[^`].*?\1", re.S)

# Inline tags: "#js", "#topic/closures". Not a heading marker, URL fragment or
# HTML entity, and not purely numeric ("#1").
_TAG_RE = re.compile(r"(?<![\w#&/])#([\w\-/]*[^\W\d][\w\-/]*)")

DEFAULT_STATUS_MARKERS = ("✅", "⏳", "❌", "🚧", "⚠️")


@dataclass(frozen=True)
class WikiLink:
    target: str
    alias: str | None = None
    embed: bool = False
    line: int = 1  # 1-based, line of the opening "[["
    marker: str | None = None


def split_target(inner: str) -> tuple[str, str | None]:
    """Split the inside of ``[[...]]`` into (target, alias) at the first ``|``."""
    alias = None
    if "|" in inner:
        inner, alias = inner.split("|", 1)
        alias = alias.strip() or None
    return inner.strip(), alias


def split_anchor(target: str) -> tuple[str, str | None]:
    """``"Note#Heading"`` -> ``("Note", "Heading")``; ``"Note^id"`` -> ``("Note", "id")``."""
    cut = min((i for i in (target.find("#"), target.find("^")) if i >= 0), default=-1)
    if cut < 0:
        return target, None
    return target[:cut].strip(), target[cut + 1 :].strip() or None


def _marker_after(text: str, pos: int, markers: Iterable[str]) -> str | None:
    end = text.find("\n", pos)
    rest = text[pos : end if end >= 0 else len(text)].lstrip()
    for m in sorted(markers, key=len, reverse=True):
        if m and rest.startswith(m):
            return m
    return None


def iter_wikilinks(
    text: str,
    *,
    status_markers: Iterable[str] = DEFAULT_STATUS_MARKERS,
) -> Iterator[WikiLink]:
    """Yield every wiki-link in ``text`` in order of appearance.

    The target is the whole text before the first ``|``, kept as written apart
    from surrounding whitespace. Links with an empty target (``[[]]``) point at
    no note and are skipped.
    """
    text = text or ""
    markers = tuple(status_markers)
    for m in _WIKILINK_RE.finditer(text):
        target, alias = split_target(m.group(2))
        if not target:
            continue
        yield WikiLink(
            target=target,
            alias=alias,
            embed=bool(m.group(1)),
            line=text.count("\n", 0, m.start()) + 1,
            marker=_marker_after(text, m.end(), markers),
        )


def extract_link_targets(text: str) -> Iterator[str]:
    """Lazy sequence of link targets, duplicates preserved."""
    for link in iter_wikilinks(text, status_markers=()):
        yield link.target


def strip_code(text: str) -> str:
    text = _CODE_BLOCK_RE.sub(" ", text or "")
    return _CODE_SPAN_RE.sub(" ", text)


def extract_tags(text: str) -> list[str]:
    # Link bodies can contain "#Heading"; drop them and code before looking for tags.
    stripped = _WIKILINK_RE.sub(" ", strip_code(text))
    out: list[str] = []
    for m in _TAG_RE.finditer(stripped):
        tag = m.group(1).rstrip("/-")
        if tag and tag not in out:
            out.append(tag)
    return out
