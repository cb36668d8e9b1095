from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable


log = logging.getLogger(__name__)

SUPPORTED_EXTS = {".md"}


def relpath(path: Path, root: Path) -> str:
    return path.relative_to(root).as_posix()


def iter_markdown_files(root: Path, *, ignore_dirs: Iterable[str] = ()) -> Iterable[Path]:
    """Yield note files under ``root`` in a stable order.

    Hidden entries (".obsidian", ".trash", dotfiles) and ``ignore_dirs`` are
    skipped. Symlinks are never followed.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Vault directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    skip = set(ignore_dirs)
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith(".") and d not in skip)
        for name in sorted(filenames):
            if name.startswith("."):
                continue
            p = Path(dirpath) / name
            if p.suffix not in SUPPORTED_EXTS or p.is_symlink():
                continue
            yield p


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def read_vault(root: Path, *, workers: int = 1, ignore_dirs: Iterable[str] = ()) -> list[tuple[str, str]]:
    """Return ``(relative_path, contents)`` pairs for every note under ``root``.

    OSError from reading any file propagates; nothing partial is returned.
    """
    root = Path(root)
    paths = list(iter_markdown_files(root, ignore_dirs=ignore_dirs))
    workers = max(1, int(workers))
    log.debug("reading %d file(s) from %s with %d worker(s)", len(paths), root, workers)

    if workers == 1 or len(paths) < 2:
        texts = [_read(p) for p in paths]
    else:
        # map() keeps input order and re-raises the first worker exception.
        with ThreadPoolExecutor(max_workers=workers) as pool:
            texts = list(pool.map(_read, paths))

    return [(relpath(p, root), t) for p, t in zip(paths, texts)]
