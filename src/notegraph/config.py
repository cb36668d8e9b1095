from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .graph.extract import DEFAULT_STATUS_MARKERS


load_dotenv()


def _csv(raw: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class Settings:
    # Root/index notes excluded from orphan detection when no --root is given.
    default_roots: tuple[str, ...] = _csv(os.getenv("NOTEGRAPH_ROOTS", ""))

    # Report output: "json" or "table".
    report_format: str = os.getenv("NOTEGRAPH_FORMAT", "json")

    # Reader threads used when loading a vault from disk.
    workers: int = int(os.getenv("NOTEGRAPH_WORKERS", "1"))

    # Directory names skipped while walking (hidden dirs are always skipped).
    ignore_dirs: tuple[str, ...] = _csv(os.getenv("NOTEGRAPH_IGNORE_DIRS", "node_modules"))

    # Status markers recognised right after a link, e.g. "[[Closures]] ✅".
    status_markers: tuple[str, ...] = tuple(
        os.getenv("NOTEGRAPH_STATUS_MARKERS", " ".join(DEFAULT_STATUS_MARKERS)).split()
    )

    log_level: str = os.getenv("NOTEGRAPH_LOG_LEVEL", "WARNING")
