from __future__ import annotations

import os
import sys
from pathlib import Path


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def mkdirp(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"Failed to create directory {path}: {exc}", file=sys.stderr)


def collect_files(root: Path) -> list[Path]:
    """List every file below *root*, depth-first, entries in name order."""
    files: list[Path] = []
    with os.scandir(root) as entries:
        children = sorted(entries, key=lambda entry: entry.name)
    for entry in children:
        child = root / entry.name
        if entry.is_dir():
            files.extend(collect_files(child))
        else:
            files.append(child)
    return files
