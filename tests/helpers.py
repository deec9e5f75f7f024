from __future__ import annotations

from pathlib import Path

LAYOUT = "<title>{{ page.title }}</title>\n<main>{{ page.main }}</main>\n"


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
