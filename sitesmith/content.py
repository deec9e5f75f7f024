from __future__ import annotations

import datetime as dt
import re
from pathlib import Path

import yaml

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)
DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


class SiteError(Exception):
    pass


class FrontMatterError(SiteError, ValueError):
    pass


def slugify(text: str) -> str:
    text = text.lower()
    text = re.sub(r"[^\w]+", "-", text, flags=re.UNICODE)
    text = text.strip("-_").replace("_", "-")
    return text or "post"


def parse_list(value: str) -> list[str]:
    value = value.strip()
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        items = [item.strip().strip("'\"") for item in inner.split(",")]
    else:
        items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def parse_front_matter(text: str) -> tuple[dict, str]:
    """Split a leading YAML block delimited by ``---`` lines from the body.

    A document without the block yields ``({}, text)``. Malformed YAML, or a
    block that is not a mapping, raises :class:`FrontMatterError`.
    """
    clean_text = text.lstrip("\ufeff")
    match = FRONT_MATTER_RE.match(clean_text)
    if match is None:
        return {}, clean_text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid front matter: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(f"Front matter must be a mapping, got {type(data).__name__}")

    meta = {str(key): value for key, value in data.items()}
    return meta, clean_text[match.end() :]


def date_from_text(text: str) -> dt.datetime | None:
    match = DATE_RE.search(text)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return dt.datetime(year, month, day)
    except ValueError:
        return None


def created_at(path: Path) -> dt.datetime:
    return dt.datetime.fromtimestamp(path.stat().st_ctime)
