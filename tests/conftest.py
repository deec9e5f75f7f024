from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers import LAYOUT, write
from sitesmith.config import init_config


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    write(tmp_path / "layout" / "default.html", LAYOUT)
    (tmp_path / "content").mkdir()
    (tmp_path / "static").mkdir()
    config = {"site": {"url": "https://example.com", "title": "Example"}}
    write(tmp_path / "config.json", json.dumps(config))
    return tmp_path


@pytest.fixture
def config(site_root: Path) -> dict:
    return init_config(site_root / "config.json")
