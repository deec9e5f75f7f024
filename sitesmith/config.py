from __future__ import annotations

import json
import runpy
from pathlib import Path

import yaml

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_CONFIG = {
    "base_dir": ".",  # absolute or relative to the config file
    "out_dir": "out",  # absolute or relative to base_dir
    "static_dir": "static",  # absolute or relative to base_dir
    "content_dir": "content",  # absolute or relative to base_dir
    "layout_dir": "layout",  # absolute or relative to base_dir
    "layout": "default.html",  # template name inside layout_dir
    "posts_dir": "posts",  # directory name marking posts, empty to disable
    "site": {
        "url": "https://example.github.io",
        "title": "My Homepage",
        "description": "Notes and posts.",
        "image": "/banner.png",
    },
}
DIR_KEYS = ("out_dir", "static_dir", "content_dir", "layout_dir")


def _read_config(path: Path) -> object:
    suffix = path.suffix.lower()
    if suffix == ".py":
        return runpy.run_path(str(path)).get("config")
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        return toml.loads(text)
    if suffix in {".yml", ".yaml"}:
        return yaml.safe_load(text)
    return json.loads(text)


def load_config(path: Path) -> dict:
    """Read user overrides from a TOML, YAML, JSON or Python config file.

    Anything that goes wrong while loading yields an empty mapping so the
    defaults apply.
    """
    print(f"loadConfig: {path}")
    if not path.is_file():
        return {}
    try:
        data = _read_config(path)
    except (Exception, SystemExit):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def merge_config(overrides: dict) -> dict:
    config = {**DEFAULT_CONFIG, **overrides}
    site = overrides.get("site")
    config["site"] = {**DEFAULT_CONFIG["site"], **(site if isinstance(site, dict) else {})}
    return config


def init_config(config_file: str | Path | None = None) -> dict:
    config_path = (Path.cwd() / (config_file or DEFAULT_CONFIG_FILE)).resolve()
    config = merge_config(load_config(config_path))

    base_dir = (config_path.parent / config["base_dir"]).resolve()
    resolved = {key: (base_dir / str(config[key])).resolve() for key in DIR_KEYS}
    return {**config, "config_file": config_path, "base_dir": base_dir, **resolved}
