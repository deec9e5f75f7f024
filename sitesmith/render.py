from __future__ import annotations

import shutil
import sys
from pathlib import Path

import jinja2
import markdown
import sass

from .content import SiteError, parse_front_matter
from .utils import mkdirp

MD_EXTENSIONS = ["fenced_code", "tables", "codehilite"]


class RenderError(SiteError):
    pass


def render_template_page(content: str) -> dict:
    # Standalone pass, the site context is only available to the layout.
    template = jinja2.Environment(keep_trailing_newline=True).from_string(content)
    return {"main": template.render()}


def render_markdown_page(content: str) -> dict:
    meta, body = parse_front_matter(content)
    md = markdown.Markdown(extensions=MD_EXTENSIONS)
    return {**meta, "main": md.convert(body)}


def render_scss_page(content: str) -> dict:
    return {"main": sass.compile(string=content), "ext": ".css"}


def render_sass_page(content: str) -> dict:
    return {"main": sass.compile(string=content, indented=True), "ext": ".css"}


RENDERERS = {
    ".ejs": render_template_page,
    ".html": render_template_page,
    ".htm": render_template_page,
    ".jinja": render_template_page,
    ".j2": render_template_page,
    ".md": render_markdown_page,
    ".markdown": render_markdown_page,
    ".scss": render_scss_page,
    ".sass": render_sass_page,
}


def render_page(path: Path) -> dict:
    """Render one content file into a page record.

    Files with an unknown suffix are not read and yield an empty record.
    """
    renderer = RENDERERS.get(path.suffix)
    if renderer is None:
        return {}
    print(f"renderPage: {path}")
    content = path.read_text(encoding="utf-8")
    try:
        return renderer(content)
    except (SiteError, sass.CompileError, jinja2.TemplateError) as exc:
        raise RenderError(f"Failed to render {path}: {exc}") from exc


def write_text(path: Path, text: str) -> None:
    mkdirp(path.parent)
    path.write_text(text, encoding="utf-8")


def copy_static(static_dir: Path, output_dir: Path) -> None:
    if not static_dir.is_dir():
        print(f"Static directory not found: {static_dir}", file=sys.stderr)
        return
    shutil.copytree(static_dir, output_dir, dirs_exist_ok=True)
