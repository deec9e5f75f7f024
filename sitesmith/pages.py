from __future__ import annotations

import jinja2

from .content import created_at, date_from_text, parse_list
from .render import RenderError, write_text
from .utils import join_url

HTML_EXT = ".html"


def resolve_output(page: dict, config: dict) -> dict:
    file = page["file"]
    rel_dir = file.parent.relative_to(config["content_dir"])
    out_dir = config["out_dir"] / rel_dir
    out_file = out_dir / f"{file.stem}{page.get('ext') or HTML_EXT}"
    return {**page, "out_dir": out_dir, "out_file": out_file}


def is_html(page: dict) -> bool:
    return page["out_file"].suffix == HTML_EXT


def resolve_date(page: dict, config: dict) -> dict:
    if page.get("date"):
        return page
    file = page["file"]
    rel_dir = file.parent.relative_to(config["content_dir"]).as_posix()
    date = date_from_text(file.stem) or date_from_text(rel_dir) or created_at(file)
    return {**page, "date": date}


def resolve_layout(page: dict, config: dict) -> dict:
    if page.get("layout"):
        return page
    file = page["file"]
    posts_dir = config.get("posts_dir")
    if posts_dir and file.parent.name == posts_dir and file.stem != "index":
        return {**page, "layout": "post"}
    return {**page, "layout": "page"}


def resolve_tags(page: dict, config: dict) -> dict:
    tags = page.get("tags")
    if not tags:
        return page
    if isinstance(tags, str):
        return {**page, "tags": parse_list(tags)}
    if not isinstance(tags, (list, tuple, set)):
        return {**page, "tags": [str(tags)]}
    return {**page, "tags": [str(tag) for tag in tags]}


def resolve_url(page: dict, config: dict) -> dict:
    if page.get("url"):
        return page
    out_root = config["out_dir"]
    target = page["out_dir"] if page["file"].stem == "index" else page["out_file"]
    rel = "" if target == out_root else target.relative_to(out_root).as_posix()
    return {**page, "path": f"/{rel}", "url": join_url(config["site"]["url"], rel)}


# Order matters, later steps read fields set by earlier ones.
RESOLVERS = (resolve_date, resolve_layout, resolve_tags, resolve_url)


def infer_metadata(page: dict, config: dict) -> dict:
    for resolver in RESOLVERS:
        page = resolver(page, config)
    return page


def build_tag_index(pages: list[dict]) -> dict[str, list[dict]]:
    tags: dict[str, list[dict]] = {}
    for page in pages:
        for tag in page.get("tags") or []:
            tags.setdefault(tag, []).append(page)
    return tags


def aggregate_site(config: dict, pages: list[dict]) -> dict:
    pages = list(pages)
    return {
        **config,
        "pages": pages,
        "posts": [page for page in pages if page.get("layout") == "post"],
        "tags": build_tag_index(pages),
    }


def compose_pages(context: dict) -> None:
    """Render every page through the shared layout and write it out."""
    env = jinja2.Environment(loader=jinja2.FileSystemLoader(str(context["layout_dir"])))
    layout = context["layout"]
    try:
        template = env.get_template(layout)
    except jinja2.TemplateError as exc:
        raise RenderError(f"Failed to load layout {layout}: {exc}") from exc

    for page in context["pages"]:
        print(f"{page['file']} + {page['layout']} -> {page['out_file']}")
        try:
            html = template.render({**context, "page": page})
        except jinja2.TemplateError as exc:
            raise RenderError(f"Failed to render {page['file']} with {layout}: {exc}") from exc
        write_text(page["out_file"], html)
