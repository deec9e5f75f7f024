from pathlib import Path

import pytest

from helpers import write
from sitesmith.render import RenderError, copy_static, render_page

SOURCES = {
    "page.ejs": "<p>hi</p>",
    "page.html": "<p>{{ 1 + 1 }}</p>",
    "page.htm": "<p>htm</p>",
    "page.jinja": "{% for i in range(3) %}{{ i }}{% endfor %}",
    "page.j2": "<p>j2</p>",
    "page.md": "# Title\n",
    "page.markdown": "*em*\n",
    "style.scss": "$c: red;\na { color: $c; }\n",
    "style.sass": "$c: red\na\n  color: $c\n",
}


@pytest.mark.parametrize("name", sorted(SOURCES))
def test_supported_extensions_produce_main(tmp_path: Path, name: str) -> None:
    page = render_page(write(tmp_path / name, SOURCES[name]))

    assert "main" in page
    assert page["main"]


def test_unrecognized_extension_yields_empty_record(tmp_path: Path) -> None:
    image = tmp_path / "logo.png"
    image.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe")

    assert render_page(image) == {}


def test_extension_match_is_case_sensitive(tmp_path: Path) -> None:
    assert render_page(write(tmp_path / "README.MD", "# Hi\n")) == {}


def test_template_page_renders_without_context(tmp_path: Path) -> None:
    page = render_page(write(tmp_path / "index.html", "<p>{{ 1 + 1 }}{{ page }}</p>"))

    assert page == {"main": "<p>2</p>"}


def test_markdown_page_merges_front_matter(tmp_path: Path) -> None:
    source = write(tmp_path / "post.md", "---\ntitle: A\nlayout: custom\n---\n# Heading\n")

    page = render_page(source)

    assert page["title"] == "A"
    assert page["layout"] == "custom"
    assert "<h1>Heading</h1>" in page["main"]
    assert "ext" not in page


def test_scss_page_compiles_to_css(tmp_path: Path) -> None:
    page = render_page(write(tmp_path / "style.scss", SOURCES["style.scss"]))

    assert page["ext"] == ".css"
    assert "color: red" in page["main"]
    assert "$c" not in page["main"]


def test_sass_page_uses_indented_syntax(tmp_path: Path) -> None:
    page = render_page(write(tmp_path / "style.sass", SOURCES["style.sass"]))

    assert page["ext"] == ".css"
    assert "color: red" in page["main"]


def test_malformed_front_matter_raises_render_error(tmp_path: Path) -> None:
    source = write(tmp_path / "bad.md", "---\ntitle: [oops\n---\nbody\n")

    with pytest.raises(RenderError, match="bad.md"):
        render_page(source)


def test_invalid_scss_raises_render_error(tmp_path: Path) -> None:
    with pytest.raises(RenderError):
        render_page(write(tmp_path / "bad.scss", "a { color: $missing; }"))


def test_invalid_template_raises_render_error(tmp_path: Path) -> None:
    with pytest.raises(RenderError):
        render_page(write(tmp_path / "bad.html", "{% if %}"))


def test_copy_static_overwrites_and_keeps_other_files(tmp_path: Path) -> None:
    static_dir = tmp_path / "static"
    out_dir = tmp_path / "out"
    write(static_dir / "css" / "site.css", "new")
    write(out_dir / "css" / "site.css", "old")
    write(out_dir / "css" / "extra.css", "keep")

    copy_static(static_dir, out_dir)

    assert (out_dir / "css" / "site.css").read_text(encoding="utf-8") == "new"
    assert (out_dir / "css" / "extra.css").read_text(encoding="utf-8") == "keep"


def test_copy_static_skips_missing_directory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    copy_static(tmp_path / "missing", tmp_path / "out")

    assert "Static directory not found" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_ejs_page_is_a_template_page(tmp_path: Path) -> None:
    assert render_page(write(tmp_path / "x.ejs", "<p>hi</p>")) == {"main": "<p>hi</p>"}
