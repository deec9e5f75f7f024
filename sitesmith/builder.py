from __future__ import annotations

import queue
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .pages import aggregate_site, compose_pages, infer_metadata, is_html, resolve_output
from .render import copy_static, render_page, write_text
from .utils import collect_files, mkdirp

# Read-only notifications, a build reading the content tree emits these.
IGNORED_EVENTS = {"opened", "closed_no_write"}


def clean_output(out_dir: Path) -> None:
    print(f"clean out: {out_dir}")
    mkdirp(out_dir)


def copy_assets(static_dir: Path, out_dir: Path) -> None:
    print(f"copy assets: {static_dir} -> {out_dir}")
    copy_static(static_dir, out_dir)


def render_pages(config: dict) -> dict:
    content_dir = config["content_dir"]
    print(f"renderPages: {content_dir} -> {config['out_dir']}")

    pages = []
    for path in collect_files(content_dir):
        record = render_page(path)
        if "main" not in record:
            continue
        page = resolve_output({**record, "file": path}, config)
        if not is_html(page):
            print(f"non html file: {page['out_file']}")
            write_text(page["out_file"], page["main"])
            continue
        pages.append(infer_metadata(page, config))

    context = aggregate_site(config, pages)
    compose_pages(context)
    return context


def build(config: dict) -> dict:
    """Run one full build cycle and return the site context it produced."""
    print(f"build: {config['base_dir']} -> {config['out_dir']}")
    clean_output(config["out_dir"])
    copy_assets(config["static_dir"], config["out_dir"])
    return render_pages(config)


class ChangeHandler(FileSystemEventHandler):
    def __init__(self, events: queue.Queue):
        self.events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in IGNORED_EVENTS:
            return
        self.events.put(event)


def watch_changes(directory: Path) -> Iterator[FileSystemEvent]:
    """Yield filesystem changes below *directory*, blocking until one occurs.

    The observer is running once this returns, so changes made before the
    first pull are not lost.
    """
    events: queue.Queue = queue.Queue()
    observer = Observer()
    observer.schedule(ChangeHandler(events), str(directory), recursive=True)
    observer.start()
    return _pull_events(events, observer)


def _pull_events(events: queue.Queue, observer: Observer) -> Iterator[FileSystemEvent]:
    try:
        while True:
            yield events.get()
    finally:
        observer.stop()
        observer.join()


def watch(config: dict, events: Iterable[FileSystemEvent] | None = None, keep_going: bool = False) -> None:
    """Build once, then rebuild the whole site for every change event.

    A failed rebuild ends the loop unless *keep_going* is set, in which case
    the error is reported and the next event is awaited.
    """
    build(config)
    content_dir = config["content_dir"]
    print(f"watch: {content_dir}")
    if events is None:
        events = watch_changes(content_dir)
    for event in events:
        print(f"\twatch: {event.event_type} {event.src_path}")
        try:
            build(config)
        except Exception as exc:
            if not keep_going:
                raise
            print(f"Rebuild failed: {exc}", file=sys.stderr)
