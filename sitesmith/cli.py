from __future__ import annotations

import argparse
import datetime as dt
import sys
import time
from pathlib import Path

from .builder import build, watch
from .config import DEFAULT_CONFIG_FILE, init_config
from .content import slugify
from .render import write_text

POST_TEMPLATE = """---
title: "{title}"
date: {date}
tags: []
---

"""


def new_post(config: dict, title: str, today: dt.date | None = None) -> Path:
    today = today or dt.date.today()
    date_str = today.isoformat()
    posts_dir = config["content_dir"] / (config.get("posts_dir") or "")
    path = posts_dir / f"{date_str}-{slugify(title)}.md"
    if path.exists():
        raise FileExistsError(f"Post already exists: {path}")
    escaped = title.replace("\\", "\\\\").replace('"', '\\"')
    write_text(path, POST_TEMPLATE.format(title=escaped, date=date_str))
    return path


def run_build(args: argparse.Namespace) -> int:
    config = init_config(args.config_file)
    start = time.perf_counter()
    build(config)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {config['out_dir']}")
    return 0


def run_watch(args: argparse.Namespace) -> int:
    config = init_config(args.config_file)
    try:
        watch(config, keep_going=args.keep_going)
    except KeyboardInterrupt:
        print("\nStopping file watcher...")
    return 0


def run_new(args: argparse.Namespace) -> int:
    config = init_config(args.config_file)
    path = new_post(config, args.title)
    print(f"Created post: {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    config_help = "Path to site config file (TOML/YAML/JSON/Python)."
    # Accepted before or after the subcommand; the subcommand copy only
    # overrides when given.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-c", "--config-file", default=argparse.SUPPRESS, help=config_help)

    parser = argparse.ArgumentParser(prog="sitesmith", description="Static site generator.")
    parser.add_argument("-c", "--config-file", default=DEFAULT_CONFIG_FILE, help=config_help)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_cmd = subparsers.add_parser("build", parents=[common], help="Build the site once.")
    build_cmd.set_defaults(func=run_build)

    watch_cmd = subparsers.add_parser("watch", parents=[common], help="Build, then rebuild on every change.")
    watch_cmd.add_argument(
        "--keep-going",
        action="store_true",
        help="Report a failed rebuild and keep watching instead of exiting.",
    )
    watch_cmd.set_defaults(func=run_watch)

    new_cmd = subparsers.add_parser("new", parents=[common], help="Scaffold a new post.")
    new_cmd.add_argument("--title", required=True, help="Title of the new post.")
    new_cmd.set_defaults(func=run_new)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
