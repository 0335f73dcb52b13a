#!python3
"""Build the Vaadin icons sub-selection: iconset document, icon font, docs table."""

import argparse
import json
import logging
import sys

from lxml import etree

from config import ICONSET_SELECTION, BuildConfig
from docs import write_docs_table
from font import build_iconfont
from pack import build_iconset
from utils import IconBuildError, load_icon_data, setup_logging


def task_icons(config: BuildConfig):
    build_iconset(ICONSET_SELECTION, config)


def task_iconfont(config: BuildConfig):
    icons = load_icon_data(config.icon_data)
    build_iconfont(ICONSET_SELECTION, icons, config)


def task_docs_table(config: BuildConfig):
    write_docs_table(load_icon_data(config.icon_data), sys.stdout)


TASKS = {
    "icons": (task_icons, "Build the iron-iconset-svg document"),
    "iconfont": (task_iconfont, "Build the WOFF/WOFF2 icon font"),
    "docs:table": (task_docs_table, "Print an AsciiDoc table of all icons"),
}


def main(args, config: BuildConfig = None) -> int:
    config = config or BuildConfig()
    task, _ = TASKS[args.task]
    try:
        task(config)
    except (IconBuildError, FileNotFoundError, etree.ParseError, json.JSONDecodeError) as e:
        logging.error(f"Task '{args.task}' failed: {e}")
        return 1
    return 0


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a Vaadin icons sub-selection iconset and iconfont."
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="task", metavar="TASK", required=True)
    for name, (_, help_text) in TASKS.items():
        subparsers.add_parser(name, help=help_text)
    return parser


def cli(argv=None) -> int:
    args = get_parser().parse_args(argv)

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    return main(args)


if __name__ == "__main__":
    sys.exit(cli())
