"""AsciiDoc table of every icon in the metadata file."""

import sys
from typing import Iterable, TextIO

from utils import IconData

TABLE_HEADER = [
    '[width="100%", options="header"]',
    "|======================",
    "| Icon | Name | Ligature | Unicode | Categories | Tags",
]
TABLE_FOOTER = ["|======================"]


def format_row(icon: IconData) -> str:
    categories = ", ".join(icon.categories)
    meta = ", ".join(icon.meta)
    return (
        f"| image:../assets/png/{icon.name}.png[] | [propertyname]#{icon.name}# "
        f"| {icon.name} | {icon.code} | {categories} | {meta}"
    )


def write_docs_table(icons: Iterable[IconData], stream: TextIO = None):
    stream = stream or sys.stdout
    lines = TABLE_HEADER + [format_row(icon) for icon in icons] + TABLE_FOOTER
    for line in lines:
        print(line, file=stream)
