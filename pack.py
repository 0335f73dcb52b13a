#!python3
"""Pack the selected icon SVGs into an <iron-iconset-svg> document (iconset.html)."""

import logging
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from config import BuildConfig, IconSelection
from svg import svg_to_fragment
from utils import select_icon_files, sort_icon_files

ICONSET_TEMPLATE = """<!-- NOTICE: Generated with 'python build.py icons' -->
<!--
@license
Copyright (c) 2019 Vaadin Ltd.
This program is available under Apache License Version 2.0, available at https://vaadin.com/license/
-->

<link rel="import" href="../iron-iconset-svg/iron-iconset-svg.html">

<iron-iconset-svg name="vaadin" size="16">
<svg><defs>
{fragments}
</defs></svg>
</iron-iconset-svg>
"""


def render_iconset(fragments: Iterable[str]) -> str:
    return ICONSET_TEMPLATE.format(fragments="".join(fragments))


def build_iconset(selection: IconSelection, config: BuildConfig) -> Path:
    svgs = sort_icon_files(
        select_icon_files(selection, config.source_dir), config.source_dir
    )

    fragments = []
    for svg_path in tqdm(svgs, desc="Processing SVGs", unit=" files"):
        fragments.append(svg_to_fragment(svg_path, svg_path.read_bytes()))

    document = render_iconset(fragments)

    output = config.iconset_output
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8", newline="\n") as f:
        f.write(document)
    logging.info(f"Wrote {len(fragments)} icons to {output}")
    return output
