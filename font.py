"""Build the icon web fonts (WOFF, WOFF2) from the selected icon SVGs.

Codepoints are pinned from the icon metadata file, so regenerating the font
never moves an icon, whatever order the files are processed in.
"""

import io
import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from fontTools.fontBuilder import FontBuilder
from fontTools.misc.roundTools import otRound
from fontTools.pens.boundsPen import ControlBoundsPen
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.teePen import TeePen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib import SVGPath
from fontTools.ttLib import TTFont
from lxml import etree
from tqdm import tqdm

from config import BuildConfig, FontOptions, IconSelection
from svg import get_icon_id, get_viewbox, parse_svg
from utils import (
    GlyphMetadataError,
    IconData,
    find_icon_data,
    select_icon_files,
    sort_icon_files,
)

# uE001-name.svg or uE001,uE002-name.svg
UNICODE_PREFIX_RE = re.compile(r"^((?:u[0-9a-f]{4,6},?)+)-(.+)$", re.IGNORECASE)
FLAVORS = {"ttf": None, "woff": "woff", "woff2": "woff2"}


@dataclass
class GlyphMetadata:
    name: str
    path: Path
    unicode: List[str] = field(default_factory=list)


@dataclass
class Glyph:
    metadata: GlyphMetadata
    outline: object
    width: float
    xmin: int

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def codepoint(self) -> int:
        return ord(self.metadata.unicode[0])


class DefaultMetadataProvider:
    """Derive a glyph name and codepoints from an icon file name.

    A `uXXXX-` prefix sets the codepoints explicitly; otherwise codepoints are
    handed out in call order starting at `start_codepoint`.
    """

    def __init__(self, start_codepoint: int = 0xEA01):
        self.next_codepoint = start_codepoint
        self.used = set()

    def __call__(self, path: Path) -> GlyphMetadata:
        stem = get_icon_id(path)
        m = UNICODE_PREFIX_RE.match(stem)
        if m:
            codepoints = [int(u[1:], 16) for u in m.group(1).split(",") if u]
            self.used.update(codepoints)
            return GlyphMetadata(m.group(2), path, [chr(cp) for cp in codepoints])

        while self.next_codepoint in self.used:
            self.next_codepoint += 1
        codepoint = self.next_codepoint
        self.used.add(codepoint)
        self.next_codepoint += 1
        return GlyphMetadata(stem, path, [chr(codepoint)])


def pin_codepoint(metadata: GlyphMetadata, icons: Sequence[IconData]) -> GlyphMetadata:
    icon = find_icon_data(icons, metadata.name)
    if icon is None:
        raise GlyphMetadataError(metadata.name)
    return replace(metadata, unicode=[chr(icon.codepoint)])


class GlyphEvents:
    """Per-glyph completion notifications for the font pipeline."""

    def __init__(self, observers: Iterable[Callable[[Glyph], None]] = ()):
        self.observers = list(observers)

    def subscribe(self, observer: Callable[[Glyph], None]):
        self.observers.append(observer)
        return observer

    def publish(self, glyph: Glyph):
        for observer in self.observers:
            observer(glyph)


def log_glyph(glyph: Glyph):
    logging.info("%s \\%x", glyph.name, glyph.codepoint)


def _glyph_transform(
    viewbox: Tuple[float, float, float, float], scale: float, options: FontOptions
):
    # SVG y grows downwards; put the viewBox top on the ascent line.
    min_x, min_y, _, height = viewbox
    return (
        scale,
        0,
        0,
        -scale,
        -min_x * scale,
        (min_y + height) * scale - options.descent,
    )


def draw_glyph(metadata: GlyphMetadata, scale: Optional[float], options: FontOptions) -> Glyph:
    """Convert one icon SVG into a quadratic TrueType outline.

    With scale=None the icon is normalised to the font height.
    """
    svg = parse_svg(metadata.path.read_bytes(), metadata.path)
    viewbox = get_viewbox(svg, metadata.path)
    if scale is None:
        scale = options.font_height / viewbox[3]

    tt_pen = TTGlyphPen(None)
    bounds_pen = ControlBoundsPen(None)
    pen = Cu2QuPen(TeePen(tt_pen, bounds_pen), max_err=1.0, reverse_direction=True)
    # Re-serialised without comments, which svgLib cannot walk.
    outline = SVGPath.fromstring(
        etree.tostring(svg), transform=_glyph_transform(viewbox, scale, options)
    )
    outline.draw(pen)

    xmin = otRound(bounds_pen.bounds[0]) if bounds_pen.bounds else 0
    return Glyph(metadata, tt_pen.glyph(), viewbox[2] * scale, xmin)


def _common_scale(paths: Sequence[Path], options: FontOptions) -> float:
    heights = [
        get_viewbox(parse_svg(p.read_bytes(), p), p)[3] for p in paths
    ]
    return options.font_height / max(heights)


def assemble_font(glyphs: Sequence[Glyph], options: FontOptions) -> TTFont:
    advances = {g.name: otRound(g.width) for g in glyphs}
    if options.fixed_width and advances:
        widest = max(advances.values())
        advances = {name: widest for name in advances}
    notdef_width = max(advances.values(), default=options.font_height)

    glyph_order = [".notdef"] + [g.name for g in glyphs]
    outlines = {".notdef": TTGlyphPen(None).glyph()}
    metrics = {".notdef": (notdef_width, 0)}
    cmap: Dict[int, str] = {}
    for g in glyphs:
        outlines[g.name] = g.outline
        metrics[g.name] = (advances[g.name], g.xmin)
        for char in g.metadata.unicode:
            cmap[ord(char)] = g.name

    fb = FontBuilder(options.font_height, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(outlines)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=options.ascent, descent=-options.descent)
    fb.setupOS2(
        sTypoAscender=options.ascent,
        sTypoDescender=-options.descent,
        sTypoLineGap=0,
        usWinAscent=options.ascent,
        usWinDescent=options.descent,
    )
    fb.setupNameTable(
        {
            "familyName": options.name,
            "styleName": "Regular",
            "uniqueFontIdentifier": f"{options.name}-Regular",
            "fullName": f"{options.name} Regular",
            "psName": f"{options.name}-Regular",
            "version": "1.0",
        }
    )
    fb.setupPost()
    fb.setupMaxp()
    return fb.font


def serialize_font(font: TTFont, formats: Sequence[str]) -> Dict[str, bytes]:
    buf = io.BytesIO()
    font.save(buf)
    ttf = buf.getvalue()

    binaries = {}
    for fmt in formats:
        if fmt not in FLAVORS:
            raise ValueError(f"Unsupported font format: {fmt}")
        web = TTFont(io.BytesIO(ttf))
        web.flavor = FLAVORS[fmt]
        out = io.BytesIO()
        web.save(out)
        binaries[fmt] = out.getvalue()
    return binaries


def build_iconfont(
    selection: IconSelection,
    icons: Sequence[IconData],
    config: BuildConfig,
    events: GlyphEvents = None,
) -> List[Path]:
    options = config.font
    svgs = sort_icon_files(
        select_icon_files(selection, config.source_dir), config.source_dir
    )

    # Resolve every codepoint before drawing or writing anything.
    provider = DefaultMetadataProvider(options.start_codepoint)
    metadata = [pin_codepoint(provider(p), icons) for p in svgs]

    scale = None if options.normalize else _common_scale(svgs, options)
    glyphs = [
        draw_glyph(m, scale, options)
        for m in tqdm(metadata, desc="Drawing glyphs", unit=" glyphs")
    ]

    binaries = serialize_font(assemble_font(glyphs, options), options.formats)

    written = []
    config.font_dir.mkdir(parents=True, exist_ok=True)
    for fmt, data in binaries.items():
        path = config.font_path(fmt)
        path.write_bytes(data)
        written.append(path)
        logging.info(f"Wrote {path} ({len(data):,} bytes)")

    if events is None:
        events = GlyphEvents([log_glyph])
    for glyph in glyphs:
        events.publish(glyph)
    return written
