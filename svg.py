import copy
import logging
import re
from pathlib import Path
from typing import Tuple

from lxml import etree

from utils import IconSourceError

SVG_NS = "http://www.w3.org/2000/svg"
LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(px)?\s*$")

# Strict: no DTD loading, entity expansion or network access.
PARSER = etree.XMLParser(
    resolve_entities=False,
    load_dtd=False,
    no_network=True,
    remove_comments=True,
    remove_pis=True,
)


def parse_svg(content: bytes, path: Path = None) -> etree._Element:
    """Parse SVG bytes and return the `svg` element.

    Raises lxml.etree.XMLSyntaxError on malformed XML.
    """
    root = etree.fromstring(content, PARSER)
    if etree.QName(root).localname == "svg":
        return root

    for elem in root.iter():
        if isinstance(elem.tag, str) and etree.QName(elem).localname == "svg":
            return elem

    raise IconSourceError(f"{path}: no <svg> element found")


def get_icon_id(path: Path) -> str:
    name = Path(path).name
    return name[: -len(".svg")] if name.endswith(".svg") else name


def _serialize(elem: etree._Element) -> str:
    # Detached copy without the SVG default namespace, so no xmlns is emitted.
    elem = copy.deepcopy(elem)
    elem.tail = None
    for e in elem.iter():
        if isinstance(e.tag, str) and etree.QName(e).namespace == SVG_NS:
            e.tag = etree.QName(e).localname
    etree.cleanup_namespaces(elem)
    return etree.tostring(elem, encoding="unicode")


def svg_to_fragment(path: Path, content: bytes) -> str:
    """Turn one icon SVG into a `<g id="...">` group for the iconset.

    Fill colours come from the consumer's CSS, so `fill` is removed from the
    direct children of the `svg` element.
    """
    svg = parse_svg(content, path)

    children = [c for c in svg.iterchildren() if isinstance(c.tag, str)]
    for child in children:
        if "fill" in child.attrib:
            del child.attrib["fill"]

    body = "".join(_serialize(child) for child in children)
    icon_id = get_icon_id(path)
    logging.debug("Transformed %s (%d elements)", icon_id, len(children))
    return f'<g id="{icon_id}">{body}</g>'


def _parse_length(value: str) -> float:
    m = LENGTH_RE.match(value or "")
    if not m:
        raise ValueError(f"Unsupported SVG length: {value!r}")
    return float(m.group(1))


def get_viewbox(svg: etree._Element, path: Path = None) -> Tuple[float, float, float, float]:
    """Return (min_x, min_y, width, height) of an icon.

    Falls back to the root width/height when there is no viewBox.
    """
    viewBox = svg.get("viewBox")
    if viewBox:
        parts = viewBox.replace(",", " ").split()
        if len(parts) == 4:
            min_x, min_y, width, height = (float(p) for p in parts)
            if width > 0 and height > 0:
                return min_x, min_y, width, height
        logging.warning(f"{path}: ignoring unusable viewBox {viewBox!r}")

    width = svg.get("width")
    height = svg.get("height")
    if not (width and height):
        raise IconSourceError(f"{path}: Neither viewBox nor size attributes found")
    try:
        return 0.0, 0.0, _parse_length(width), _parse_length(height)
    except ValueError:
        raise IconSourceError(
            f"{path}: Could not parse width/height ({width}, {height})"
        ) from None
