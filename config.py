"""Build inputs, outputs and the icon sub-selection.

Which icons ship is decided here, not in the pipelines: edit
ICONSET_SELECTION to change the product.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from utils import get_svg_name

ASSETS = Path("assets/")
SOURCE_SVG = ASSETS / "svg"
ICON_DATA_JSON = ASSETS / "vaadin-font-icons.json"
ICONSET_HTML = Path("iconset.html")
FONT_DIR = Path(".")


@dataclass(frozen=True)
class IconSelection:
    version: int
    names: Tuple[str, ...]

    def __post_init__(self):
        files = [get_svg_name(name) for name in self.names]
        if len(set(files)) != len(files):
            raise ValueError(f"Icon selection v{self.version} lists an icon twice")

    def __iter__(self):
        return iter(self.names)

    def __len__(self):
        return len(self.names)


ICONSET_SELECTION = IconSelection(
    version=1,
    names=(
        "check-circle",
        "play-circle-o",
        "quote-right",
    ),
)


@dataclass(frozen=True)
class FontOptions:
    name: str = "vaadin-icons"
    formats: Tuple[str, ...] = ("woff", "woff2")
    font_height: int = 1000
    ascent: int = 850
    descent: int = 150
    fixed_width: bool = True
    normalize: bool = True
    start_codepoint: int = 0xEA01


@dataclass(frozen=True)
class BuildConfig:
    source_dir: Path = SOURCE_SVG
    icon_data: Path = ICON_DATA_JSON
    iconset_output: Path = ICONSET_HTML
    font_dir: Path = FONT_DIR
    font: FontOptions = field(default_factory=FontOptions)

    def font_path(self, fmt: str) -> Path:
        return self.font_dir / f"{self.font.name}.{fmt}"
