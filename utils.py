from dataclasses import dataclass
import functools
import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from pyuca import Collator


COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[32m",  # green
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
COLOR_RESET = "\033[0m"
HEX_CODE_RE = re.compile(r"^[0-9a-fA-F]{1,6}\Z")


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logging():
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(levelname)s %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.INFO)


class IconBuildError(Exception):
    """Base class for failures that abort a build task."""


class IconSourceError(IconBuildError):
    pass


class IconDataError(IconBuildError):
    pass


class GlyphMetadataError(IconBuildError):
    """A glyph has no record in the icon metadata file."""

    def __init__(self, name: str):
        super().__init__(f"No metadata record for icon '{name}'")
        self.name = name


@dataclass(frozen=True)
class IconData:
    name: str
    code: str
    categories: Tuple[str, ...] = ()
    meta: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise IconDataError(f"Icon name must not be empty (code={self.code})")
        if not isinstance(self.code, str) or not HEX_CODE_RE.match(self.code):
            raise IconDataError(
                f"Icon {self.name} has a non-hexadecimal code: {self.code!r}"
            )
        if int(self.code, 16) > 0x10FFFF:
            raise IconDataError(
                f"Icon {self.name} has a code outside the Unicode range: {self.code!r}"
            )

    @property
    def codepoint(self) -> int:
        return int(self.code, 16)


def _string_list(entry, key: str, path: Path, idx: int) -> Tuple[str, ...]:
    value = entry.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise IconDataError(
            f"{path}: icon record #{idx} has a malformed {key}: {value!r}"
        )
    return tuple(value)


def load_icon_data(path: Path) -> List[IconData]:
    """Read the icon metadata JSON array, keeping file order.

    Each element must carry `name` and `code`; `categories` and `meta` default
    to empty lists.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise IconDataError(f"{path}: expected a JSON array of icons")

    icons = []
    for idx, entry in enumerate(raw):
        try:
            icons.append(
                IconData(
                    name=entry["name"],
                    code=entry["code"],
                    categories=_string_list(entry, "categories", path, idx),
                    meta=_string_list(entry, "meta", path, idx),
                )
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise IconDataError(f"{path}: malformed icon record #{idx}: {e!r}") from e

    logging.debug("Loaded %d icon records from %s", len(icons), path)
    return icons


def find_icon_data(icons: Iterable[IconData], name: str):
    """Exact-name lookup. Returns None on a miss."""
    for icon in icons:
        if icon.name == name:
            return icon
    return None


def get_svg_name(name: str) -> str:
    return name if name.endswith(".svg") else f"{name}.svg"


def select_icon_files(names: Sequence[str], source_dir: Path) -> List[Path]:
    """Resolve icon base names to SVG files in source_dir, keeping list order."""
    files = []
    for name in names:
        path = source_dir / get_svg_name(name)
        if not path.is_file():
            raise FileNotFoundError(f"Icon '{name}' has no source file at {path}")
        files.append(path)
    return files


@functools.lru_cache(maxsize=None)
def _collator() -> Collator:
    # DUCET root collation, which en-US uses unmodified.
    return Collator()


def compare_icon_files(file1: str, file2: str) -> int:
    """Compare two icon file names the same way on every platform.

    Hyphens become `~` before collating, so `eye.svg` sorts before
    `eye-disabled.svg`. Order of appearance decides default codepoints and
    affects build diffs.
    """
    key1 = _collator().sort_key(file1.replace("-", "~"))
    key2 = _collator().sort_key(file2.replace("-", "~"))
    return (key1 > key2) - (key1 < key2)


def sort_icon_files(files: Iterable[Path], source_dir: Path = None) -> List[Path]:
    def relative(path: Path) -> str:
        if source_dir is not None:
            return path.relative_to(source_dir).as_posix()
        return path.name

    cmp = functools.cmp_to_key(compare_icon_files)
    return sorted(files, key=lambda p: cmp(relative(p)))
