"""
Shared pytest fixtures for the iconset build tests.
"""
import json
import os
import sys

import pytest

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from config import BuildConfig, IconSelection  # noqa: E402


SVG_TEMPLATE = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    "<!-- Generator: test -->\n"
    '<svg version="1.1" xmlns="http://www.w3.org/2000/svg" width="16" height="16" '
    'viewBox="0 0 16 16">\n'
    "{body}\n"
    "</svg>\n"
)

SAMPLE_ICONS = {
    "check-circle": '<path fill="#444444" d="M0 0h16v16h-16z"/>',
    "eye": '<path fill="#444444" d="M2 4h12v8h-12z"/>',
    "eye-disabled": '<path fill="#444444" d="M1 1h14v14h-14z"/>\n<circle cx="8" cy="8" r="2"/>',
    "quote-right": '<path fill="#444444" d="M9 2v7h4v-7z"/>',
}

SAMPLE_DATA = [
    {"name": "check-circle", "code": "e900", "categories": ["system"], "meta": ["status"]},
    {"name": "eye", "code": "e901", "categories": ["system"], "meta": ["view"]},
    {"name": "eye-disabled", "code": "e902", "categories": ["system"], "meta": ["hide", "hidden"]},
    {"name": "quote-right", "code": "e904", "categories": ["editor", "text"], "meta": []},
]


def write_svg(directory, name, body):
    path = directory / f"{name}.svg"
    path.write_text(SVG_TEMPLATE.format(body=body), encoding="utf-8")
    return path


@pytest.fixture
def source_dir(tmp_path):
    directory = tmp_path / "svg"
    directory.mkdir()
    for name, body in SAMPLE_ICONS.items():
        write_svg(directory, name, body)
    return directory


@pytest.fixture
def icon_data_path(tmp_path):
    path = tmp_path / "icons.json"
    path.write_text(json.dumps(SAMPLE_DATA), encoding="utf-8")
    return path


@pytest.fixture
def build_config(tmp_path, source_dir, icon_data_path):
    return BuildConfig(
        source_dir=source_dir,
        icon_data=icon_data_path,
        iconset_output=tmp_path / "out" / "iconset.html",
        font_dir=tmp_path / "out",
    )


@pytest.fixture
def selection():
    return IconSelection(version=1, names=("quote-right", "eye-disabled", "eye", "check-circle"))
