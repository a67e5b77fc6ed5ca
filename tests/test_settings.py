from pathlib import Path

import pytest

from pdfpack.assembler import PackOptions
from pdfpack.file_manager import detect_kind, item_from_path, items_from_paths
from pdfpack.geometry import fit_centered
from pdfpack.models import ItemKind
from pdfpack.settings import (
    load_settings,
    options_from_settings,
    save_settings,
    settings_from_options,
)


def test_missing_settings_file_is_empty(tmp_path):
    assert load_settings(tmp_path / "absent.json") == {}


def test_broken_settings_file_is_empty(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    assert load_settings(path) == {}


def test_settings_round_trip(tmp_path):
    options = PackOptions(compress=False, metadata_enabled=True, pdf_title="T")
    path = tmp_path / "nested" / "settings.json"

    save_settings(path, settings_from_options(options))

    assert options_from_settings(load_settings(path)) == options


def test_unknown_settings_are_ignored():
    options = options_from_settings({"pdf_author": "A", "theme": "dark"})

    assert options.pdf_author == "A"
    assert options.compress is True


def test_detect_kind_by_extension():
    assert detect_kind("a.PDF") is ItemKind.PDF
    assert detect_kind("scan.tiff") is ItemKind.IMAGE
    assert detect_kind("notes.txt") is ItemKind.TEXT
    assert detect_kind("memo.docx") is ItemKind.WORD
    assert detect_kind("old.doc") is ItemKind.WORD
    assert detect_kind("archive.zip") is ItemKind.UNKNOWN


def test_item_title_defaults_to_stem():
    item = item_from_path("/data/Annual Report.pdf")

    assert item.title == "Annual Report"
    assert item.header_text == "Annual Report"
    assert item.source == Path("/data/Annual Report.pdf")


def test_items_from_paths_reports_unsupported():
    items, unsupported = items_from_paths(["a.pdf", "b.exe"])

    assert [item.kind for item in items] == [ItemKind.PDF, ItemKind.UNKNOWN]
    assert unsupported == ["b.exe"]


def test_fit_centered_preserves_aspect_ratio():
    x, y, width, height = fit_centered(200, 100, (54, 54, 504, 684))

    assert (width, height) == pytest.approx((504, 252))
    assert x == pytest.approx(54)
    assert y == pytest.approx(54 + (684 - 252) / 2)


def test_fit_centered_scales_tall_images_by_height():
    x, y, width, height = fit_centered(100, 400, (0, 0, 500, 800))

    assert (width, height) == (200, 800)
    assert x == 150
