from __future__ import annotations

import logging

import pytest
from PIL import Image

from compare_pdf import ConfigurationError
from pdf_utils.regions import CropRect, MaskRect, RegionModel, ResolvedRegions, apply_regions


def test_resolve_empty_page():
    regions = RegionModel().resolve_regions(3)
    assert regions.masks == []
    assert regions.crop is None


def test_masks_accumulate_in_order():
    model = RegionModel()
    model.add_mask(1, {"x0": 0, "y0": 0, "x1": 10, "y1": 10})
    model.add_masks([{"pageIndex": 1, "coordinates": {"x0": 20, "y0": 20, "x1": 30, "y1": 30}}])
    assert model.resolve_regions(1).masks == [MaskRect(0, 0, 10, 10), MaskRect(20, 20, 30, 30)]
    assert model.resolve_regions(0).masks == []


def test_last_crop_wins(caplog):
    model = RegionModel().crop_page(0, {"x": 0, "y": 0, "width": 5, "height": 5})
    with caplog.at_level(logging.WARNING, logger="pdf_utils.regions"):
        model.crop_pages([{"page_index": 0, "coordinates": {"x": 1, "y": 1, "width": 2, "height": 2}}])
    assert model.resolve_regions(0).crop == CropRect(1, 1, 2, 2)
    assert "Replacing crop" in caplog.text


@pytest.mark.parametrize(
    "page_index,rect",
    [
        (-1, {"x0": 0, "y0": 0, "x1": 1, "y1": 1}),
        ("0", {"x0": 0, "y0": 0, "x1": 1, "y1": 1}),
        (True, {"x0": 0, "y0": 0, "x1": 1, "y1": 1}),
        (0, {"x0": 5, "y0": 0, "x1": 5, "y1": 1}),
        (0, {"x0": 0, "y0": 0, "x1": "1", "y1": 1}),
        (0, {"x0": -1, "y0": 0, "x1": 1, "y1": 1}),
        (0, {"x0": 0, "y0": 0, "x1": 1}),
        (0, [0, 0, 1, 1]),
    ],
)
def test_invalid_masks(page_index, rect):
    with pytest.raises(ConfigurationError):
        RegionModel().add_mask(page_index, rect)


def test_invalid_crop():
    with pytest.raises(ConfigurationError):
        RegionModel().crop_page(0, {"x": 0, "y": 0, "width": 0, "height": 10})


def test_entry_without_coordinates():
    with pytest.raises(ConfigurationError):
        RegionModel().add_masks([{"pageIndex": 0}])


def test_snapshot_is_independent():
    model = RegionModel().add_mask(0, MaskRect(0, 0, 1, 1))
    snap = model.snapshot()
    model.add_mask(0, MaskRect(2, 2, 3, 3))
    assert len(snap.resolve_regions(0).masks) == 1


def test_apply_mask_paints_area():
    img = Image.new("RGB", (10, 10), (255, 255, 255))
    out = apply_regions(img, ResolvedRegions(masks=[MaskRect(2, 2, 4, 4)]), mask_color=(0, 0, 0))
    assert out.getpixel((2, 2)) == (0, 0, 0)
    assert out.getpixel((3, 3)) == (0, 0, 0)
    assert out.getpixel((4, 4)) == (255, 255, 255)
    # input untouched
    assert img.getpixel((2, 2)) == (255, 255, 255)


def test_crop_then_mask_in_page_coordinates():
    img = Image.new("RGB", (20, 20), (255, 255, 255))
    regions = ResolvedRegions(masks=[MaskRect(10, 10, 12, 12), MaskRect(0, 0, 2, 2)], crop=CropRect(10, 10, 5, 5))
    out = apply_regions(img, regions)
    assert out.size == (5, 5)
    assert out.getpixel((0, 0)) == (0, 0, 0)
    assert out.getpixel((1, 1)) == (0, 0, 0)
    assert out.getpixel((2, 2)) == (255, 255, 255)


def test_masks_in_crop_space_clip_and_drop():
    regions = ResolvedRegions(masks=[MaskRect(5, 5, 15, 15), MaskRect(0, 0, 2, 2)], crop=CropRect(10, 10, 10, 10))
    assert regions.masks_in_crop_space() == [MaskRect(0, 0, 5, 5)]


def test_crop_outside_page():
    img = Image.new("RGB", (10, 10))
    with pytest.raises(ConfigurationError):
        apply_regions(img, ResolvedRegions(crop=CropRect(50, 50, 5, 5)))
