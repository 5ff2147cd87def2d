"""
pdf_utils.regions

Mask and crop regions per page, plus the crop-then-mask transform applied to
rendered page images.

Coordinates are pixels of the page rendered at the configured resolution.
Masks are always given in full-page space, even when the page is cropped.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image, ImageDraw

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value!r}")
    return value


def _page_index(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"page index must be an integer, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"page index must be >= 0, got {value}")
    return value


@dataclass(frozen=True)
class MaskRect:
    """Area ignored during comparison, given by its two corners."""

    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self):
        for name in ("x0", "y0", "x1", "y1"):
            _number(name, getattr(self, name))
        if self.x1 <= self.x0 or self.y1 <= self.y0:
            raise ConfigurationError(f"mask {self} has no area")

    @classmethod
    def coerce(cls, value: MaskRect | Mapping[str, Any]) -> MaskRect:
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"mask coordinates must be a mapping, got {value!r}")
        try:
            return cls(value["x0"], value["y0"], value["x1"], value["y1"])
        except KeyError as e:
            raise ConfigurationError(f"mask coordinates missing {e.args[0]!r}") from e

    def box(self) -> Tuple[int, int, int, int]:
        """Integer pixel box, end exclusive, at least one pixel wide."""
        x0, y0 = int(self.x0), int(self.y0)
        return x0, y0, max(int(round(self.x1)), x0 + 1), max(int(round(self.y1)), y0 + 1)


@dataclass(frozen=True)
class CropRect:
    """Area the comparison is restricted to, given by origin and size."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            _number(name, getattr(self, name))
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"crop {self} has no area")

    @classmethod
    def coerce(cls, value: CropRect | Mapping[str, Any]) -> CropRect:
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"crop coordinates must be a mapping, got {value!r}")
        try:
            return cls(value["x"], value["y"], value["width"], value["height"])
        except KeyError as e:
            raise ConfigurationError(f"crop coordinates missing {e.args[0]!r}") from e

    def box(self) -> Tuple[int, int, int, int]:
        return (
            int(self.x),
            int(self.y),
            int(round(self.x + self.width)),
            int(round(self.y + self.height)),
        )


@dataclass(frozen=True)
class ResolvedRegions:
    masks: List[MaskRect] = field(default_factory=list)
    crop: Optional[CropRect] = None

    def masks_in_crop_space(self) -> List[MaskRect]:
        """Masks translated into the coordinate space of the cropped image.

        Masks that do not overlap the crop are dropped; partial overlaps are
        clipped to the crop bounds.
        """
        if self.crop is None:
            return list(self.masks)
        c = self.crop
        out: List[MaskRect] = []
        for m in self.masks:
            x0, y0 = max(m.x0, c.x), max(m.y0, c.y)
            x1, y1 = min(m.x1, c.x + c.width), min(m.y1, c.y + c.height)
            if x1 <= x0 or y1 <= y0:
                continue
            out.append(MaskRect(x0 - c.x, y0 - c.y, x1 - c.x, y1 - c.y))
        return out


def _split_entry(entry: Any) -> Tuple[Any, Any]:
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"region entry must be a mapping, got {entry!r}")
    page = entry.get("pageIndex", entry.get("page_index"))
    if page is None:
        raise ConfigurationError(f"region entry {entry!r} has no pageIndex")
    if "coordinates" not in entry:
        raise ConfigurationError(f"region entry {entry!r} has no coordinates")
    return page, entry["coordinates"]


class RegionModel:
    """Masks (cumulative) and crops (one per page) keyed by page index."""

    def __init__(self):
        self._masks: Dict[int, List[MaskRect]] = {}
        self._crops: Dict[int, CropRect] = {}

    def add_mask(self, page_index: int, rect: MaskRect | Mapping[str, Any]) -> RegionModel:
        page_index = _page_index(page_index)
        self._masks.setdefault(page_index, []).append(MaskRect.coerce(rect))
        return self

    def add_masks(self, masks: Iterable[Mapping[str, Any]]) -> RegionModel:
        for entry in masks:
            self.add_mask(*_split_entry(entry))
        return self

    def crop_page(self, page_index: int, rect: CropRect | Mapping[str, Any]) -> RegionModel:
        page_index = _page_index(page_index)
        crop = CropRect.coerce(rect)
        if page_index in self._crops:
            logger.warning("Replacing crop %s on page %d with %s", self._crops[page_index], page_index, crop)
        self._crops[page_index] = crop
        return self

    def crop_pages(self, crops: Iterable[Mapping[str, Any]]) -> RegionModel:
        for entry in crops:
            self.crop_page(*_split_entry(entry))
        return self

    def resolve_regions(self, page_index: int) -> ResolvedRegions:
        return ResolvedRegions(
            masks=list(self._masks.get(page_index, [])),
            crop=self._crops.get(page_index),
        )

    def snapshot(self) -> RegionModel:
        return copy.deepcopy(self)


def apply_regions(image: Image.Image, regions: ResolvedRegions, mask_color: RGB = (0, 0, 0)) -> Image.Image:
    """Crop the image, then paint every mask over the cropped result.

    Returns a new image; the input is left untouched.
    """
    if regions.crop is not None:
        x0, y0, x1, y1 = regions.crop.box()
        x1, y1 = min(x1, image.width), min(y1, image.height)
        if x0 >= x1 or y0 >= y1:
            raise ConfigurationError(f"crop {regions.crop} lies outside the {image.width}x{image.height} page")
        out = image.crop((x0, y0, x1, y1))
    else:
        out = image.copy()

    masks = regions.masks_in_crop_space()
    if masks:
        draw = ImageDraw.Draw(out)
        for m in masks:
            x0, y0, x1, y1 = m.box()
            # PIL rectangles include the end coordinate
            draw.rectangle([x0, y0, x1 - 1, y1 - 1], fill=mask_color)
    return out
