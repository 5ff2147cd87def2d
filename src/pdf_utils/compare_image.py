"""
Pixel comparison of rendered pages.

- diff_images: per-pixel mismatch count with an annotated diff image
- perceptual_distance: imagehash pHash Hamming distance, reported alongside
  the pixel count to tell layout shifts from small rendering noise
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import imagehash
import numpy as np
from PIL import Image

from .regions import MaskRect

DIFF_COLOR = (255, 0, 0)


@dataclass
class PixelDiff:
    mismatch_count: int
    total_pixels: int
    diff_image: Optional[Image.Image] = None


def _pad_to(arr: np.ndarray, height: int, width: int) -> np.ndarray:
    if arr.shape[0] == height and arr.shape[1] == width:
        return arr
    out = np.full((height, width, 3), 255, dtype=np.uint8)
    out[: arr.shape[0], : arr.shape[1]] = arr
    return out


def diff_images(
    image_a: Image.Image,
    image_b: Image.Image,
    ignored_regions: Sequence[MaskRect] = (),
    threshold: float = 0.0,
) -> PixelDiff:
    """Count pixels whose colour differs between two images.

    A pixel counts as different when any channel differs by more than
    ``threshold * 255``. Images of different sizes are compared on the
    larger canvas, padded with white, so the extra area counts as changed.
    Pixels inside ``ignored_regions`` never count.
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must be within [0, 1], got {threshold}")

    arr_a = np.asarray(image_a.convert("RGB"), dtype=np.uint8)
    arr_b = np.asarray(image_b.convert("RGB"), dtype=np.uint8)
    height = max(arr_a.shape[0], arr_b.shape[0])
    width = max(arr_a.shape[1], arr_b.shape[1])
    arr_a = _pad_to(arr_a, height, width)
    arr_b = _pad_to(arr_b, height, width)

    delta = np.abs(arr_a.astype(np.int16) - arr_b.astype(np.int16)).max(axis=2)
    mask = delta > int(threshold * 255)
    for r in ignored_regions:
        x0, y0, x1, y1 = r.box()
        mask[max(y0, 0):max(y1, 0), max(x0, 0):max(x1, 0)] = False

    mismatch = int(np.count_nonzero(mask))
    diff_image = None
    if mismatch:
        gray = Image.fromarray(arr_a).convert("L").convert("RGB")
        diff_arr = np.array(gray, dtype=np.uint8)
        diff_arr[mask] = DIFF_COLOR
        diff_image = Image.fromarray(diff_arr)

    return PixelDiff(mismatch_count=mismatch, total_pixels=height * width, diff_image=diff_image)


def perceptual_distance(image_a: Image.Image, image_b: Image.Image) -> int:
    """Hamming distance between the perceptual hashes of two images."""
    return int(imagehash.phash(image_a.convert("RGB")) - imagehash.phash(image_b.convert("RGB")))
