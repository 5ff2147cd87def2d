"""
compare_pdf.by_image

Rendered-pixel comparison of two PDFs, page by page.

Pipeline:
1) page counts of both documents (must match unless match_page_count is off)
2) selected page indexes from the page filter
3) render selected pages of both documents with crops and masks applied
4) pixel diff per page pair; a page fails above the configured tolerance
5) verdict with one PageDiff per compared page when anything failed
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from PIL import Image

from pdf_utils.compare_image import PixelDiff, diff_images, perceptual_distance
from pdf_utils.pages import PageFilter
from pdf_utils.rasterize import PdfRenderer, render_pages
from pdf_utils.regions import MaskRect, RegionModel

from .config import Paths, Settings
from .verdict import PageDiff, Verdict

logger = logging.getLogger(__name__)

Differ = Callable[[Image.Image, Image.Image, Sequence[MaskRect], float], PixelDiff]


def _write_diff_png(diff_dir: Path, actual: Path, page_diff: PageDiff) -> Path:
    diff_dir.mkdir(parents=True, exist_ok=True)
    out = diff_dir / f"{actual.stem}-diff-{page_diff.page_index}.png"
    page_diff.diff_image.save(out, format="PNG")
    return out


def compare_by_image(
    actual: Path,
    baseline: Path,
    page_filter: PageFilter,
    regions: RegionModel,
    settings: Settings,
    renderer: PdfRenderer,
    differ: Differ = diff_images,
    paths: Optional[Paths] = None,
) -> Verdict:
    logger.info("Comparing %s and %s by image", actual.name, baseline.name)

    actual_count = renderer.page_count(actual)
    baseline_count = renderer.page_count(baseline)
    if actual_count != baseline_count:
        if settings.match_page_count:
            return Verdict.failed(
                f"Actual pdf page count ({actual_count}) is not the same as "
                f"Baseline pdf page count ({baseline_count})."
            )
        logger.info("Page counts differ (%d vs %d); comparing common pages", actual_count, baseline_count)

    page_indexes = page_filter.resolve_page_indexes(min(actual_count, baseline_count))
    logger.info("Selected page indexes: %s", page_indexes)
    if not page_indexes:
        return Verdict.passed()

    kwargs = dict(renderer=renderer, resolution=settings.resolution, mask_color=settings.mask_color)
    actual_images = render_pages(actual, page_indexes, regions, **kwargs)
    try:
        baseline_images = render_pages(baseline, page_indexes, regions, **kwargs)
    except Exception:
        for im in actual_images:
            im.close()
        raise

    page_diffs: List[PageDiff] = []
    failed = False
    try:
        for page_index, img_a, img_b in zip(page_indexes, actual_images, baseline_images):
            ignored = regions.resolve_regions(page_index).masks_in_crop_space()
            pixel_diff = differ(img_a, img_b, ignored, settings.threshold)
            page_diff = PageDiff(
                page_index=page_index,
                mismatch_count=pixel_diff.mismatch_count,
                total_pixels=pixel_diff.total_pixels,
                diff_image=pixel_diff.diff_image,
                perceptual_distance=perceptual_distance(img_a, img_b),
            )
            logger.debug(
                "Page %d: %d/%d pixels differ, phash distance %d",
                page_index,
                page_diff.mismatch_count,
                page_diff.total_pixels,
                page_diff.perceptual_distance,
            )
            if page_diff.mismatch_count > settings.tolerance:
                failed = True
                if paths is not None and paths.diff_png_root_folder is not None and page_diff.diff_image is not None:
                    page_diff.diff_path = _write_diff_png(Path(paths.diff_png_root_folder), actual, page_diff)
            page_diffs.append(page_diff)
    finally:
        for im in actual_images + baseline_images:
            im.close()

    if not failed:
        return Verdict.passed()
    return Verdict.failed(
        f"{actual.name} is not the same as {baseline.name} compared by their images.",
        details=page_diffs,
    )
