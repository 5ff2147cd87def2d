"""
compare_pdf.comparer

ComparePdf: fluent builder collecting the files, masks, crops and page
filters of one comparison, and running it with the chosen strategy.

    result = (
        ComparePdf()
        .actual_pdf_file("invoice.pdf")
        .baseline_pdf_file("invoice.pdf")
        .add_mask(0, {"x0": 35, "y0": 70, "x1": 145, "y1": 95})
        .compare()
    )
    assert result.status == "passed", result.message
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from pdf_utils.compare_image import diff_images
from pdf_utils.errors import PathNotFoundError, PathNotSetError
from pdf_utils.pages import PageFilter
from pdf_utils.rasterize import FitzRenderer, PdfRenderer
from pdf_utils.regions import CropRect, MaskRect, RegionModel

from .by_base64 import compare_by_base64
from .by_image import Differ, compare_by_image
from .config import Config, load_config
from .verdict import Strategy, Verdict

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"


def resolve_pdf_path(name: Optional[str | Path], root: Path, label: str) -> Path:
    """Resolve a file name against its root folder, appending .pdf if missing.

    Relative names are always joined to the root folder; absolute paths are
    used as given.

    Raises PathNotSetError for an empty name and PathNotFoundError when the
    resolved file does not exist.
    """
    if name is None or str(name) == "":
        raise PathNotSetError(label)
    path = Path(name)
    if path.suffix.lower() != PDF_EXTENSION:
        path = path.with_name(path.name + PDF_EXTENSION)
    if not path.is_absolute():
        path = Path(root) / path
    if not path.is_file():
        raise PathNotFoundError(label, path)
    return path.absolute()


class ComparePdf:
    """Builder for one actual/baseline PDF comparison.

    Every builder method returns the instance so calls can be chained.
    ``config`` is a private copy and may be edited before ``compare()``.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        renderer: Optional[PdfRenderer] = None,
        differ: Differ = diff_images,
    ):
        self.config = config.copy() if config is not None else load_config()
        self.renderer = renderer or FitzRenderer()
        self.differ = differ
        self.actual_pdf: Optional[str | Path] = None
        self.baseline_pdf: Optional[str | Path] = None
        self.regions = RegionModel()
        self.page_filter = PageFilter()

    def actual_pdf_file(self, path_or_name: str | Path) -> ComparePdf:
        self.actual_pdf = path_or_name
        return self

    def baseline_pdf_file(self, path_or_name: str | Path) -> ComparePdf:
        self.baseline_pdf = path_or_name
        return self

    def add_mask(self, page_index: int, coordinates: MaskRect | Mapping[str, Any]) -> ComparePdf:
        self.regions.add_mask(page_index, coordinates)
        return self

    def add_masks(self, masks: Iterable[Mapping[str, Any]]) -> ComparePdf:
        self.regions.add_masks(masks)
        return self

    def crop_page(self, page_index: int, coordinates: CropRect | Mapping[str, Any]) -> ComparePdf:
        self.regions.crop_page(page_index, coordinates)
        return self

    def crop_pages(self, crops: Iterable[Mapping[str, Any]]) -> ComparePdf:
        self.regions.crop_pages(crops)
        return self

    def only_page_indexes(self, indexes: Iterable[int]) -> ComparePdf:
        self.page_filter.only_page_indexes(indexes)
        return self

    def skip_page_indexes(self, indexes: Iterable[int]) -> ComparePdf:
        self.page_filter.skip_page_indexes(indexes)
        return self

    def compare(self, strategy: Strategy | str | None = None) -> Verdict:
        """Run the comparison.

        Without an explicit strategy the configured default is used; for
        AUTO that is base64 first, then images when the bytes differ.
        Missing files give a failed verdict; ConfigurationError and
        RenderError propagate.
        """
        config = self.config.copy()
        config.settings.validate()
        regions = self.regions.snapshot()
        page_filter = self.page_filter.snapshot()
        page_filter.validate()
        chosen = Strategy.parse(strategy) if strategy else config.settings.strategy

        try:
            actual = resolve_pdf_path(self.actual_pdf, config.paths.actual_pdf_root_folder, "Actual")
            baseline = resolve_pdf_path(self.baseline_pdf, config.paths.baseline_pdf_root_folder, "Baseline")
        except (PathNotSetError, PathNotFoundError) as e:
            logger.info("%s", e)
            return Verdict.failed(str(e))

        logger.info("Strategy %s: %s vs %s", chosen.value, actual, baseline)

        if chosen in (Strategy.AUTO, Strategy.BY_BASE64):
            verdict = compare_by_base64(actual, baseline)
            if verdict.ok or chosen is Strategy.BY_BASE64:
                return verdict
            logger.info("Base64 values differ; falling back to image comparison")

        return compare_by_image(
            actual,
            baseline,
            page_filter,
            regions,
            config.settings,
            renderer=self.renderer,
            differ=self.differ,
            paths=config.paths,
        )

    async def compare_async(self, strategy: Strategy | str | None = None) -> Verdict:
        return await asyncio.to_thread(self.compare, strategy)
