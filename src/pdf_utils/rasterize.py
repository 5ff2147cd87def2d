"""Rasterize PDF pages for visual comparison.

Uses PyMuPDF (fitz) for rendering and Pillow for the rendered rasters. The
renderer sits behind a small interface so tests, or callers with another
rendering backend, can swap it out.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence, Tuple

import fitz  # PyMuPDF
from PIL import Image

from .errors import RenderError
from .regions import RegionModel, apply_regions

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = 100


class PdfRenderer(ABC):
    """Turns one PDF page into a raster image."""

    @abstractmethod
    def page_count(self, pdf_path: str | Path) -> int:
        raise NotImplementedError

    @abstractmethod
    def render(self, pdf_path: str | Path, page_index: int, resolution: int = DEFAULT_RESOLUTION) -> Image.Image:
        raise NotImplementedError


class FitzRenderer(PdfRenderer):
    """PyMuPDF renderer. The document is opened and closed on every call."""

    def page_count(self, pdf_path: str | Path) -> int:
        try:
            with fitz.open(str(pdf_path)) as doc:
                if len(doc) == 0:
                    raise ValueError("document has no pages")
                return len(doc)
        except Exception as e:
            raise RenderError(pdf_path, None, str(e)) from e

    def render(self, pdf_path: str | Path, page_index: int, resolution: int = DEFAULT_RESOLUTION) -> Image.Image:
        try:
            with fitz.open(str(pdf_path)) as doc:
                if page_index < 0 or page_index >= len(doc):
                    raise IndexError(f"page_index out of range for a document with {len(doc)} page(s)")
                pix = doc[page_index].get_pixmap(dpi=resolution, alpha=False)
                return Image.frombytes("RGB", [pix.width, pix.height], pix.samples)
        except Exception as e:
            raise RenderError(pdf_path, page_index, str(e)) from e


def render_pages(
    pdf_path: str | Path,
    page_indexes: Sequence[int],
    regions: RegionModel,
    renderer: PdfRenderer,
    resolution: int = DEFAULT_RESOLUTION,
    mask_color: Tuple[int, int, int] = (0, 0, 0),
) -> List[Image.Image]:
    """Render the given pages in order with their crop and masks applied."""
    images: List[Image.Image] = []
    try:
        for page_index in page_indexes:
            page = renderer.render(pdf_path, page_index, resolution)
            try:
                images.append(apply_regions(page, regions.resolve_regions(page_index), mask_color))
            finally:
                page.close()
            logger.debug("Rendered %s page %d at %d dpi", Path(pdf_path).name, page_index, resolution)
    except Exception:
        for im in images:
            im.close()
        raise
    return images
