from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

# Ensure src/ is on path
ROOT = Path(__file__).resolve().parents[1]
src_path = ROOT / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import fitz  # PyMuPDF

from compare_pdf import Config  # noqa: E402

Rect = Tuple[float, float, float, float]

# Filled squares in PDF points. At 100 dpi one point is 100/72 pixels, so
# SQUARE_A covers roughly pixels 139..208 on both axes.
SQUARE_A: Rect = (100, 100, 150, 150)
SQUARE_B: Rect = (300, 300, 350, 350)
SQUARE_C: Rect = (400, 600, 450, 650)

# Pixel masks / crops matching the squares above at 100 dpi
MASK_A = {"x0": 120, "y0": 120, "x1": 230, "y1": 230}
MASK_C = {"x0": 540, "y0": 820, "x1": 640, "y1": 920}


@pytest.fixture
def mask_a():
    """Pixel mask covering SQUARE_A at 100 dpi."""
    return dict(MASK_A)


@pytest.fixture
def mask_c():
    """Pixel mask covering SQUARE_C at 100 dpi."""
    return dict(MASK_C)


def make_pdf(path: Path, pages: Sequence[Sequence[Rect]], title: Optional[str] = None) -> Path:
    doc = fitz.open()
    for rects in pages:
        page = doc.new_page()
        for r in rects:
            page.draw_rect(fitz.Rect(*r), color=(0, 0, 0), fill=(0, 0, 0))
    if title:
        doc.set_metadata({"title": title})
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def pdf_data(tmp_path):
    """Actual/baseline folders with a small set of documents.

    baseline.pdf       page 0: A         page 1: B
    same.pdf           byte copy of baseline.pdf
    reencoded.pdf      same drawing as baseline, different metadata
    notSame.pdf        page 0: A + C     page 1: B
    maskedSame.pdf     page 0: A         page 1: B + A
    maskedNotSame.pdf  page 0: A         page 1: B + A + C
    onePage.pdf        page 0: A
    corrupt.pdf        not a PDF
    """
    actual = tmp_path / "actualPdfs"
    baseline = tmp_path / "baselinePdfs"
    actual.mkdir()
    baseline.mkdir()

    make_pdf(baseline / "baseline.pdf", [[SQUARE_A], [SQUARE_B]])
    shutil.copy(baseline / "baseline.pdf", actual / "same.pdf")
    make_pdf(actual / "reencoded.pdf", [[SQUARE_A], [SQUARE_B]], title="re-encoded")
    make_pdf(actual / "notSame.pdf", [[SQUARE_A, SQUARE_C], [SQUARE_B]])
    make_pdf(actual / "maskedSame.pdf", [[SQUARE_A], [SQUARE_B, SQUARE_A]])
    make_pdf(actual / "maskedNotSame.pdf", [[SQUARE_A], [SQUARE_B, SQUARE_A, SQUARE_C]])
    make_pdf(actual / "onePage.pdf", [[SQUARE_A]])
    (actual / "corrupt.pdf").write_bytes(b"this is not a pdf")

    return tmp_path


@pytest.fixture
def config(pdf_data) -> Config:
    cfg = Config()
    cfg.paths.actual_pdf_root_folder = pdf_data / "actualPdfs"
    cfg.paths.baseline_pdf_root_folder = pdf_data / "baselinePdfs"
    return cfg
