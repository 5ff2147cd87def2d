"""
compare_pdf.by_base64

Whole-document comparison of the base64 encoded file contents. Fast, no
rendering, and blind to page filters, masks and crops.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pdf_utils.encoding import to_base64

from .verdict import Verdict

logger = logging.getLogger(__name__)


def compare_by_base64(actual: Path, baseline: Path) -> Verdict:
    logger.info("Comparing %s and %s by base64", actual.name, baseline.name)
    if to_base64(actual) == to_base64(baseline):
        return Verdict.passed()
    return Verdict.failed(
        f"{actual.name} is not the same as {baseline.name} compared by their base64 values."
    )
