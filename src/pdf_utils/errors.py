"""
Error taxonomy for PDF comparisons.

Path errors are turned into failed verdicts by the comparer. Configuration
and render errors propagate to the caller: they point at a broken test setup
or a broken document, not at a visual difference.
"""

from __future__ import annotations

from pathlib import Path


class ComparePdfError(Exception):
    """Base class for every error raised by compare_pdf."""


class PathNotSetError(ComparePdfError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"{label} pdf file path was not set. Please define correctly then try again.")


class PathNotFoundError(ComparePdfError):
    def __init__(self, label: str, path: str | Path):
        self.label = label
        self.path = Path(path)
        super().__init__(f"{label} pdf file path does not exists. Please define correctly then try again.")


class ConfigurationError(ComparePdfError, ValueError):
    """Invalid masks, crops, page filters, strategy or settings."""


class RenderError(ComparePdfError):
    def __init__(self, path: str | Path, page_index: int | None, reason: str = ""):
        self.path = Path(path)
        self.page_index = page_index
        self.reason = reason
        where = f"page {page_index} of {self.path}" if page_index is not None else str(self.path)
        msg = f"Unable to render {where}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
