"""Canonical text encoding of whole PDF files."""

from __future__ import annotations

import base64
from pathlib import Path


def to_base64(pdf_path: str | Path) -> str:
    """Return the base64 encoding of the raw file bytes."""
    return base64.b64encode(Path(pdf_path).read_bytes()).decode("ascii")
