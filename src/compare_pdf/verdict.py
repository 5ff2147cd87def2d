"""
compare_pdf.verdict

Comparison strategies and the verdict returned to callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from PIL import Image

from pdf_utils.errors import ConfigurationError

PASSED = "passed"
FAILED = "failed"


class Strategy(str, Enum):
    AUTO = "auto"
    BY_BASE64 = "byBase64"
    BY_IMAGE = "byImage"

    @classmethod
    def parse(cls, value: Strategy | str | None) -> Strategy:
        if value is None or value == "":
            return cls.AUTO
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value or member.name.lower() == str(value).lower():
                return member
        raise ConfigurationError(
            f"Unknown comparison strategy {value!r}; expected one of {[m.value for m in cls]}"
        )


@dataclass
class PageDiff:
    page_index: int
    mismatch_count: int
    total_pixels: int = 0
    diff_image: Optional[Image.Image] = None
    perceptual_distance: Optional[int] = None
    diff_path: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "pageIndex": self.page_index,
            "mismatchCount": self.mismatch_count,
            "totalPixels": self.total_pixels,
            "perceptualDistance": self.perceptual_distance,
        }
        if self.diff_path is not None:
            out["diffPath"] = str(self.diff_path)
        return out


@dataclass
class Verdict:
    status: str
    message: Optional[str] = None
    details: Optional[List[PageDiff]] = None

    def __post_init__(self):
        if self.status not in (PASSED, FAILED):
            raise ValueError(f"invalid verdict status {self.status!r}")
        if self.status == FAILED and not self.message:
            raise ValueError("a failed verdict needs a message")

    @classmethod
    def passed(cls) -> Verdict:
        return cls(PASSED)

    @classmethod
    def failed(cls, message: str, details: Optional[List[PageDiff]] = None) -> Verdict:
        return cls(FAILED, message, details)

    @property
    def ok(self) -> bool:
        return self.status == PASSED

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"status": self.status}
        if self.message:
            out["message"] = self.message
        if self.details is not None:
            out["details"] = [d.to_dict() for d in self.details]
        return out
