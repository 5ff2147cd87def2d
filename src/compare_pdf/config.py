"""
compare_pdf.config

Default paths and settings, with overrides from PDF_COMPARE_* environment
variables (optionally loaded from .env files).
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from pdf_utils.env import load_env_files, prefixed_env
from pdf_utils.errors import ConfigurationError
from pdf_utils.rasterize import DEFAULT_RESOLUTION

from .verdict import Strategy

logger = logging.getLogger(__name__)


@dataclass
class Paths:
    actual_pdf_root_folder: Path = field(default_factory=lambda: Path("data/actualPdfs"))
    baseline_pdf_root_folder: Path = field(default_factory=lambda: Path("data/baselinePdfs"))
    diff_png_root_folder: Optional[Path] = None


@dataclass
class Settings:
    strategy: Strategy = Strategy.AUTO
    resolution: int = DEFAULT_RESOLUTION
    tolerance: int = 0  # mismatched pixels allowed per page
    threshold: float = 0.05  # per-pixel colour sensitivity, 0..1
    match_page_count: bool = True
    mask_color: Tuple[int, int, int] = (0, 0, 0)

    def validate(self) -> None:
        self.strategy = Strategy.parse(self.strategy)
        if isinstance(self.resolution, bool) or not isinstance(self.resolution, int) or self.resolution <= 0:
            raise ConfigurationError(f"resolution must be a positive integer, got {self.resolution!r}")
        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, int) or self.tolerance < 0:
            raise ConfigurationError(f"tolerance must be a non-negative integer, got {self.tolerance!r}")
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigurationError(f"threshold must be within [0, 1], got {self.threshold!r}")


@dataclass
class Config:
    paths: Paths = field(default_factory=Paths)
    settings: Settings = field(default_factory=Settings)

    def copy(self) -> Config:
        return copy.deepcopy(self)


def _to_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


# env var (without prefix) -> (section, attribute, parser)
_ENV_FIELDS: Dict[str, Tuple[str, str, Callable[[str], object]]] = {
    "ACTUAL_ROOT": ("paths", "actual_pdf_root_folder", Path),
    "BASELINE_ROOT": ("paths", "baseline_pdf_root_folder", Path),
    "DIFF_ROOT": ("paths", "diff_png_root_folder", Path),
    "STRATEGY": ("settings", "strategy", Strategy.parse),
    "RESOLUTION": ("settings", "resolution", int),
    "TOLERANCE": ("settings", "tolerance", int),
    "THRESHOLD": ("settings", "threshold", float),
    "MATCH_PAGE_COUNT": ("settings", "match_page_count", _to_bool),
}


def load_config(env_root: Optional[Path] = None) -> Config:
    """Build a Config from the defaults overridden by PDF_COMPARE_* variables."""
    load_env_files(env_root)
    config = Config()
    for key, raw in prefixed_env().items():
        if key not in _ENV_FIELDS:
            continue
        section, attr, parse = _ENV_FIELDS[key]
        try:
            value = parse(raw)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for PDF_COMPARE_{key}: {raw!r}") from e
        setattr(getattr(config, section), attr, value)
        logger.debug("Config %s.%s = %r (from environment)", section, attr, value)
    config.settings.validate()
    return config
