"""
Environment loading helpers.

Settings for compare_pdf come from PDF_COMPARE_* environment variables. This
module loads them from .env.local and .env files in the working directory
when those exist. Variables already set in the process environment win.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "PDF_COMPARE_"
ENV_FILES = (".env.local", ".env")


def load_env_files(root: Optional[Path] = None) -> None:
    """Load .env.local then .env from root (default: cwd), without overriding."""
    root = root or Path.cwd()
    for fname in ENV_FILES:
        fpath = root / fname
        if fpath.exists():
            logger.debug("Loading environment from %s", fpath)
            load_dotenv(dotenv_path=str(fpath), override=False)


def prefixed_env(prefix: str = ENV_PREFIX) -> Dict[str, str]:
    """Return PDF_COMPARE_* variables with the prefix stripped."""
    return {k[len(prefix):]: v for k, v in os.environ.items() if k.startswith(prefix)}
