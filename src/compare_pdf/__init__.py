"""compare_pdf package

Assert that two PDFs are the same, by base64 value or by rendered images,
with page filters, masks and crops.
"""

from pdf_utils.errors import (  # noqa: F401
    ComparePdfError,
    ConfigurationError,
    PathNotFoundError,
    PathNotSetError,
    RenderError,
)
from pdf_utils.regions import CropRect, MaskRect  # noqa: F401

from .comparer import ComparePdf  # noqa: F401
from .config import Config, Paths, Settings, load_config  # noqa: F401
from .verdict import PageDiff, Strategy, Verdict  # noqa: F401

__all__ = [
	"ComparePdf",
	"Config",
	"Paths",
	"Settings",
	"load_config",
	"Strategy",
	"Verdict",
	"PageDiff",
	"MaskRect",
	"CropRect",
	"ComparePdfError",
	"ConfigurationError",
	"PathNotFoundError",
	"PathNotSetError",
	"RenderError",
]
