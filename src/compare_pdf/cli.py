"""
compare_pdf.cli

Command line entry point: compare an actual PDF against a baseline PDF and
exit 0 when they match, 1 when they do not.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from pdf_utils.errors import ComparePdfError
from pdf_utils.report import render_html_report

from .comparer import ComparePdf
from .config import load_config
from .verdict import Strategy

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare an actual PDF against a baseline PDF")
    parser.add_argument("actual", help="Actual PDF (name or path)")
    parser.add_argument("baseline", help="Baseline PDF (name or path)")
    parser.add_argument(
        "--strategy",
        choices=[Strategy.BY_BASE64.value, Strategy.BY_IMAGE.value],
        default=None,
        help="Comparison strategy; default tries byBase64 then byImage",
    )
    pages = parser.add_mutually_exclusive_group()
    pages.add_argument("--only", type=int, nargs="+", metavar="PAGE", help="Only compare these page indexes")
    pages.add_argument("--skip", type=int, nargs="+", metavar="PAGE", help="Skip these page indexes")
    parser.add_argument(
        "--mask",
        nargs=5,
        action="append",
        default=[],
        metavar=("PAGE", "X0", "Y0", "X1", "Y1"),
        help="Ignore a rectangle on a page (repeatable)",
    )
    parser.add_argument(
        "--crop",
        nargs=5,
        action="append",
        default=[],
        metavar=("PAGE", "X", "Y", "W", "H"),
        help="Only compare a rectangle of a page (repeatable)",
    )
    parser.add_argument("--resolution", type=int, default=None, help="Render resolution in dpi")
    parser.add_argument("--tolerance", type=int, default=None, help="Mismatched pixels allowed per page")
    parser.add_argument("--diff-dir", default=None, help="Write diff PNGs for failing pages here")
    parser.add_argument("--report", default=None, help="Write an HTML report to this path")
    return parser


def _page_and_box(parser: argparse.ArgumentParser, flag: str, values: List[str]) -> Tuple[int, List[float]]:
    page, *coords = values
    try:
        page_index = int(page)
    except ValueError:
        parser.error(f"{flag}: PAGE must be a whole page index, got {page!r}")
    try:
        box = [float(v) for v in coords]
    except ValueError:
        parser.error(f"{flag}: coordinates must be numbers, got {coords!r}")
    return page_index, box


def _build_comparer(args: argparse.Namespace, regions: List[Tuple[str, int, List[float]]]) -> ComparePdf:
    config = load_config()
    # command line paths are relative to the working directory
    config.paths.actual_pdf_root_folder = Path.cwd()
    config.paths.baseline_pdf_root_folder = Path.cwd()
    if args.resolution is not None:
        config.settings.resolution = args.resolution
    if args.tolerance is not None:
        config.settings.tolerance = args.tolerance
    if args.diff_dir:
        config.paths.diff_png_root_folder = Path(args.diff_dir)

    comparer = ComparePdf(config).actual_pdf_file(args.actual).baseline_pdf_file(args.baseline)
    for kind, page, (a, b, c, d) in regions:
        if kind == "mask":
            comparer.add_mask(page, {"x0": a, "y0": b, "x1": c, "y1": d})
        else:
            comparer.crop_page(page, {"x": a, "y": b, "width": c, "height": d})
    if args.only:
        comparer.only_page_indexes(args.only)
    if args.skip:
        comparer.skip_page_indexes(args.skip)
    return comparer


def main(argv: Optional[List[str]] = None) -> int:
    level_name = os.environ.get("PDF_COMPARE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format="[%(levelname)s] %(message)s")

    parser = build_parser()
    args = parser.parse_args(argv)
    regions = [("mask", *_page_and_box(parser, "--mask", v)) for v in args.mask]
    regions += [("crop", *_page_and_box(parser, "--crop", v)) for v in args.crop]

    try:
        verdict = _build_comparer(args, regions).compare(args.strategy)
    except ComparePdfError as e:
        logger.error("%s", e)
        return 2
    print(verdict.message or verdict.status)

    if args.report:
        render_html_report(
            {
                "meta": {"actual": args.actual, "baseline": args.baseline, "strategy": args.strategy or "auto"},
                "verdict": verdict,
            },
            args.report,
        )
        logger.info("Report written to %s", args.report)

    return 0 if verdict.ok else 1


if __name__ == "__main__":
    sys.exit(main())
