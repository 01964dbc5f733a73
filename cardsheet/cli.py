from __future__ import annotations

import argparse
import json
import logging
import time
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .analysis import (
    calculate_alignment_info,
    calculate_cut_instructions,
    calculate_layout_stats,
    validate_print_alignment,
)
from .config import DEFAULT_LOG_FILE, LayoutSettings, PageSize
from .core import Page, calculate_layout
from .logger import log_layout_calculation, log_validation_results, setup_logging, write_job_report
from .units import SUPPORTED_UNITS, mm_factor, mm_to_px
from .validation import load_images, validate_images


def _settings_from_args(args: argparse.Namespace) -> LayoutSettings:
    return LayoutSettings(
        page_size=args.page_size,
        margin=args.margin,
        spacing=args.spacing,
        custom_width=args.custom_width,
        custom_height=args.custom_height,
    )


def _load_and_validate(folder: str, label: str):
    """Load a folder of images. Returns (images, exit_code); exit_code is None on success."""
    logging.info(f"Loading {label} images from: {folder}")
    images, load_errors = load_images(Path(folder))
    if load_errors and not images:
        for error in load_errors:
            print(f"Error: {error}")
        return images, 5
    for error in load_errors:
        logging.warning(error)

    result = validate_images(images)
    log_validation_results(label, len(images), result.errors)
    if not result.is_valid:
        for error in result.errors:
            print(f"Invalid {label} images: {error}")
        return images, 1
    return images, None


def _layout(images, settings: LayoutSettings) -> List[Page]:
    reference = images[0]
    return calculate_layout(images, settings, reference.width, reference.height)


def cli_validate(args: argparse.Namespace) -> int:
    """Check that every image in a folder can be laid out."""
    images, exit_code = _load_and_validate(args.folder, "input")
    if exit_code is not None:
        return exit_code
    print(f"All {len(images)} images are valid")
    return 0


def cli_layout(args: argparse.Namespace) -> int:
    """Lay out a folder of card images and report stats and cut lines."""
    logging.info("Starting layout operation")
    logging.debug(f"Args: {vars(args)}")
    started = datetime.now()

    try:
        settings = _settings_from_args(args)
    except ValueError as e:
        logging.error(f"Invalid settings: {e}")
        print(f"Invalid settings: {e}")
        return 1

    images, exit_code = _load_and_validate(args.folder, "front")
    if exit_code is not None:
        return exit_code

    t0 = time.perf_counter()
    pages = _layout(images, settings)
    calculation_time = time.perf_counter() - t0

    stats = calculate_layout_stats(pages, settings)
    if not pages:
        print("Layout impossible: cards do not fit the printable area")
        if args.report:
            write_job_report(Path(args.report), Path(args.folder).name, started, settings,
                             len(images), None, stats, error="Layout impossible")
        return 1

    first_card = pages[0][0]
    card_size = (first_card.display_width, first_card.display_height)
    log_layout_calculation(Path(args.folder).name, card_size, stats, calculation_time)

    print(f"Card size: {card_size[0]:.2f} x {card_size[1]:.2f} mm")
    if args.dpi:
        print(f"Card pixels at {args.dpi} DPI: "
              f"{mm_to_px(card_size[0], args.dpi)} x {mm_to_px(card_size[1], args.dpi)} px")
    print(f"Pages: {stats.total_pages}, cards: {stats.total_cards}, "
          f"utilization: {stats.utilization_percentage:.2f}%")

    alignment = calculate_alignment_info(pages)
    if alignment is not None:
        print(f"{alignment.message} ({alignment.cards_per_row} per row)")

    instructions = calculate_cut_instructions(pages, settings)
    if args.cuts:
        factor = mm_factor(args.units)
        for instruction in instructions:
            scaled = instruction.scaled(factor)
            lines = scaled.cut_lines
            print(f"  page {scaled.page_number} card {scaled.card_number}: "
                  f"top {lines.top:.2f} right {lines.right:.2f} "
                  f"bottom {lines.bottom:.2f} left {lines.left:.2f} {args.units}")

    duplex_errors: List[str] = []
    back_pages: Optional[List[Page]] = None
    if args.back:
        back_images, exit_code = _load_and_validate(args.back, "back")
        if exit_code is not None:
            return exit_code
        back_pages = _layout(back_images, settings)
        duplex = validate_print_alignment(pages, back_pages)
        duplex_errors = duplex.errors
        if duplex.is_aligned:
            print("Front and back are aligned")
        else:
            print("Front and back are NOT aligned:")
            for error in duplex.errors:
                print(f"  - {error}")

    if args.json:
        payload = {
            "settings": {
                "page_size": settings.page_size.value,
                "margin": settings.margin,
                "spacing": settings.spacing,
            },
            "pages": [[asdict(card) for card in page] for page in pages],
            "stats": asdict(stats),
            "cut_instructions": [asdict(instruction) for instruction in instructions],
            "alignment": asdict(alignment) if alignment is not None else None,
        }
        if back_pages is not None:
            payload["back_pages"] = [[asdict(card) for card in page] for page in back_pages]
            payload["duplex_errors"] = duplex_errors
        with open(args.json, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, default=str)
        logging.info(f"Layout written to {args.json}")

    if args.report:
        write_job_report(Path(args.report), Path(args.folder).name, started, settings,
                         len(images), card_size, stats,
                         alignment_message=alignment.message if alignment else None,
                         duplex_errors=duplex_errors)

    return 1 if duplex_errors else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cardsheet", description="Lay out card images on print sheets")
    p.add_argument("--log-file", default=DEFAULT_LOG_FILE, help=f"Debug log path (default: {DEFAULT_LOG_FILE})")
    sub = p.add_subparsers(dest="cmd")

    c = sub.add_parser("layout", help="Lay out a folder of card images on pages")
    c.add_argument("folder", help="Folder with card front images")
    c.add_argument("--back", help="Folder with card back images to check front/back alignment")
    c.add_argument("--page-size", choices=[size.value for size in PageSize], default=PageSize.A4.value)
    c.add_argument("--custom-width", type=float, help="Page width in mm (custom page size only)")
    c.add_argument("--custom-height", type=float, help="Page height in mm (custom page size only)")
    c.add_argument("--margin", type=float, default=10.0, help="Page margin in mm (default: 10)")
    c.add_argument("--spacing", type=float, default=5.0, help="Space between cards in mm (default: 5)")
    c.add_argument("--cuts", action="store_true", help="Print cut lines for every card")
    c.add_argument("--units", choices=SUPPORTED_UNITS, default="mm", help="Units for cut lines (default: mm)")
    c.add_argument("--dpi", type=int, help="Report the pixel size a card needs at this print DPI")
    c.add_argument("--json", help="Write pages, stats and cut instructions to this JSON file")
    c.add_argument("--report", help="Write a plain-text job report to this path")
    c.set_defaults(func=cli_layout)

    v = sub.add_parser("validate", help="Check the images in a folder")
    v.add_argument("folder", help="Folder with card images")
    v.set_defaults(func=cli_validate)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(Path(args.log_file))

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        result = args.func(args)
        logging.info(f"Operation completed with exit code: {result}")
        return result
    except Exception as e:
        logging.error(f"Unhandled exception: {e}", exc_info=True)
        print(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
