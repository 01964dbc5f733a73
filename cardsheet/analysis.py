"""
Derived information for a packed layout: statistics, cut instructions and
front/back alignment checks.

Every function here is a pure transform over the pages returned by
``calculate_layout``.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .config import ALIGNMENT_TOLERANCE_MM, LayoutSettings
from .core import Page

logger = logging.getLogger(__name__)


@dataclass
class LayoutStats:
    """Aggregate page/card counts and area utilization of a layout."""
    total_pages: int
    total_cards: int
    utilization_percentage: float
    page_area: float
    available_area: float
    total_card_area: float


@dataclass(frozen=True)
class CutLines:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class CutInstruction:
    """Where to trim one card from a printed sheet. Numbering is 1-based."""
    page_number: int
    card_number: int
    x: float
    y: float
    width: float
    height: float
    cut_lines: CutLines

    def scaled(self, factor: float) -> "CutInstruction":
        """Same instruction with every length multiplied by ``factor``."""
        return CutInstruction(
            page_number=self.page_number,
            card_number=self.card_number,
            x=self.x * factor,
            y=self.y * factor,
            width=self.width * factor,
            height=self.height * factor,
            cut_lines=CutLines(
                top=self.cut_lines.top * factor,
                right=self.cut_lines.right * factor,
                bottom=self.cut_lines.bottom * factor,
                left=self.cut_lines.left * factor,
            ),
        )


@dataclass
class AlignmentInfo:
    total_cards: int
    total_pages: int
    cards_per_row: int
    is_aligned: bool
    message: str


@dataclass
class AlignmentResult:
    is_aligned: bool
    errors: List[str] = field(default_factory=list)


def calculate_layout_stats(pages: Sequence[Page], settings: LayoutSettings) -> LayoutStats:
    """
    Calculate utilization of the printable area over all pages.

    Args:
        pages: Pages returned by calculate_layout
        settings: Settings the pages were laid out with

    Returns:
        LayoutStats; utilization is 0 when there are no pages
    """
    page_dims = settings.page_dimensions()
    page_area = page_dims.width * page_dims.height
    available_area = (page_dims.width - settings.margin * 2) * (page_dims.height - settings.margin * 2)

    total_cards = 0
    total_card_area = 0.0
    for page in pages:
        for card in page:
            total_card_area += card.display_width * card.display_height
            total_cards += 1

    if pages:
        utilization = total_card_area / (available_area * len(pages)) * 100
    else:
        utilization = 0.0

    return LayoutStats(
        total_pages=len(pages),
        total_cards=total_cards,
        utilization_percentage=round(utilization, 2),
        page_area=page_area,
        available_area=available_area,
        total_card_area=total_card_area,
    )


def calculate_cut_instructions(pages: Sequence[Page],
                               settings: Optional[LayoutSettings] = None) -> List[CutInstruction]:
    """Restate every card's bounding box as cut lines, page by page."""
    instructions = []

    for page_index, page in enumerate(pages):
        for card_index, card in enumerate(page):
            instructions.append(CutInstruction(
                page_number=page_index + 1,
                card_number=card_index + 1,
                x=card.x,
                y=card.y,
                width=card.display_width,
                height=card.display_height,
                cut_lines=CutLines(
                    top=card.y,
                    right=card.x + card.display_width,
                    bottom=card.y + card.display_height,
                    left=card.x,
                ),
            ))

    if settings is not None:
        logger.debug(f"Generated {len(instructions)} cut instructions for "
                     f"{settings.page_size.value} sheets")
    return instructions


def _rows(page: Page) -> List[Page]:
    rows: List[Page] = []
    for card in page:
        if rows and rows[-1][0].y == card.y:
            rows[-1].append(card)
        else:
            rows.append([card])
    return rows


def _alignment_problems(pages: Sequence[Page]) -> List[str]:
    """Rows must share one card size and one set of column positions."""
    problems = []
    reference = pages[0][0]
    page_rows = [_rows(page) for page in pages]
    widest = max((rows[0] for rows in page_rows if rows), key=len)
    columns = [card.x for card in widest]

    for page_index, rows in enumerate(page_rows):
        for row_index, row in enumerate(rows):
            for card in row:
                if (card.display_width != reference.display_width
                        or card.display_height != reference.display_height):
                    problems.append(f"Page {page_index + 1}, row {row_index + 1}: card size differs")
                    break
            if [card.x for card in row] != columns[:len(row)]:
                problems.append(f"Page {page_index + 1}, row {row_index + 1}: columns are shifted")
    return problems


def calculate_alignment_info(pages: Sequence[Page]) -> Optional[AlignmentInfo]:
    """
    Summarize row grouping of a layout for cutting.

    Cards per row is counted on the first row of each page; the largest count
    across pages is reported. Returns None when there is nothing to align.
    """
    if not pages or not pages[0]:
        return None

    cards_per_row_by_page = []
    for page in pages:
        if not page:
            cards_per_row_by_page.append(0)
            continue
        first_y = page[0].y
        cards_per_row_by_page.append(sum(1 for card in page if card.y == first_y))

    cards_per_row = max(cards_per_row_by_page)
    total_cards = sum(len(page) for page in pages)

    problems = _alignment_problems(pages)
    for problem in problems:
        logger.warning(problem)

    if problems:
        message = f"{total_cards} cards on {len(pages)} page(s) - NOT aligned for cutting"
    else:
        message = f"{total_cards} cards on {len(pages)} page(s) - aligned for cutting"

    return AlignmentInfo(
        total_cards=total_cards,
        total_pages=len(pages),
        cards_per_row=cards_per_row,
        is_aligned=not problems,
        message=message,
    )


def validate_print_alignment(front_pages: Sequence[Page], back_pages: Sequence[Page]) -> AlignmentResult:
    """
    Check that front and back layouts match card for card.

    All checks run; every mismatch is reported.

    Args:
        front_pages: Layout of the card fronts
        back_pages: Layout of the card backs

    Returns:
        AlignmentResult with is_aligned flag and ordered error messages
    """
    errors = []

    if len(front_pages) != len(back_pages):
        errors.append(f"Page count differs: front has {len(front_pages)}, back has {len(back_pages)}")

    for i, (front_page, back_page) in enumerate(zip(front_pages, back_pages)):
        if len(front_page) != len(back_page):
            errors.append(f"Page {i + 1}: card count differs "
                          f"(front: {len(front_page)}, back: {len(back_page)})")

        if front_page and back_page:
            front_card = front_page[0]
            back_card = back_page[0]

            if abs(front_card.display_width - back_card.display_width) > ALIGNMENT_TOLERANCE_MM:
                errors.append(f"Page {i + 1}: card width differs between front and back")

            if abs(front_card.display_height - back_card.display_height) > ALIGNMENT_TOLERANCE_MM:
                errors.append(f"Page {i + 1}: card height differs between front and back")

    if errors:
        logger.warning(f"Front/back alignment failed with {len(errors)} error(s)")
    else:
        logger.info("Front and back layouts are aligned")

    return AlignmentResult(is_aligned=not errors, errors=errors)
