"""
Core layout algorithm for cardsheet.

Derives one uniform card size (mm) from the reference image's aspect ratio
and shelf-packs every card onto pages, left to right and top to bottom.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from .config import (
    DEFAULT_CARD_HEIGHT_MM,
    DEFAULT_CARD_WIDTH_MM,
    LayoutSettings,
)

logger = logging.getLogger(__name__)


@dataclass
class ImageSpec:
    """A source image; only its pixel dimensions matter for layout."""
    src: Union[str, Path]
    width: Optional[int]
    height: Optional[int]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ImageSpec":
        return cls(src=data.get("src"), width=data.get("width"), height=data.get("height"))


@dataclass(frozen=True)
class PlacedCard:
    """A card placed on a page. x, y is the top-left corner in mm."""
    src: Union[str, Path]
    x: float
    y: float
    display_width: float
    display_height: float
    original_width: Optional[int]
    original_height: Optional[int]


Page = List[PlacedCard]


def calculate_card_size(target_width_px: int, target_height_px: int) -> Tuple[float, float]:
    """
    Derive the card size in mm from the reference image's pixel size.

    Portrait images keep the default width and stretch the height to the
    image's aspect ratio. Landscape images use the default size turned on
    its side. Square images keep the default size.

    Args:
        target_width_px: Width of the reference image in pixels
        target_height_px: Height of the reference image in pixels

    Returns:
        Tuple of (card_width_mm, card_height_mm)

    Raises:
        ValueError: If either pixel dimension is not positive
    """
    if target_width_px <= 0 or target_height_px <= 0:
        raise ValueError(f"Reference image size must be positive, "
                         f"got {target_width_px}x{target_height_px}px")

    aspect_ratio = target_height_px / target_width_px

    card_width = DEFAULT_CARD_WIDTH_MM
    card_height = DEFAULT_CARD_HEIGHT_MM

    if aspect_ratio > 1:
        card_height = card_width * aspect_ratio
    elif aspect_ratio < 1:
        card_width = DEFAULT_CARD_HEIGHT_MM
        card_height = DEFAULT_CARD_WIDTH_MM

    logger.debug(f"Reference image {target_width_px}x{target_height_px}px "
                 f"(aspect {aspect_ratio:.3f}) -> card {card_width:.2f}x{card_height:.2f}mm")
    return card_width, card_height


def calculate_layout(images: Sequence[ImageSpec], settings: LayoutSettings,
                     target_width_px: int = 0, target_height_px: int = 0) -> List[Page]:
    """
    Pack all images onto pages as uniformly sized cards.

    Cards are placed in input order, filling each row before wrapping to the
    next one and each page before starting a new page. An empty list means
    the layout is impossible (no images, no reference size, or a card that
    does not fit the printable area).

    Args:
        images: Images to place, in print order
        settings: Page, margin and spacing configuration
        target_width_px: Width of the reference (first) image in pixels
        target_height_px: Height of the reference (first) image in pixels

    Returns:
        List of pages, each a list of placed cards
    """
    if (not images or not target_width_px or not target_height_px
            or target_width_px < 0 or target_height_px < 0):
        logger.warning(f"Nothing to lay out: {len(images)} images, "
                       f"reference size {target_width_px}x{target_height_px}px")
        return []

    page_dims = settings.page_dimensions()
    margin = settings.margin
    spacing = settings.spacing
    available_width = page_dims.width - margin * 2
    available_height = page_dims.height - margin * 2

    card_width, card_height = calculate_card_size(target_width_px, target_height_px)

    if card_width > available_width or card_height > available_height:
        logger.error(f"Card dimensions are too large for the page size: "
                     f"card {card_width:.2f}x{card_height:.2f}mm, "
                     f"printable area {available_width:.2f}x{available_height:.2f}mm")
        return []

    logger.info(f"Laying out {len(images)} cards of {card_width:.2f}x{card_height:.2f}mm "
                f"on {settings.page_size.value} ({page_dims.width}x{page_dims.height}mm), "
                f"margin {margin}mm, spacing {spacing}mm")

    pages: List[Page] = []
    current_page: Page = []
    cards_in_row = 0
    row_width = 0.0
    current_y = margin
    max_height_in_row = 0.0

    for image in images:
        fits_in_row = row_width + card_width <= available_width

        if not fits_in_row and cards_in_row:
            # Next row
            current_y += max_height_in_row + spacing
            cards_in_row = 0
            row_width = 0.0
            max_height_in_row = 0.0

        # Only a card opening a row can push the layout onto a new page;
        # an oversized card on an empty page is placed anyway, and no blank
        # page is flushed ahead of it.
        if not cards_in_row and current_y + card_height > available_height and current_page:
            logger.debug(f"Page {len(pages) + 1} full with {len(current_page)} cards")
            pages.append(current_page)
            current_page = []
            current_y = margin
            max_height_in_row = 0.0

        card = PlacedCard(
            src=image.src,
            x=margin + row_width,
            y=current_y,
            display_width=card_width,
            display_height=card_height,
            original_width=image.width,
            original_height=image.height,
        )
        current_page.append(card)
        logger.debug(f"Placed {card.src} on page {len(pages) + 1} at ({card.x:.2f}, {card.y:.2f})mm")

        cards_in_row += 1
        row_width += card_width + spacing
        max_height_in_row = max(max_height_in_row, card_height)

    if current_page:
        pages.append(current_page)

    logger.info(f"Layout complete: {sum(len(page) for page in pages)} cards on {len(pages)} page(s)")
    return pages
