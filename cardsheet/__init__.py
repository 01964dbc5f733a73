"""
cardsheet - Card layout for print production

Packs uniformly sized card images onto A4/A3/custom pages and derives
utilization statistics, cut lines and front/back alignment checks.
"""

from .analysis import (
    calculate_alignment_info,
    calculate_cut_instructions,
    calculate_layout_stats,
    validate_print_alignment,
)
from .config import LayoutSettings, PageSize
from .core import ImageSpec, PlacedCard, calculate_layout
from .validation import validate_images

__version__ = "1.0.0"

__all__ = [
    "ImageSpec",
    "LayoutSettings",
    "PageSize",
    "PlacedCard",
    "calculate_alignment_info",
    "calculate_cut_instructions",
    "calculate_layout",
    "calculate_layout_stats",
    "validate_images",
    "validate_print_alignment",
]
