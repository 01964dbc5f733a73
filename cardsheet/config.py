"""
Configuration for cardsheet layouts.

Holds the fixed page-size table, the default card size and the
``LayoutSettings`` container supplied by the caller (UI or CLI).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


# Default card size in millimetres (common tarot/oracle card)
DEFAULT_CARD_WIDTH_MM = 63.0
DEFAULT_CARD_HEIGHT_MM = 88.0

# Max width/height difference between front and back cards (mm)
ALIGNMENT_TOLERANCE_MM = 0.1

SUPPORTED_FORMATS = {'.png', '.jpg', '.jpeg', '.tiff', '.tif', '.bmp', '.gif'}

DEFAULT_LOG_FILE = "cardsheet_debug.log"


class PageSize(Enum):
    """Supported page formats."""
    A4 = "A4"
    A3 = "A3"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PageDimensions:
    """Page width and height in mm."""
    width: float
    height: float


PAGE_SIZES: Dict[PageSize, PageDimensions] = {
    PageSize.A4: PageDimensions(210.0, 297.0),
    PageSize.A3: PageDimensions(297.0, 420.0),
}


@dataclass
class LayoutSettings:
    """Page, margin and spacing configuration for one layout job."""
    page_size: PageSize = PageSize.A4
    margin: float = 10.0  # mm on every side
    spacing: float = 5.0  # mm between cards and rows
    custom_width: Optional[float] = None
    custom_height: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.page_size, PageSize):
            self.page_size = parse_page_size(self.page_size)

        if self.margin < 0:
            raise ValueError(f"Margin must be non-negative, got {self.margin}")
        if self.spacing < 0:
            raise ValueError(f"Spacing must be non-negative, got {self.spacing}")

        if self.page_size == PageSize.CUSTOM:
            for name, value in (("custom_width", self.custom_width),
                                ("custom_height", self.custom_height)):
                if value is None or value <= 0:
                    raise ValueError(f"Custom page size requires a positive {name}, got {value}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutSettings":
        """
        Build settings from a mapping.

        Accepts snake_case keys as well as the camelCase keys sent by the
        web front end (``pageSize``, ``customWidth``, ``customHeight``).
        """
        def pick(*keys, default=None):
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        def length(*keys, default=None):
            value = pick(*keys, default=default)
            if value is None:
                return None
            try:
                return float(value)
            except (TypeError, ValueError):
                raise ValueError(f"{keys[0]} must be a number, got {value!r}") from None

        return cls(
            page_size=pick("page_size", "pageSize", default=PageSize.A4),
            margin=length("margin", default=10.0),
            spacing=length("spacing", default=5.0),
            custom_width=length("custom_width", "customWidth"),
            custom_height=length("custom_height", "customHeight"),
        )

    def page_dimensions(self) -> PageDimensions:
        return get_page_dimensions(self)


def parse_page_size(value: Any) -> PageSize:
    """Resolve a page size name ("A4", "a3", "custom") to ``PageSize``."""
    if isinstance(value, PageSize):
        return value
    text = str(value).strip()
    for size in PageSize:
        if text.lower() == size.value.lower():
            return size
    raise ValueError(f"Unsupported page size: {value}")


def get_page_dimensions(settings: LayoutSettings) -> PageDimensions:
    """Page dimensions in mm from the lookup table or the custom fields."""
    if settings.page_size == PageSize.CUSTOM:
        return PageDimensions(float(settings.custom_width), float(settings.custom_height))
    return PAGE_SIZES[settings.page_size]
