"""
Image validation for cardsheet.

``validate_images`` checks in-memory image records; ``load_images`` reads
pixel sizes of the raster files in a folder with Pillow.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from .config import SUPPORTED_FORMATS
from .core import ImageSpec

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def validate_images(images: Sequence[ImageSpec]) -> ValidationResult:
    """
    Check that every image has positive pixel dimensions.

    A missing or zero dimension and a non-positive dimension are reported
    separately, so one image may produce two messages.

    Args:
        images: Images to check; not modified

    Returns:
        ValidationResult with is_valid flag and ordered error messages
    """
    errors = []

    if not images:
        errors.append("No images loaded")

    for i, image in enumerate(images, start=1):
        if not image.width or not image.height:
            errors.append(f"Image {i} has no valid dimensions")
        if ((image.width is not None and image.width <= 0)
                or (image.height is not None and image.height <= 0)):
            errors.append(f"Image {i} has invalid dimensions")

    return ValidationResult(is_valid=not errors, errors=errors)


def load_images(folder_path: Path) -> Tuple[List[ImageSpec], List[str]]:
    """
    Read all raster images in a folder, sorted by file name.

    Args:
        folder_path: Folder containing card images

    Returns:
        Tuple of (images, error_messages)
    """
    images = []
    errors = []

    if not folder_path.exists() or not folder_path.is_dir():
        errors.append(f"Folder does not exist: {folder_path}")
        return images, errors

    image_files = [
        file_path for file_path in folder_path.iterdir()
        if file_path.is_file() and file_path.suffix.lower() in SUPPORTED_FORMATS
    ]
    image_files.sort(key=lambda x: x.name.lower())

    for file_path in image_files:
        try:
            with Image.open(file_path) as img:
                width, height = img.size
        except (OSError, UnidentifiedImageError) as e:
            errors.append(f"Cannot read image: {file_path.name} - {e}")
            continue
        images.append(ImageSpec(src=file_path, width=width, height=height))
        logger.debug(f"Loaded {file_path.name}: {width}x{height}px")

    logger.info(f"Loaded {len(images)} images from {folder_path} ({len(errors)} unreadable)")
    return images, errors
