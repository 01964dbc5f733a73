#!/usr/bin/env python3
"""Tests for image validation and loading images from a folder."""

import os
import sys
from pathlib import Path

import pytest
from PIL import Image

sys.path.insert(0, os.path.dirname(__file__))

from cardsheet.core import ImageSpec
from cardsheet.validation import load_images, validate_images


def create_test_images(output_dir: Path, sizes):
    """Write solid-colour PNGs named after their index."""
    output_dir.mkdir(exist_ok=True)
    paths = []
    for name, (width, height) in sizes.items():
        img = Image.new('RGB', (width, height), color='blue')
        path = output_dir / name
        img.save(path)
        paths.append(path)
    return paths


def test_no_images_is_a_single_error():
    result = validate_images([])

    assert not result.is_valid
    assert result.errors == ["No images loaded"]


def test_valid_image():
    result = validate_images([ImageSpec(src="a.png", width=10, height=10)])

    assert result.is_valid
    assert result.errors == []


def test_zero_width_reports_both_problems():
    result = validate_images([
        ImageSpec(src="a.png", width=10, height=10),
        ImageSpec(src="b.png", width=0, height=10),
    ])

    assert not result.is_valid
    assert result.errors == [
        "Image 2 has no valid dimensions",
        "Image 2 has invalid dimensions",
    ]


def test_missing_height_is_reported_once():
    result = validate_images([ImageSpec(src="a.png", width=10, height=None)])

    assert result.errors == ["Image 1 has no valid dimensions"]


def test_negative_width_is_invalid():
    result = validate_images([ImageSpec(src="a.png", width=-5, height=10)])

    assert result.errors == ["Image 1 has invalid dimensions"]


def test_validation_does_not_modify_input():
    images = [ImageSpec(src="a.png", width=0, height=0), ImageSpec(src="b.png", width=3, height=4)]
    snapshot = list(images)

    validate_images(images)

    assert images == snapshot


def test_image_spec_from_dict():
    image = ImageSpec.from_dict({"src": "front.png", "width": 600, "height": 800})

    assert image == ImageSpec(src="front.png", width=600, height=800)


def test_load_images_sorted_by_name(tmp_path):
    create_test_images(tmp_path, {"b.png": (30, 40), "A.png": (40, 30), "c.jpg": (50, 50)})
    (tmp_path / "notes.txt").write_text("not an image")

    images, errors = load_images(tmp_path)

    assert errors == []
    assert [image.src.name for image in images] == ["A.png", "b.png", "c.jpg"]
    assert [(image.width, image.height) for image in images] == [(40, 30), (30, 40), (50, 50)]


def test_load_images_reports_unreadable_files(tmp_path):
    create_test_images(tmp_path, {"good.png": (20, 20)})
    (tmp_path / "broken.png").write_bytes(b"definitely not a png")

    images, errors = load_images(tmp_path)

    assert len(images) == 1
    assert len(errors) == 1
    assert errors[0].startswith("Cannot read image: broken.png")


def test_load_images_missing_folder(tmp_path):
    images, errors = load_images(tmp_path / "missing")

    assert images == []
    assert errors == [f"Folder does not exist: {tmp_path / 'missing'}"]


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
