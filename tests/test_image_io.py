"""Tests for image_quantizer.image_io — RGBA load/save with untouched alpha."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from image_quantizer.core_types import InvalidArgument
from image_quantizer.image_io import is_image_file, load_image_rgba, save_image_rgba


def _rgba(h=4, w=5):
    rng = np.random.default_rng(0)
    rgb = rng.integers(0, 256, (h, w, 3), dtype=np.uint8)
    alpha = rng.integers(0, 256, (h, w), dtype=np.uint8)
    return rgb, alpha


class TestSaveLoad:
    def test_round_trip_keeps_alpha_values(self, tmp_path: Path) -> None:
        rgb, alpha = _rgba()
        written = save_image_rgba(tmp_path / "out.png", rgb, alpha)
        rgb2, alpha2 = load_image_rgba(written)
        assert np.array_equal(rgb2, rgb)
        assert np.array_equal(alpha2, alpha)

    def test_forces_png_suffix(self, tmp_path: Path) -> None:
        rgb, alpha = _rgba()
        written = save_image_rgba(tmp_path / "out.jpg", rgb, alpha)
        assert written.suffix == ".png"
        assert written.exists()
        assert Image.open(written).format == "PNG"

    def test_rgb_file_gets_opaque_alpha(self, tmp_path: Path) -> None:
        path = tmp_path / "rgb.png"
        Image.new("RGB", (3, 2), (10, 20, 30)).save(path)
        rgb, alpha = load_image_rgba(path)
        assert rgb.shape == (2, 3, 3)
        assert (rgb == np.array([10, 20, 30], dtype=np.uint8)).all()
        assert (alpha == 255).all()

    def test_mismatched_alpha_raises(self, tmp_path: Path) -> None:
        rgb, _alpha = _rgba()
        with pytest.raises(InvalidArgument):
            save_image_rgba(tmp_path / "bad.png", rgb, np.zeros((1, 1), dtype=np.uint8))


class TestIsImageFile:
    def test_png(self, tmp_path: Path) -> None:
        path = tmp_path / "a.png"
        Image.new("RGB", (1, 1)).save(path)
        assert is_image_file(path)

    def test_text_file(self, tmp_path: Path) -> None:
        path = tmp_path / "a.png"
        path.write_text("not an image", encoding="utf-8")
        assert not is_image_file(path)
