"""Tests for image_quantizer.quantizer — whole-image and region quantization."""

import numpy as np
import pytest

from image_quantizer.core_types import InvalidArgument, Palette
from image_quantizer.palette_data import MONOKAI, construct_palette
from image_quantizer.palette_match import closest_colour
from image_quantizer.quantizer import quantize, quantize_region

MONO = Palette(((0, 0, 0), (255, 255, 255)))


class TestQuantize:
    def test_monochrome_row(self):
        row = np.array(
            [[(10, 10, 10), (250, 250, 250), (0, 0, 0), (127, 127, 127)]], dtype=np.uint8
        )
        out = quantize(row, MONO)
        assert out.tolist() == [[[0, 0, 0], [255, 255, 255], [0, 0, 0], [0, 0, 0]]]

    def test_single_colour_palette(self):
        rng = np.random.default_rng(2)
        img = rng.integers(0, 256, (8, 6, 3), dtype=np.uint8)
        out = quantize(img, [(12, 99, 200)])
        assert (out == np.array([12, 99, 200], dtype=np.uint8)).all()

    def test_every_pixel_matches_scan(self):
        rng = np.random.default_rng(4)
        pal = construct_palette(MONOKAI)
        img = rng.integers(0, 256, (10, 12, 3), dtype=np.uint8)
        out = quantize(img, pal)
        for y in range(img.shape[0]):
            for x in range(img.shape[1]):
                expected = closest_colour(tuple(int(v) for v in img[y, x]), pal)
                assert tuple(out[y, x].tolist()) == expected

    def test_returns_new_buffer(self):
        img = np.full((2, 2, 3), 100, dtype=np.uint8)
        before = img.copy()
        out = quantize(img, MONO)
        assert out is not img
        assert np.array_equal(img, before)

    def test_empty_palette_raises(self):
        with pytest.raises(InvalidArgument):
            quantize(np.zeros((2, 2, 3), dtype=np.uint8), [])

    def test_empty_image(self):
        out = quantize(np.zeros((0, 4, 3), dtype=np.uint8), MONO)
        assert out.shape == (0, 4, 3)


class TestQuantizeRegion:
    def test_only_region_written(self):
        src = np.full((4, 5, 3), 240, dtype=np.uint8)
        dst = np.full((4, 5, 3), 7, dtype=np.uint8)
        quantize_region(src, dst, MONO, 1, 3, 2, 4)
        assert (dst[1:3, 2:4] == 255).all()
        untouched = np.ones((4, 5), dtype=bool)
        untouched[1:3, 2:4] = False
        assert (dst[untouched] == 7).all()

    def test_full_width_default(self):
        src = np.zeros((3, 4, 3), dtype=np.uint8)
        dst = np.full((3, 4, 3), 9, dtype=np.uint8)
        quantize_region(src, dst, MONO, 2, 3)
        assert (dst[2] == 0).all()
        assert (dst[:2] == 9).all()

    def test_empty_region_is_noop(self):
        src = np.zeros((3, 3, 3), dtype=np.uint8)
        dst = np.full((3, 3, 3), 9, dtype=np.uint8)
        quantize_region(src, dst, MONO, 1, 1)
        assert (dst == 9).all()

    def test_out_of_bounds_raises(self):
        src = np.zeros((3, 3, 3), dtype=np.uint8)
        with pytest.raises(InvalidArgument):
            quantize_region(src, src.copy(), MONO, 0, 4)
