"""Tests for image_quantizer.scheduler — row partitioning and threaded quantization."""

import threading

import numpy as np
import pytest

from image_quantizer import scheduler
from image_quantizer.core_types import InvalidArgument, Palette
from image_quantizer.palette_data import MONOKAI, construct_palette
from image_quantizer.quantizer import quantize
from image_quantizer.scheduler import default_workers, quantize_parallel, split_rows


class TestSplitRows:
    def test_even_split(self):
        assert split_rows(9, 3) == [(0, 3), (3, 6), (6, 9)]

    def test_last_absorbs_remainder(self):
        assert split_rows(10, 3) == [(0, 3), (3, 6), (6, 10)]

    def test_more_workers_than_rows(self):
        assert split_rows(2, 4) == [(0, 0), (0, 0), (0, 0), (0, 2)]

    def test_single_worker(self):
        assert split_rows(7, 1) == [(0, 7)]

    def test_zero_height(self):
        assert split_rows(0, 3) == [(0, 0), (0, 0), (0, 0)]

    @pytest.mark.parametrize("height", [0, 1, 2, 5, 17, 64, 101])
    @pytest.mark.parametrize("workers", [1, 2, 3, 4, 7, 8, 16])
    def test_partition_is_exact(self, height, workers):
        ranges = split_rows(height, workers)
        assert len(ranges) == workers
        assert ranges[0][0] == 0
        assert ranges[-1][1] == height
        for (s0, e0), (s1, _e1) in zip(ranges, ranges[1:]):
            assert s0 <= e0 == s1
        covered = [y for s, e in ranges for y in range(s, e)]
        assert covered == list(range(height))

    def test_zero_workers_raises(self):
        with pytest.raises(InvalidArgument):
            split_rows(10, 0)


class TestDefaultWorkers:
    def test_at_least_one(self):
        assert default_workers() >= 1


class TestQuantizeParallel:
    @pytest.mark.parametrize("workers", [1, 2, 3, 4, 5, 8, 64])
    def test_matches_single_pass(self, workers):
        rng = np.random.default_rng(workers)
        pal = construct_palette(MONOKAI)
        img = rng.integers(0, 256, (37, 23, 3), dtype=np.uint8)
        out = np.zeros_like(img)
        quantize_parallel(img, out, pal, workers)
        assert np.array_equal(out, quantize(img, pal))

    def test_default_workers(self):
        img = np.full((16, 4, 3), 250, dtype=np.uint8)
        out = np.zeros_like(img)
        quantize_parallel(img, out, [(0, 0, 0), (255, 255, 255)])
        assert (out == 255).all()

    def test_single_row_many_workers(self):
        img = np.full((1, 5, 3), 3, dtype=np.uint8)
        out = np.full_like(img, 77)
        quantize_parallel(img, out, [(0, 0, 0)], 8)
        assert (out == 0).all()

    def test_source_not_modified(self):
        img = np.full((8, 8, 3), 130, dtype=np.uint8)
        before = img.copy()
        quantize_parallel(img, np.empty_like(img), [(0, 0, 0), (255, 255, 255)], 4)
        assert np.array_equal(img, before)

    def test_empty_palette_raises(self):
        img = np.zeros((4, 4, 3), dtype=np.uint8)
        with pytest.raises(InvalidArgument):
            quantize_parallel(img, np.empty_like(img), [], 2)

    def test_shape_mismatch_raises(self):
        img = np.zeros((4, 4, 3), dtype=np.uint8)
        with pytest.raises(InvalidArgument):
            quantize_parallel(img, np.zeros((4, 5, 3), dtype=np.uint8), [(0, 0, 0)], 2)

    def test_read_only_destination_raises(self):
        img = np.zeros((4, 4, 3), dtype=np.uint8)
        dst = np.zeros_like(img)
        dst.setflags(write=False)
        with pytest.raises(InvalidArgument):
            quantize_parallel(img, dst, [(0, 0, 0)], 2)

    def test_zero_workers_raises(self):
        img = np.zeros((4, 4, 3), dtype=np.uint8)
        with pytest.raises(InvalidArgument):
            quantize_parallel(img, np.empty_like(img), [(0, 0, 0)], 0)


class TestWorkerFailure:
    def test_failure_propagates_and_pool_is_released(self, monkeypatch):
        real = scheduler.quantize_region

        def flaky(src, dst, palette, y0, y1):
            if y0 > 0:
                raise RuntimeError(f"band {y0} failed")
            real(src, dst, palette, y0, y1)

        monkeypatch.setattr(scheduler, "quantize_region", flaky)
        baseline = threading.active_count()
        img = np.zeros((12, 3, 3), dtype=np.uint8)
        with pytest.raises(RuntimeError, match="failed"):
            quantize_parallel(img, np.empty_like(img), Palette(((0, 0, 0),)), 4)
        assert threading.active_count() == baseline

    def test_single_pass_failure_propagates(self, monkeypatch):
        def boom(*_args, **_kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(scheduler, "quantize_region", boom)
        img = np.zeros((4, 3, 3), dtype=np.uint8)
        with pytest.raises(RuntimeError, match="boom"):
            quantize_parallel(img, np.empty_like(img), [(0, 0, 0)], 1)
