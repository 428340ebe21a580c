"""Tests for hit testing."""

import pytest

from py_mosaic.core.alea_prng import AleaPRNG
from py_mosaic.core.geometry import Point, polygon_center
from py_mosaic.core.hit_test import MISS, hit_test, hit_test_region
from py_mosaic.core.partitioner import partition
from py_mosaic.core.regions import RegionStore


class TestHitTest:

    @pytest.mark.parametrize("seed", ["h1", "h2", "h3"])
    def test_center_hits_own_region(self, board_rect, seed):
        """Every region's center resolves back to that region."""
        regions = RegionStore().generate(board_rect, 8, prng=AleaPRNG(seed))
        for region in regions:
            assert region.area > 0
            assert hit_test(region.center, regions) == region.id

    def test_raw_polygons(self, board_rect, prng):
        polygons = partition(board_rect, 5, prng)
        for index, polygon in enumerate(polygons):
            assert hit_test(polygon_center(polygon), polygons) == index

    def test_outside_board(self, board_rect, prng):
        regions = RegionStore().generate(board_rect, 8, prng=prng)
        assert hit_test(Point(-5, -5), regions) == MISS
        assert hit_test((1000, 1000), regions) == -1

    def test_empty(self):
        assert hit_test((10, 10), []) == MISS

    def test_hit_test_region(self, board_rect, prng):
        regions = RegionStore().generate(board_rect, 4, prng=prng)
        assert hit_test_region(regions[2].center, regions) is regions[2]
        assert hit_test_region((0, 0), regions) is None
