# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""Tests for palette assembly (encoding, percentages, ordering)."""

import pytest

from mogao.schema import CMYK, RGB
from mogao.measure.kmeans import Centroid
from mogao.measure.palette import assemble, transform


class TestTransform:

    def test_plain(self):
        hex_value, rgb, cmyk = transform((200, 0, 0))
        assert hex_value == "#C80000"
        assert rgb == RGB(200, 0, 0)
        assert cmyk == CMYK(0, 100, 100, 22)

    def test_brighten_applied_before_encoding(self):
        hex_value, rgb, cmyk = transform((255, 0, 0), brighten=True)
        assert rgb == RGB(255, 51, 51)
        assert hex_value == "#FF3333"
        assert cmyk == CMYK(0, 80, 80, 0)

    def test_black(self):
        hex_value, _, cmyk = transform((0, 0, 0))
        assert hex_value == "#000000"
        assert cmyk == CMYK(0, 0, 0, 100)


class TestAssemble:

    def test_even_split(self):
        palette = assemble(
            [Centroid(200, 0, 0, 2), Centroid(0, 0, 200, 2)], total_samples=4
        )
        assert [c.hex for c in palette] == ["#C80000", "#0000C8"]
        assert [c.percentage for c in palette] == [50.0, 50.0]

    def test_sorted_by_share(self):
        palette = assemble(
            [Centroid(10, 0, 0, 1), Centroid(0, 10, 0, 3), Centroid(0, 0, 10, 2)],
            total_samples=6,
        )
        assert [c.percentage for c in palette] == [50.0, 33.3, 16.7]
        assert [c.rgb.as_tuple() for c in palette] == [
            (0, 10, 0), (0, 0, 10), (10, 0, 0),
        ]

    def test_ties_keep_emission_order(self):
        palette = assemble(
            [Centroid(1, 0, 0, 1), Centroid(2, 0, 0, 2), Centroid(3, 0, 0, 1)],
            total_samples=4,
        )
        assert [c.rgb.r for c in palette] == [2, 1, 3]

    def test_empty_centroids_kept_by_default(self):
        palette = assemble(
            [Centroid(9, 9, 9, 0), Centroid(200, 0, 0, 5), Centroid(0, 0, 200, 0)],
            total_samples=5,
        )
        assert len(palette) == 3
        assert palette[0].percentage == 100.0
        assert [c.hex for c in palette[1:]] == ["#090909", "#0000C8"]
        assert all(c.percentage == 0.0 for c in palette[1:])

    def test_empty_centroids_filtered(self):
        palette = assemble(
            [Centroid(9, 9, 9, 0), Centroid(200, 0, 0, 5)],
            total_samples=5,
            keep_empty=False,
        )
        assert [c.hex for c in palette] == ["#C80000"]

    def test_percentages_sum_to_hundred(self):
        palette = assemble(
            [Centroid(1, 0, 0, 1), Centroid(2, 0, 0, 1), Centroid(3, 0, 0, 1)],
            total_samples=3,
        )
        assert sum(c.percentage for c in palette) == pytest.approx(100.0, abs=0.1 + 1e-9)

    @pytest.mark.parametrize("k", [3, 6, 7, 11, 12])
    def test_percentage_sum_drift_bounded_by_rounding(self, k):
        # Each share is rounded on its own, so the total drifts by at most k * 0.05
        palette = assemble(
            [Centroid(i, 0, 0, 1) for i in range(k)], total_samples=k
        )
        total = sum(c.percentage for c in palette)
        assert abs(total - 100.0) <= k * 0.05 + 1e-9

    def test_six_equal_shares_round_individually(self):
        palette = assemble(
            [Centroid(i, 0, 0, 1) for i in range(6)], total_samples=6
        )
        assert all(c.percentage == 16.7 for c in palette)
        assert sum(c.percentage for c in palette) == pytest.approx(100.2)

    def test_no_samples(self):
        assert assemble([Centroid(1, 2, 3, 0)], total_samples=0) == ()

    def test_brighten_flag(self):
        palette = assemble([Centroid(255, 0, 0, 1)], total_samples=1, brighten=True)
        assert palette[0].hex == "#FF3333"

    def test_unenriched(self):
        palette = assemble([Centroid(255, 0, 0, 1)], total_samples=1)
        assert not palette[0].is_enriched
        assert palette[0].name is None
