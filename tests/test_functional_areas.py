"""Unit tests for function pattern drawing."""

import pytest

from qrpay.capacity import Ecc, get_num_raw_data_modules
from qrpay.functional_areas import (build_function_mask, compute_alignment_centers, draw_format_bits,
                                    draw_function_patterns, format_bits, version_bits)
from qrpay.grid import ModuleGrid


class TestAlignmentCenters:
    """Test alignment pattern center positions."""

    @pytest.mark.parametrize("version,centers", [
        (1, []),
        (2, [6, 18]),
        (7, [6, 22, 38]),
        (32, [6, 34, 60, 86, 112, 138]),
        (40, [6, 30, 58, 86, 114, 142, 170]),
    ])
    def test_known_versions(self, version, centers):
        assert compute_alignment_centers(version) == centers

    @pytest.mark.parametrize("version", range(2, 41))
    def test_first_and_last(self, version):
        centers = compute_alignment_centers(version)
        assert centers[0] == 6
        assert centers[-1] == version * 4 + 17 - 7
        assert len(centers) == version // 7 + 2


class TestFormatAndVersionBits:
    """Test BCH coded information words."""

    @pytest.mark.parametrize("ecc,mask,word", [
        (Ecc.LOW, 0, 0x77C4),
        (Ecc.MEDIUM, 0, 0x5412),
        (Ecc.QUARTILE, 0, 0x355F),
        (Ecc.LOW, 7, 0x6976),
        (Ecc.MEDIUM, 1, 0x5125),
    ])
    def test_format_words(self, ecc, mask, word):
        assert format_bits(ecc, mask) == word

    def test_format_words_are_distinct(self):
        words = {format_bits(ecc, mask) for ecc in Ecc for mask in range(8)}
        assert len(words) == 32
        assert all(word >> 15 == 0 for word in words)

    @pytest.mark.parametrize("version,word", [(7, 0x07C94), (8, 0x085BC), (40, 0x28C69)])
    def test_version_words(self, version, word):
        assert version_bits(version) == word


class TestFunctionPatterns:
    """Test the drawn function pattern layout."""

    @pytest.fixture
    def grid(self):
        grid = ModuleGrid(1)
        draw_function_patterns(grid, Ecc.MEDIUM)
        return grid

    def test_finder_rings(self, grid):
        assert grid.modules[3][3]          # center
        assert not grid.modules[1][1]      # light ring
        assert grid.modules[0][0]          # outer ring
        assert not grid.modules[7][7]      # separator
        assert grid.is_function[7][7]

    def test_three_finders(self, grid):
        size = grid.size
        assert grid.modules[3][size - 4]
        assert grid.modules[size - 4][3]
        assert not grid.modules[size - 4][size - 4]

    def test_timing_patterns(self, grid):
        for i in range(8, grid.size - 8):
            assert grid.modules[6][i] == (i % 2 == 0)
            assert grid.modules[i][6] == (i % 2 == 0)

    def test_dark_module(self, grid):
        assert grid.modules[grid.size - 8][8]

    def test_format_copies_agree(self):
        grid = ModuleGrid(2)
        draw_function_patterns(grid, Ecc.HIGH)
        draw_format_bits(grid, Ecc.HIGH, 5)
        size = grid.size
        bits = format_bits(Ecc.HIGH, 5)
        for i in range(8):
            assert grid.modules[8][size - 1 - i] == bool((bits >> i) & 1)
        for i in range(8, 15):
            assert grid.modules[size - 15 + i][8] == bool((bits >> i) & 1)
        for i in range(6):
            assert grid.modules[i][8] == bool((bits >> i) & 1)

    def test_version_information_blocks(self):
        grid = ModuleGrid(7)
        draw_function_patterns(grid, Ecc.LOW)
        bits = version_bits(7)
        for i in range(18):
            a, b = grid.size - 11 + i % 3, i // 3
            assert grid.modules[b][a] == bool((bits >> i) & 1)
            assert grid.modules[a][b] == bool((bits >> i) & 1)

    def test_no_version_information_below_7(self):
        grid = ModuleGrid(6)
        draw_function_patterns(grid, Ecc.LOW)
        assert not grid.is_function[0][grid.size - 11]


class TestFunctionMask:
    """Test the function-module mask."""

    @pytest.mark.parametrize("version", range(1, 41))
    def test_data_module_count(self, version):
        mask = build_function_mask(version)
        assert sum(not v for row in mask for v in row) == get_num_raw_data_modules(version)

    def test_v1_function_module_count(self):
        mask = build_function_mask(1)
        assert sum(v for row in mask for v in row) == 21 * 21 - 208
