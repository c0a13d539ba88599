"""Tests for color pairing."""

import pytest

from match_the_pair.pairing import (
    BLUE,
    GREEN,
    RED,
    channel,
    close_enough,
    colors_match,
    find_pairs,
    unmatched,
)


class TestColorDistance:
    def test_channels(self):
        assert channel(0x123456, RED) == 0x12
        assert channel(0x123456, GREEN) == 0x34
        assert channel(0x123456, BLUE) == 0x56

    def test_threshold_is_exclusive(self):
        assert close_enough(0x000031, 0x000000, BLUE)
        assert not close_enough(0x000032, 0x000000, BLUE)

    def test_every_channel_must_be_close(self):
        assert colors_match(0xFF0000, 0xF00000)
        assert not colors_match(0xFF0000, 0xFF00FF)
        assert not colors_match(0xFF0000, 0x00FF00)


class TestFindPairs:
    def test_close_colors_pair_up(self):
        colors = [0xFF0000, 0xF00000, 0x00FF00]
        assert find_pairs(colors) == [(0, 1)]
        assert colors == [None, None, 0x00FF00]
        assert unmatched(colors) == [2]

    def test_unknown_slots_are_skipped(self):
        colors = [0x0000FF, None, None, 0x0000F0]
        assert find_pairs(colors) == [(0, 3)]
        assert colors == [None] * 4

    def test_nothing_to_pair(self):
        colors = [None, 0x00FF00, None]
        assert find_pairs(colors) == []
        assert colors == [None, 0x00FF00, None]

    def test_greedy_lowest_index_first(self):
        # 0 is close to both 1 and 2, the first one wins
        colors = [0x808080, 0x909090, 0x707070]
        assert find_pairs(colors) == [(0, 1)]
        assert unmatched(colors) == [2]

    def test_full_level(self):
        base = [0xFF0000, 0x00FF00, 0x0000FF, 0xFFFF00, 0xFF00FF, 0x00FFFF, 0x800000, 0x008000]
        order = [3, 11, 0, 14, 7, 5, 9, 1, 12, 6, 15, 2, 8, 10, 4, 13]
        colors = [None] * 16
        for k, color in enumerate(base):
            colors[order[2 * k]] = color
            colors[order[2 * k + 1]] = color ^ 0x0F0F0F

        pairs = find_pairs(colors)
        assert len(pairs) == 8
        assert unmatched(colors) == []
        expected = {tuple(sorted(order[2 * k : 2 * k + 2])) for k in range(8)}
        assert set(pairs) == expected

    @pytest.mark.parametrize("color", [0x000000, 0x123456, 0xFFFFFF])
    def test_identical_colors_match(self, color):
        assert find_pairs([color, color]) == [(0, 1)]
