"""
Tests for per-track UI colours
"""

from styles import COLOR_PRIMARY, TRACK_PALETTE, ui_color


def test_ui_color_is_stable_per_name():
    assert ui_color("Song One") == ui_color("Song One")
    assert ui_color("Song One") in TRACK_PALETTE


def test_ui_color_default_override():
    assert ui_color("Song One", use_default=True) == COLOR_PRIMARY


def test_ui_color_spreads_across_palette():
    colors = {ui_color(f"track {i}") for i in range(200)}

    assert len(colors) > 5
