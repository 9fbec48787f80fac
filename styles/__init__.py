"""Shared style constants for tickplay."""

import hashlib

COLORS = {
    "primary": "#ffd700",
    "background": "#1a1a1a",
    "surface": "#2d2d2d",
    "muted": "#888888",
    "dim": "#555555",
    "inactive": "#333333",
}

COLOR_PRIMARY = COLORS["primary"]
COLOR_BACKGROUND = COLORS["background"]
COLOR_SURFACE = COLORS["surface"]
COLOR_MUTED = COLORS["muted"]
COLOR_DIM = COLORS["dim"]
COLOR_INACTIVE = COLORS["inactive"]

# Bright-ish terminal palette tracks are coloured from.
TRACK_PALETTE = (
    "#cd3131", "#0dbc79", "#e5e510", "#2472c8", "#bc3fbc",
    "#11a8cd", "#e5e5e5", "#ff8c00", "#f14c4c", "#23d18b",
    "#f5f543", "#3b8eea", "#d670d6", "#29b8db", "#ffb347",
)


def ui_color(track_name: str, use_default: bool = False) -> str:
    """Pick the UI colour for a track from a hash of its name."""
    if use_default:
        return COLOR_PRIMARY
    digest = hashlib.md5(track_name.encode()).hexdigest()
    return TRACK_PALETTE[int(digest, 16) % len(TRACK_PALETTE)]
