"""CHIP-8 rendering utilities for visualization."""

import numpy as np
from typing import Tuple

from PIL import Image

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT


def chip8_display_to_rgb(
    display,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 display to RGB array with optional upscaling.

    Args:
        display: Array of shape (64, 32) indexed [x, y], nonzero for lit pixels
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    pixels = np.asarray(display).astype(np.bool_)
    if pixels.shape != (SCREEN_WIDTH, SCREEN_HEIGHT):
        raise ValueError(f"Expected display shape ({SCREEN_WIDTH}, {SCREEN_HEIGHT}), got {pixels.shape}")

    # (64 width, 32 height) -> image rows first
    pixels = pixels.T
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "classic",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 162, 255), (0, 20, 40)),  # Blue on navy
        "retro": ((155, 188, 15), (15, 56, 15)),  # Handheld LCD
    }

    if scheme not in schemes:
        raise ValueError(f"Unknown color scheme '{scheme}'. Available: {sorted(schemes)}")
    return schemes[scheme]


def display_to_ascii(display, on: str = "#", off: str = ".") -> str:
    """Render the display as text, one line per screen row."""
    pixels = np.asarray(display).astype(np.bool_).T
    return "\n".join("".join(on if p else off for p in row) for row in pixels)


def save_frame(display, filename: str, scale: int = 8, color_scheme: str = "classic") -> None:
    """Write the display to an image file (format from the extension)."""
    on_color, off_color = create_color_scheme(color_scheme)
    frame = chip8_display_to_rgb(display, scale=scale, on_color=on_color, off_color=off_color)
    Image.fromarray(frame).save(filename)
