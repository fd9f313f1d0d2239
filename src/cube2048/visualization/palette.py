from __future__ import annotations

from typing import Dict, Tuple


Color = Tuple[int, int, int]

EMPTY_COLOR: Color = (20, 20, 26)
BACKGROUND_COLOR: Color = (10, 10, 14)

# Neon palette, cyan through white at 2048
TILE_COLORS: Dict[int, Color] = {
    2: (0, 255, 255),
    4: (0, 153, 255),
    8: (51, 51, 255),
    16: (153, 51, 255),
    32: (255, 0, 255),
    64: (255, 0, 153),
    128: (255, 0, 0),
    256: (255, 102, 0),
    512: (255, 204, 0),
    1024: (255, 255, 0),
    2048: (255, 255, 255),
    4096: (0, 255, 153),
}


def color_for_value(v: int) -> Color:
    if v <= 0:
        return EMPTY_COLOR
    return TILE_COLORS.get(v, (200, 200, 200))


def text_color_for_value(v: int) -> Color:
    r, g, b = color_for_value(v)
    # dark text on bright tiles
    return (10, 10, 14) if r * 0.299 + g * 0.587 + b * 0.114 > 150 else (240, 240, 240)
