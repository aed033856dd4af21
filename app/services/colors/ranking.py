"""
Dominant Color Ranking

Turns the provider's scored dominant colors into an ordered list of hex codes.
"""
import math
from typing import List, Optional, Sequence

from app.schemas import ColorInfo


CHANNEL_MIN = 0
CHANNEL_MAX = 255


def round_channel(value: Optional[float]) -> int:
    """
    Round a provider channel value to an 8-bit integer.

    Missing values count as 0. Halves round up (2.5 -> 3) and the result is
    clamped to [0, 255].
    """
    if value is None:
        return 0
    rounded = math.floor(value + 0.5)
    return max(CHANNEL_MIN, min(CHANNEL_MAX, rounded))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB channels to an uppercase #RRGGBB string."""
    return "#" + "".join(f"{channel:02X}" for channel in (r, g, b))


def color_info_to_hex(info: ColorInfo) -> str:
    """Hex code for a single provider color entry."""
    color = info.color
    return rgb_to_hex(
        round_channel(color.red),
        round_channel(color.green),
        round_channel(color.blue),
    )


def rank_dominant_colors(colors: Sequence[ColorInfo], limit: int = 5) -> List[str]:
    """
    Rank dominant colors by score and format the top entries as hex.

    Args:
        colors: Provider color entries in provider order
        limit: Maximum number of hex codes returned

    Returns:
        Up to ``limit`` hex codes, highest score first. Entries with equal
        scores keep their provider order.
    """
    if limit <= 0:
        return []

    # sorted() stays stable with reverse=True
    ordered = sorted(colors, key=lambda info: info.score, reverse=True)
    return [color_info_to_hex(info) for info in ordered[:limit]]
