"""
MyColor Colors Module

Ranks the vision provider's dominant colors and formats them as hex codes.
"""
from app.services.colors.ranking import rank_dominant_colors, rgb_to_hex, round_channel

__all__ = ["rank_dominant_colors", "rgb_to_hex", "round_channel"]
