"""
Vision provider integration.
"""
from app.services.vision.client import (
    MalformedVisionResponse,
    VisionAPIError,
    VisionClient,
    extract_dominant_colors,
)

__all__ = [
    "MalformedVisionResponse",
    "VisionAPIError",
    "VisionClient",
    "extract_dominant_colors",
]
