"""
MyColor Configuration
Manages environment variables and defaults for the color analysis service.
"""
import os
from typing import Any, Dict, Optional


SERVICE_NAME = "mycolor-api"
SERVICE_VERSION = "1.0.0"

DEFAULT_VISION_API_URL = "https://vision.googleapis.com/v1/images:annotate"

# Fixed cross-origin headers sent on every response
CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


class Config:
    """Configuration class for the MyColor service.

    Values are read from the environment when the instance is created.
    Keyword overrides win over the environment, which lets tests build a
    config without mutating process state.
    """

    def __init__(self, **overrides: Any):
        # Vision provider
        self.VISION_API_KEY: Optional[str] = os.environ.get("GOOGLE_VISION_API_KEY")
        self.VISION_API_URL: str = os.environ.get("MYCOLOR_VISION_API_URL", DEFAULT_VISION_API_URL)
        self.VISION_TIMEOUT: float = float(os.environ.get("MYCOLOR_VISION_TIMEOUT", "10"))
        self.VISION_MAX_RESULTS: int = int(os.environ.get("MYCOLOR_VISION_MAX_RESULTS", "10"))

        # Response shaping
        self.MAX_COLORS: int = int(os.environ.get("MYCOLOR_MAX_COLORS", "5"))

        # Logging
        self.LOG_LEVEL: str = os.environ.get("MYCOLOR_LOG_LEVEL", "INFO")

        # Server
        self.HOST: str = os.environ.get("MYCOLOR_HOST", "0.0.0.0")
        self.PORT: int = int(os.environ.get("MYCOLOR_PORT", "8000"))

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown config setting: {name}")
            setattr(self, name, value)

        if not self.validate_max_colors(self.MAX_COLORS):
            raise ValueError(f"MAX_COLORS must be between 1 and 10, got {self.MAX_COLORS}")

    @property
    def has_vision_api_key(self) -> bool:
        """Whether a usable provider key is configured."""
        return bool(self.VISION_API_KEY and self.VISION_API_KEY.strip())

    def masked_api_key(self) -> str:
        """Key shortened for log output."""
        if not self.has_vision_api_key:
            return "<unset>"
        return f"{self.VISION_API_KEY[:4]}***"

    @classmethod
    def validate_max_colors(cls, max_colors: int) -> bool:
        """Validate number of colors returned to the client."""
        return 1 <= max_colors <= 10
