"""
Test configuration and fixtures for the MyColor backend tests.
"""
import json
from typing import Any, Optional

import pytest
import requests
from fastapi.testclient import TestClient

from app.config import Config
from app.utils.metrics import reset_metrics as reset_global_metrics
from main import create_app

TEST_API_KEY = "test-vision-key"
TEST_VISION_URL = "https://vision.test/v1/images:annotate"


def make_response(status_code: int, payload: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response carrying a JSON payload or raw text."""
    response = requests.Response()
    response.status_code = status_code
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = (text or "").encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


def vision_payload(*colors):
    """Provider success body for (red, green, blue, score) tuples."""
    return {
        "responses": [{
            "imagePropertiesAnnotation": {
                "dominantColors": {
                    "colors": [
                        {"color": {"red": r, "green": g, "blue": b}, "score": score}
                        for r, g, b, score in colors
                    ]
                }
            }
        }]
    }


@pytest.fixture
def test_config():
    """Config with a provider key and a fake endpoint."""
    return Config(VISION_API_KEY=TEST_API_KEY, VISION_API_URL=TEST_VISION_URL)


@pytest.fixture
def test_client(test_config):
    """Create test client for the FastAPI app."""
    return TestClient(create_app(test_config))


@pytest.fixture
def unconfigured_client():
    """Test client whose config has no provider key."""
    return TestClient(create_app(Config(VISION_API_KEY=None, VISION_API_URL=TEST_VISION_URL)))


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    reset_global_metrics()
