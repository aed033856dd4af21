"""
Vision Provider Client

Calls the image-annotation endpoint for IMAGE_PROPERTIES and validates the
payload it returns.
"""
import time
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from app.schemas import (
    AnnotateImageRequest,
    BatchAnnotateImagesRequest,
    BatchAnnotateImagesResponse,
    ColorInfo,
    Feature,
    ImageContent,
    ProviderErrorEnvelope,
)
from app.utils.logging import get_logger
from app.utils.metrics import get_metrics

logger = get_logger()


class VisionAPIError(Exception):
    """Provider answered with a non-success status."""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload


class MalformedVisionResponse(Exception):
    """Provider answered 2xx but the payload lacks the expected fields."""
    pass


def parse_error_envelope(response: requests.Response) -> ProviderErrorEnvelope:
    """
    Parse a provider error body, falling back to an empty envelope.

    Non-JSON bodies and bodies of the wrong shape both give an envelope
    without an error detail.
    """
    try:
        payload = response.json()
    except ValueError:
        return ProviderErrorEnvelope()

    if not isinstance(payload, dict):
        return ProviderErrorEnvelope()

    try:
        return ProviderErrorEnvelope.model_validate(payload)
    except ValidationError:
        return ProviderErrorEnvelope()


def _safe_payload(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class VisionClient:
    """Thin client around the vision provider's annotate endpoint."""

    def __init__(self,
                 api_key: str,
                 endpoint: str,
                 timeout: Optional[float] = 10.0,
                 max_results: int = 10):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_results = max_results

    def build_request_body(self, image_base64: str) -> Dict[str, Any]:
        """Request body asking for dominant colors of one image."""
        body = BatchAnnotateImagesRequest(
            requests=[
                AnnotateImageRequest(
                    image=ImageContent(content=image_base64),
                    features=[Feature(type="IMAGE_PROPERTIES", max_results=self.max_results)],
                )
            ]
        )
        return body.model_dump(by_alias=True)

    def annotate_image_properties(self, image_base64: str) -> BatchAnnotateImagesResponse:
        """
        Send one annotate request for the given image.

        Raises:
            VisionAPIError: provider returned a non-2xx status
            requests.RequestException: network failure or timeout
            ValidationError: success body has the wrong types
        """
        start_time = time.time()
        try:
            response = requests.post(
                self.endpoint,
                params={"key": self.api_key},
                json=self.build_request_body(image_base64),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        finally:
            get_metrics().record_timing("vision_call", (time.time() - start_time) * 1000)

        if not 200 <= response.status_code < 300:
            envelope = parse_error_envelope(response)
            payload = _safe_payload(response)
            logger.error("Vision API error", extra={
                "status_code": response.status_code,
                "payload": payload,
            })
            raise VisionAPIError(
                status_code=response.status_code,
                message=envelope.message_or_default(),
                payload=payload,
            )

        return BatchAnnotateImagesResponse.model_validate(response.json())


def extract_dominant_colors(batch: BatchAnnotateImagesResponse) -> List[ColorInfo]:
    """
    Dominant colors of the first (only) annotation result.

    Raises:
        MalformedVisionResponse: result or annotation missing
    """
    if not batch.responses:
        raise MalformedVisionResponse("Vision response contains no results")

    result = batch.responses[0]
    if result.image_properties_annotation is None:
        if result.error is not None and result.error.message:
            raise MalformedVisionResponse(
                f"Vision response has no image properties: {result.error.message}"
            )
        raise MalformedVisionResponse("Vision response has no image properties")

    dominant = result.image_properties_annotation.dominant_colors
    if dominant is None:
        raise MalformedVisionResponse("Vision response has no dominant colors")

    return dominant.colors
