"""
MyColor Analyze Colors Route
Accepts a base64 image, asks the vision provider for dominant colors and
returns them as ranked hex codes.
"""
import time
from typing import Any, Dict, Optional, Tuple

import requests
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.config import Config
from app.schemas import AnalyzeColorsResponse, ErrorResponse
from app.services.colors.ranking import rank_dominant_colors
from app.services.vision import VisionAPIError, VisionClient, extract_dominant_colors
from app.utils.logging import get_logger
from app.utils.metrics import get_metrics

logger = get_logger()
router = APIRouter(prefix="/api", tags=["colors"])

ANALYZE_PATH = "/analyze-colors"


def error_body(error: str, details: Optional[str] = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Serialise an error response, leaving out unset fields."""
    return ErrorResponse(error=error, details=details, message=message).model_dump(exclude_none=True)


class ColorAnalysisService:
    """
    Runs one color analysis from validated input to response body.

    The configuration is fixed at construction. A client may be passed in;
    otherwise one is built per call from the configured key.
    """

    def __init__(self, config: Config, client: Optional[VisionClient] = None):
        self.config = config
        self._client = client

    def _get_client(self) -> VisionClient:
        if self._client is not None:
            return self._client
        return VisionClient(
            api_key=self.config.VISION_API_KEY,
            endpoint=self.config.VISION_API_URL,
            timeout=self.config.VISION_TIMEOUT,
            max_results=self.config.VISION_MAX_RESULTS,
        )

    def analyze(self, image_base64: Any, request_id: str = "") -> Tuple[int, Dict[str, Any]]:
        """
        Analyze one image.

        Args:
            image_base64: Value of the request's ``imageBase64`` field
            request_id: Request ID for log correlation

        Returns:
            Tuple of (status_code, response body)
        """
        metrics = get_metrics()
        log_extra = {"request_id": request_id}

        if not isinstance(image_base64, str) or not image_base64:
            logger.warning("Rejected request without image data", extra=log_extra)
            metrics.increment_failure_count("bad_request")
            return 400, error_body("Image data is required")

        if not self.config.has_vision_api_key:
            logger.error("Vision API key not configured", extra=log_extra)
            metrics.increment_failure_count("config")
            return 500, error_body("API key not configured")

        start_time = time.time()
        try:
            batch = self._get_client().annotate_image_properties(image_base64)
            colors = extract_dominant_colors(batch)
            hex_colors = rank_dominant_colors(colors, limit=self.config.MAX_COLORS)

        except VisionAPIError as e:
            logger.error(f"Image analysis failed upstream: {e.message}",
                         extra={**log_extra, "status_code": e.status_code})
            metrics.increment_failure_count("upstream")
            return e.status_code, error_body("Failed to analyze image", details=e.message)

        except requests.RequestException as e:
            logger.error(f"Vision API request failed: {e}", extra=log_extra)
            metrics.increment_failure_count("internal")
            return 500, error_body("Internal server error", message=str(e))

        except Exception as e:
            logger.error(f"Server error: {e}", extra={**log_extra, "error_type": type(e).__name__})
            metrics.increment_failure_count("internal")
            return 500, error_body("Internal server error", message=str(e))

        finally:
            metrics.record_timing("analyze", (time.time() - start_time) * 1000)

        logger.info(f"Extracted {len(hex_colors)} colors", extra=log_extra)
        metrics.increment_success_count()
        return 200, AnalyzeColorsResponse(colors=hex_colors).model_dump()


def get_color_service(request: Request) -> ColorAnalysisService:
    """Service built by the application factory."""
    return request.app.state.color_service


async def _read_image_field(request: Request) -> Any:
    """``imageBase64`` from a JSON object body, or None when the body is not JSON."""
    try:
        payload = await request.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload.get("imageBase64")


@router.api_route(ANALYZE_PATH,
                  methods=["POST", "OPTIONS"],
                  summary="Analyze Dominant Colors",
                  description="Extract up to five dominant colors from a base64 image",
                  responses={
                      200: {"model": AnalyzeColorsResponse},
                      400: {"model": ErrorResponse},
                      405: {"model": ErrorResponse},
                      500: {"model": ErrorResponse},
                  })
async def analyze_colors(
    request: Request,
    service: ColorAnalysisService = Depends(get_color_service)
) -> Response:
    """
    Analyze the dominant colors of an uploaded image.

    Request body: ``{"imageBase64": "<base64 image>"}``. OPTIONS answers a
    CORS preflight with an empty 200; the app middleware adds the headers.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200)

    request_id = request.state.request_id
    get_metrics().increment_request_count()
    logger.info("Starting color analysis", extra={"request_id": request_id})

    try:
        image_base64 = await _read_image_field(request)
    except Exception as e:
        logger.error(f"Failed to read request body: {e}",
                     extra={"request_id": request_id, "error_type": type(e).__name__})
        get_metrics().increment_failure_count("internal")
        return JSONResponse(content=error_body("Internal server error", message=str(e)), status_code=500)

    status_code, body = await run_in_threadpool(service.analyze, image_base64, request_id)
    return JSONResponse(content=body, status_code=status_code)
