"""
MyColor Backend
Proxies base64 images to the vision provider and returns their dominant colors.
"""
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import colors, observability
from app.api.colors import ColorAnalysisService, error_body
from app.config import CORS_HEADERS, SERVICE_VERSION, Config
from app.utils.ids import generate_request_id
from app.utils.logging import configure_logging


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Service configuration. Read from the environment (and a
            ``.env`` file) when omitted.
    """
    if config is None:
        load_dotenv()
        config = Config()

    logger = configure_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="MyColor Backend",
        description="Dominant color extraction backed by a vision analysis provider",
        version=SERVICE_VERSION
    )
    app.state.config = config
    app.state.color_service = ColorAnalysisService(config)

    # Fixed CORS header set on every response, including errors and preflight
    @app.middleware("http")
    async def add_service_headers(request: Request, call_next):
        request.state.request_id = generate_request_id()
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        response.headers["X-Request-ID"] = request.state.request_id
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            logger.warning(f"Method not allowed: {request.method} {request.url.path}")
            return JSONResponse(
                content=error_body("Method not allowed"),
                status_code=405,
                headers=exc.headers
            )
        return JSONResponse(
            content=error_body(str(exc.detail)),
            status_code=exc.status_code,
            headers=exc.headers
        )

    app.include_router(colors.router)
    app.include_router(observability.router)

    logger.info("MyColor backend configured", extra={
        "vision_api_url": config.VISION_API_URL,
        "vision_api_key": config.masked_api_key(),
        "vision_timeout_s": config.VISION_TIMEOUT,
    })
    if not config.has_vision_api_key:
        logger.warning("GOOGLE_VISION_API_KEY is not set; analysis requests will fail")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=app.state.config.HOST,
        port=app.state.config.PORT
    )
