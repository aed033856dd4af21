"""
MyColor API Schemas
Pydantic models for the analyze-colors endpoint and the vision provider payloads.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.config import SERVICE_NAME


class AnalyzeColorsResponse(BaseModel):
    """Successful color analysis response."""
    success: bool = Field(True, description="Always true on success")
    colors: List[str] = Field(
        ...,
        max_length=10,
        description="Hex color codes (#RRGGBB) ordered by descending dominance"
    )


class ErrorResponse(BaseModel):
    """Error response. Unset optional fields are dropped from the body."""
    error: str = Field(..., description="Error summary")
    details: Optional[str] = Field(None, description="Provider error message")
    message: Optional[str] = Field(None, description="Underlying exception message")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field("ok", description="Service health status")
    service: str = Field(SERVICE_NAME, description="Service name")
    version: str = Field(..., description="Service version")


# ============================================================================
# VISION PROVIDER REQUEST
# ============================================================================

class _ProviderModel(BaseModel):
    """Provider payloads use camelCase on the wire."""
    model_config = ConfigDict(populate_by_name=True)


class ImageContent(_ProviderModel):
    """Inline base64 image content."""
    content: str


class Feature(_ProviderModel):
    """Requested analysis feature."""
    type: str = "IMAGE_PROPERTIES"
    max_results: int = Field(10, alias="maxResults")


class AnnotateImageRequest(_ProviderModel):
    """Single image annotation request."""
    image: ImageContent
    features: List[Feature]


class BatchAnnotateImagesRequest(_ProviderModel):
    """Top-level annotate request body."""
    requests: List[AnnotateImageRequest]


# ============================================================================
# VISION PROVIDER RESPONSE
# ============================================================================

class VisionColor(_ProviderModel):
    """RGB triple. Absent channels mean 0."""
    red: Optional[float] = None
    green: Optional[float] = None
    blue: Optional[float] = None


class ColorInfo(_ProviderModel):
    """Dominant color with its relevance score."""
    color: VisionColor = Field(default_factory=VisionColor)
    score: float = 0.0
    pixel_fraction: Optional[float] = Field(None, alias="pixelFraction")


class DominantColorsAnnotation(_ProviderModel):
    """Dominant colors list."""
    colors: List[ColorInfo] = Field(default_factory=list)


class ImagePropertiesAnnotation(_ProviderModel):
    """Image properties result."""
    dominant_colors: Optional[DominantColorsAnnotation] = Field(None, alias="dominantColors")


class ProviderErrorDetail(_ProviderModel):
    """Provider error object. Every field may be missing."""
    code: Optional[int] = None
    message: Optional[str] = None
    status: Optional[str] = None


class AnnotateImageResponse(_ProviderModel):
    """Per-image result."""
    image_properties_annotation: Optional[ImagePropertiesAnnotation] = Field(
        None, alias="imagePropertiesAnnotation"
    )
    error: Optional[ProviderErrorDetail] = None


class BatchAnnotateImagesResponse(_ProviderModel):
    """Top-level annotate response."""
    responses: List[AnnotateImageResponse] = Field(default_factory=list)


class ProviderErrorEnvelope(_ProviderModel):
    """Error body returned with a non-2xx provider status."""
    error: Optional[ProviderErrorDetail] = None

    def message_or_default(self, default: str = "Unknown error") -> str:
        if self.error is not None and self.error.message:
            return self.error.message
        return default
