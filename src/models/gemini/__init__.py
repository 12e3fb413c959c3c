from src.models.gemini.gateway import (
    DEFAULT_OUTPUT_MIME_TYPE,
    GatewayMode,
    GatewayRequest,
    GeneratedArtifact,
    ReferenceImage,
    TextResult,
)

__all__ = [
    "DEFAULT_OUTPUT_MIME_TYPE",
    "GatewayMode",
    "GatewayRequest",
    "GeneratedArtifact",
    "ReferenceImage",
    "TextResult",
]
