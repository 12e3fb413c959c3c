from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.

    This class handles all configuration for the image studio API including
    the Gemini credential, model names, request limits and logging.
    A missing API key is allowed: the service still starts and reports the
    missing credential through the health check.
    """

    # Gemini Configuration
    gemini_api_key: Optional[str] = Field(default=None, description="Google Gemini API key")
    gemini_model: str = Field(
        default="gemini-2.5-flash-image", description="Image-capable model for edit/generation"
    )
    gemini_text_model: str = Field(
        default="gemini-2.5-flash", description="Text model used for the weather reasoning step"
    )
    request_timeout_seconds: int = Field(
        default=120, ge=1, description="Upper bound for a single model round trip"
    )

    # Request Limits
    max_prompt_length: int = Field(default=2000, ge=1, description="Maximum prompt length in characters")
    max_upload_size_bytes: int = Field(
        default=50 * 1024 * 1024, ge=1, description="Maximum uploaded image size in bytes"
    )
    allowed_image_types: List[str] = Field(
        default=["image/jpeg", "image/png", "image/jpg", "image/webp"],
        description="MIME types accepted for image uploads",
    )

    # Weather Card Configuration
    default_aspect_ratio: str = Field(default="9:16", description="Aspect ratio used when none is given")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="FastAPI host")
    api_port: int = Field(default=3001, ge=1, le=65535, description="FastAPI port")
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # Logging Configuration
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="text", description="Log format (json/text)")
    log_dir: Optional[str] = Field(default="logs", description="Directory for log files, disabled if empty")

    @field_validator("gemini_api_key")
    def normalize_gemini_api_key(cls, v):
        # Blank values in .env files mean "not configured"
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    def validate_log_format(cls, v):
        if v.lower() not in ("json", "text"):
            raise ValueError(f"Invalid log format: {v}. Must be 'json' or 'text'")
        return v.lower()

    @property
    def is_api_configured(self) -> bool:
        """Whether a Gemini credential is available."""
        return bool(self.gemini_api_key)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
