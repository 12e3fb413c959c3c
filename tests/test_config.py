import pytest
from pydantic import ValidationError

from src.config.config import Config
from tests.conftest import make_config


class TestConfig:
    """Test cases for application settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        config = Config(_env_file=None)

        assert config.gemini_api_key is None
        assert config.is_api_configured is False
        assert config.gemini_model == "gemini-2.5-flash-image"
        assert config.max_prompt_length == 2000
        assert config.max_upload_size_bytes == 50 * 1024 * 1024
        assert config.default_aspect_ratio == "9:16"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        monkeypatch.setenv("GEMINI_MODEL", "custom-image-model")

        config = Config(_env_file=None)

        assert config.gemini_api_key == "env-key"
        assert config.is_api_configured is True
        assert config.gemini_model == "custom-image-model"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_api_key_is_unconfigured(self, value):
        assert make_config(gemini_api_key=value).is_api_configured is False

    def test_log_level_normalized(self):
        assert make_config(log_level="warning").log_level == "WARNING"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Invalid log level"):
            make_config(log_level="LOUD")

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError, match="Invalid log format"):
            make_config(log_format="xml")
