import base64
import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from main import create_app
from src.config.config import Config
from src.models.gemini.gateway import GeneratedArtifact, TextResult
from src.models.weather.weather_card import WeatherFacts
from src.services.gemini_service import GeminiService

FAKE_IMAGE_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-bytes"


def make_config(**overrides) -> Config:
    """Build a Config that ignores the local .env file and writes no log files."""
    values = {
        "gemini_api_key": "test-gemini-key",
        "log_dir": None,
        "log_level": "DEBUG",
    }
    values.update(overrides)
    return Config(_env_file=None, **values)


def make_part(text=None, data=None, mime_type="image/png", thought=False):
    part = MagicMock()
    part.text = text
    part.thought = thought
    if data is None:
        part.inline_data = None
    else:
        part.inline_data = MagicMock()
        part.inline_data.data = data
        part.inline_data.mime_type = mime_type
    return part


def make_response(*parts):
    """Mimic a google-genai GenerateContentResponse with one candidate."""
    response = MagicMock()
    if not parts:
        response.candidates = []
        return response
    candidate = MagicMock()
    candidate.content.parts = list(parts)
    response.candidates = [candidate]
    return response


@pytest.fixture
def test_config():
    return make_config()


@pytest.fixture
def unconfigured_config():
    return make_config(gemini_api_key=None)


@pytest.fixture
def mock_genai_client():
    """Mock google-genai client exposing client.aio.models.generate_content."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    return client


@pytest.fixture
def gemini_service(test_config, mock_genai_client):
    return GeminiService(test_config, client=mock_genai_client)


@pytest.fixture
def tokyo_facts():
    return WeatherFacts(
        native_city_name="Tokyo",
        native_date_formatted="January 1, 2024",
        weather_condition="Sunny",
        temp_range="5°C - 10°C",
    )


@pytest.fixture
def tokyo_facts_json(tokyo_facts):
    return json.dumps(tokyo_facts.model_dump(), ensure_ascii=False)


@pytest.fixture
def generated_artifact():
    return GeneratedArtifact(base64_data=base64.b64encode(FAKE_IMAGE_BYTES).decode("utf-8"))


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_gateway(tokyo_facts_json, generated_artifact):
    """Gateway double answering the reasoning step with Tokyo facts and the image step with an image."""
    gateway = MagicMock(spec=GeminiService)
    gateway.is_configured = True
    gateway.generate_text = AsyncMock(return_value=TextResult(text=tokyo_facts_json))
    gateway.generate_image = AsyncMock(return_value=generated_artifact)
    gateway.edit_image = AsyncMock(return_value=generated_artifact)
    return gateway


@pytest.fixture
def client(test_config, mock_gateway):
    app = create_app(test_config, gemini_service=mock_gateway)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
