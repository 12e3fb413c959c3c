import asyncio
import base64
from unittest.mock import MagicMock, patch

import httpx
import pytest
from google.genai import errors

from src.exceptions.gemini import (
    EmptyResultError,
    MissingInputError,
    NotConfiguredError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)
from src.models.gemini.gateway import (
    GatewayMode,
    GatewayRequest,
    GeneratedArtifact,
    ReferenceImage,
    TextResult,
)
from src.services.gemini_service import GeminiService
from tests.conftest import FAKE_IMAGE_BYTES, make_part, make_response


class TestGeminiService:
    """Test cases for the GeminiService gateway."""

    @pytest.mark.asyncio
    async def test_not_configured_fails_before_network(self, unconfigured_config):
        """Without an API key no client is built and nothing is sent."""
        with patch("src.services.gemini_service.genai.Client") as mock_client_class:
            service = GeminiService(unconfigured_config)

            assert service.is_configured is False
            mock_client_class.assert_not_called()

            with pytest.raises(NotConfiguredError, match="not configured"):
                await service.generate_text("Hello")

    @pytest.mark.asyncio
    async def test_client_built_from_config(self, test_config):
        with patch("src.services.gemini_service.genai.Client") as mock_client_class:
            service = GeminiService(test_config)

            assert service.is_configured is True
            call_kwargs = mock_client_class.call_args.kwargs
            assert call_kwargs["api_key"] == "test-gemini-key"
            assert call_kwargs["http_options"].timeout == test_config.request_timeout_seconds * 1000

    @pytest.mark.asyncio
    async def test_generate_text_success(self, gemini_service, mock_genai_client, test_config):
        mock_genai_client.aio.models.generate_content.return_value = make_response(
            make_part(text='{"temp_range": "1°C - 2°C"}')
        )

        result = await gemini_service.generate_text("Give me weather")

        assert isinstance(result, TextResult)
        assert result.text == '{"temp_range": "1°C - 2°C"}'
        call_kwargs = mock_genai_client.aio.models.generate_content.call_args.kwargs
        assert call_kwargs["model"] == test_config.gemini_text_model
        assert call_kwargs["contents"] == ["Give me weather"]
        assert call_kwargs["config"] is None

    @pytest.mark.asyncio
    async def test_generate_text_skips_thought_parts(self, gemini_service, mock_genai_client):
        mock_genai_client.aio.models.generate_content.return_value = make_response(
            make_part(text="thinking...", thought=True),
            make_part(text="answer"),
        )

        result = await gemini_service.generate_text("Question")

        assert result.text == "answer"

    @pytest.mark.asyncio
    async def test_generate_image_success(self, gemini_service, mock_genai_client, test_config):
        """The first inline image becomes a JPEG data URI."""
        mock_genai_client.aio.models.generate_content.return_value = make_response(
            make_part(text="Here is your image"),
            make_part(data=FAKE_IMAGE_BYTES),
        )

        result = await gemini_service.generate_image("A cat on a skateboard")

        assert isinstance(result, GeneratedArtifact)
        assert result.data_uri == "data:image/jpeg;base64," + base64.b64encode(FAKE_IMAGE_BYTES).decode()
        call_kwargs = mock_genai_client.aio.models.generate_content.call_args.kwargs
        assert call_kwargs["model"] == test_config.gemini_model
        assert call_kwargs["config"].response_modalities == ["TEXT", "IMAGE"]

    @pytest.mark.asyncio
    async def test_negative_prompt_appended(self, gemini_service, mock_genai_client):
        mock_genai_client.aio.models.generate_content.return_value = make_response(
            make_part(data=FAKE_IMAGE_BYTES)
        )

        await gemini_service.generate_image("  A forest  ", negative_prompt="people, text")

        contents = mock_genai_client.aio.models.generate_content.call_args.kwargs["contents"]
        assert contents == ["A forest\n\nAvoid the following in the result: people, text"]

    @pytest.mark.asyncio
    async def test_edit_image_strips_data_uri(self, gemini_service, mock_genai_client):
        """A data URI image is forwarded as raw bytes with its own MIME type."""
        mock_genai_client.aio.models.generate_content.return_value = make_response(
            make_part(data=FAKE_IMAGE_BYTES)
        )
        source = b"\x89PNG\r\n\x1a\nsource-image"
        data_uri = "data:image/png;base64," + base64.b64encode(source).decode()

        await gemini_service.edit_image("Make it blue", ReferenceImage(data=data_uri, mime_type="image/jpeg"))

        contents = mock_genai_client.aio.models.generate_content.call_args.kwargs["contents"]
        assert len(contents) == 2
        image_part, prompt = contents
        assert image_part.inline_data.data == source
        assert image_part.inline_data.mime_type == "image/png"
        assert prompt == "Make it blue"

    @pytest.mark.asyncio
    async def test_edit_image_raw_bytes(self, gemini_service, mock_genai_client):
        mock_genai_client.aio.models.generate_content.return_value = make_response(
            make_part(data=FAKE_IMAGE_BYTES)
        )

        await gemini_service.edit_image("Crop it", ReferenceImage(data=b"raw-bytes", mime_type="image/webp"))

        image_part = mock_genai_client.aio.models.generate_content.call_args.kwargs["contents"][0]
        assert image_part.inline_data.data == b"raw-bytes"
        assert image_part.inline_data.mime_type == "image/webp"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt", ["", "   "])
    async def test_missing_prompt(self, gemini_service, mock_genai_client, prompt):
        with pytest.raises(MissingInputError, match="prompt"):
            await gemini_service.generate_image(prompt)

        mock_genai_client.aio.models.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_edit_without_image(self, gemini_service, mock_genai_client):
        with pytest.raises(MissingInputError, match="image"):
            await gemini_service.generate(GatewayRequest(prompt="Edit me", mode=GatewayMode.EDIT))

        mock_genai_client.aio.models.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_edit_with_invalid_base64(self, gemini_service, mock_genai_client):
        with pytest.raises(MissingInputError, match="base64"):
            await gemini_service.edit_image("Edit", ReferenceImage(data="data:image/png;base64,@@@"))

        mock_genai_client.aio.models.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_image_result(self, gemini_service, mock_genai_client):
        """A text-only answer to an image request is an empty result, not a transport failure."""
        mock_genai_client.aio.models.generate_content.return_value = make_response(
            make_part(text="I cannot draw that")
        )

        with pytest.raises(EmptyResultError, match="No image generated"):
            await gemini_service.generate_image("Something")

    @pytest.mark.asyncio
    async def test_no_candidates(self, gemini_service, mock_genai_client):
        mock_genai_client.aio.models.generate_content.return_value = make_response()

        with pytest.raises(EmptyResultError):
            await gemini_service.generate_text("Something")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [httpx.ReadTimeout("Read timed out"), asyncio.TimeoutError()])
    async def test_timeout(self, gemini_service, mock_genai_client, error):
        mock_genai_client.aio.models.generate_content.side_effect = error

        with pytest.raises(UpstreamTimeoutError, match="timeout"):
            await gemini_service.generate_image("Something")

        # No retry
        assert mock_genai_client.aio.models.generate_content.call_count == 1

    @pytest.mark.asyncio
    async def test_deadline_exceeded_api_error(self, gemini_service, mock_genai_client):
        mock_genai_client.aio.models.generate_content.side_effect = errors.ServerError(
            504, {"error": {"code": 504, "message": "Deadline expired", "status": "DEADLINE_EXCEEDED"}}
        )

        with pytest.raises(UpstreamTimeoutError):
            await gemini_service.generate_text("Something")

    @pytest.mark.asyncio
    async def test_api_error(self, gemini_service, mock_genai_client):
        mock_genai_client.aio.models.generate_content.side_effect = errors.ClientError(
            400, {"error": {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}}
        )

        with pytest.raises(UpstreamFailureError, match="API key not valid") as exc_info:
            await gemini_service.generate_text("Something")

        assert not isinstance(exc_info.value, UpstreamTimeoutError)
        assert mock_genai_client.aio.models.generate_content.call_count == 1

    @pytest.mark.asyncio
    async def test_runtime_error(self, gemini_service, mock_genai_client):
        mock_genai_client.aio.models.generate_content.side_effect = RuntimeError("connection reset")

        with pytest.raises(UpstreamFailureError, match="connection reset"):
            await gemini_service.generate_image("Something")

    def test_is_configured_with_injected_client(self, unconfigured_config):
        service = GeminiService(unconfigured_config, client=MagicMock())

        assert service.is_configured is True
