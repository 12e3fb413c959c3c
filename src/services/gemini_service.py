import asyncio
import base64
from typing import Any, List, Optional, Union

import httpx
import structlog
from google import genai
from google.genai import errors, types

from src.config.config import Config
from src.exceptions.gemini import (
    EmptyResultError,
    MissingInputError,
    NotConfiguredError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)
from src.models.gemini.gateway import (
    DEFAULT_OUTPUT_MIME_TYPE,
    GatewayMode,
    GatewayRequest,
    GeneratedArtifact,
    ReferenceImage,
    TextResult,
)
from src.utils.image_utils import decode_image_payload

logger = structlog.get_logger(__name__)


class GeminiService:
    """
    Gateway for all calls to the Google Gemini API.

    Each call is a single round trip: no retries, no caching. The text model
    answers reasoning prompts, the image model generates and edits images.
    """

    def __init__(self, config: Config, client: Optional[genai.Client] = None):
        """
        Initialize the Gemini gateway.

        Args:
            config: Application configuration
            client: Preconfigured client, built from the config when omitted
        """
        self.config = config
        self.image_model = config.gemini_model
        self.text_model = config.gemini_text_model

        # Without a key there is no client and every call fails fast
        if client is None and config.gemini_api_key:
            client = genai.Client(
                api_key=config.gemini_api_key,
                http_options=types.HttpOptions(timeout=config.request_timeout_seconds * 1000),
            )
        self._client = client

        logger.info(
            "Gemini service initialized",
            configured=self.is_configured,
            image_model=self.image_model,
            text_model=self.text_model,
        )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def generate(self, request: GatewayRequest) -> Union[GeneratedArtifact, TextResult]:
        """
        Send one request to Gemini and extract its first artifact.

        Args:
            request: Prompt, mode and optional reference image

        Returns:
            TextResult for text requests, GeneratedArtifact for generate/edit requests

        Raises:
            NotConfiguredError: If no API key is configured
            MissingInputError: If the prompt, or the image of an edit, is missing
            EmptyResultError: If the response carries no usable payload
            UpstreamTimeoutError: If the call timed out
            UpstreamFailureError: For any other failure of the call
        """
        if not self.is_configured:
            raise NotConfiguredError("GEMINI_API_KEY not configured")

        if not request.prompt or not request.prompt.strip():
            raise MissingInputError("Missing required field: prompt")

        if request.mode == GatewayMode.EDIT and request.image is None:
            raise MissingInputError("Missing required fields: image and prompt")

        model = self.text_model if request.mode == GatewayMode.TEXT else self.image_model
        contents = self._build_contents(request)
        generation_config = None
        if request.mode != GatewayMode.TEXT:
            generation_config = types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"])

        logger.info(
            "Making Gemini request",
            model=model,
            mode=request.mode.value,
            prompt_preview=request.prompt[:50],
            has_image=request.image is not None,
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=generation_config,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error("Gemini request timeout", model=model, error=str(e))
            raise UpstreamTimeoutError(f"Gemini request timeout: {str(e) or type(e).__name__}")
        except errors.APIError as e:
            logger.error("Gemini API error", model=model, code=e.code, status=e.status, error=str(e))
            if e.code == 504 or e.status == "DEADLINE_EXCEEDED":
                raise UpstreamTimeoutError(f"Gemini request timeout: {str(e)}")
            raise UpstreamFailureError(f"Gemini API error: {str(e)}")
        except Exception as e:
            logger.error("Gemini request failed", model=model, error=str(e))
            raise UpstreamFailureError(f"Gemini request failed: {str(e)}")

        if request.mode == GatewayMode.TEXT:
            result = self._extract_text(response)
        else:
            result = self._extract_image(response)

        logger.info("Gemini request completed successfully", model=model, mode=request.mode.value)
        return result

    async def generate_text(self, prompt: str) -> TextResult:
        return await self.generate(GatewayRequest(prompt=prompt, mode=GatewayMode.TEXT))

    async def generate_image(self, prompt: str, negative_prompt: Optional[str] = None) -> GeneratedArtifact:
        return await self.generate(
            GatewayRequest(prompt=prompt, mode=GatewayMode.GENERATE, negative_prompt=negative_prompt)
        )

    async def edit_image(
        self,
        prompt: str,
        image: Optional[ReferenceImage],
        negative_prompt: Optional[str] = None,
    ) -> GeneratedArtifact:
        return await self.generate(
            GatewayRequest(
                prompt=prompt,
                mode=GatewayMode.EDIT,
                image=image,
                negative_prompt=negative_prompt,
            )
        )

    def _build_contents(self, request: GatewayRequest) -> List[Any]:
        prompt = request.prompt.strip()
        if request.negative_prompt and request.negative_prompt.strip():
            prompt = f"{prompt}\n\nAvoid the following in the result: {request.negative_prompt.strip()}"

        if request.image is None:
            return [prompt]

        try:
            raw, mime_type = decode_image_payload(request.image.data, request.image.mime_type)
        except ValueError as e:
            raise MissingInputError(str(e))

        if not raw:
            raise MissingInputError("Missing required fields: image and prompt")

        return [types.Part.from_bytes(data=raw, mime_type=mime_type), prompt]

    @staticmethod
    def _first_parts(response: Any) -> List[Any]:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        content = getattr(candidates[0], "content", None)
        return list(getattr(content, "parts", None) or [])

    def _extract_text(self, response: Any) -> TextResult:
        for part in self._first_parts(response):
            if getattr(part, "thought", False):
                continue
            if getattr(part, "text", None):
                return TextResult(text=part.text)

        raise EmptyResultError("No text generated from Gemini API")

    def _extract_image(self, response: Any) -> GeneratedArtifact:
        for part in self._first_parts(response):
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and inline_data.data:
                return GeneratedArtifact(
                    base64_data=base64.b64encode(inline_data.data).decode("utf-8"),
                    mime_type=DEFAULT_OUTPUT_MIME_TYPE,
                )

        raise EmptyResultError("No image generated from Gemini API")
