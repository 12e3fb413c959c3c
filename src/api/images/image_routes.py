from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.api.dependencies import get_config, get_gemini_service
from src.api.responses import images_body
from src.config.config import Config
from src.exceptions import ImageStudioError, InputValidationError
from src.models.gemini.gateway import ReferenceImage
from src.models.images import GenerateImageRequest, ImagesResponse
from src.services.gemini_service import GeminiService
from src.utils.validators import validate_image_upload, validate_prompt

logger = structlog.get_logger(__name__)

# Create router
router = APIRouter(tags=["Images"])


@router.post("/edit-image", summary="Edit Image", response_model=ImagesResponse)
async def edit_image(
    image: Optional[UploadFile] = File(default=None, description="Image to edit (jpeg, png or webp)"),
    prompt: Optional[str] = Form(default=None, description="Description of the edit"),
    negativePrompt: Optional[str] = Form(default=None, description="Things the result should avoid"),
    config: Config = Depends(get_config),
    gemini_service: GeminiService = Depends(get_gemini_service),
):
    """
    Edit an uploaded image according to a text prompt.

    The image and prompt are validated before anything is sent to Gemini.

    Args:
        image: Uploaded image file.
        prompt: Edit instruction, at most `max_prompt_length` characters.
        negativePrompt: Optional things the edited image should avoid.

    Returns:
        JSON object with the edited image as a data URI.

    Raises:
        ImageStudioError: Mapped to a JSON error response by the app's exception handler.
    """
    try:
        if image is None:
            raise InputValidationError("No image file provided")

        # Never buffer more than one byte past the limit
        content = await image.read(config.max_upload_size_bytes + 1)
        validate_image_upload(
            content_type=image.content_type,
            size=len(content),
            allowed_types=config.allowed_image_types,
            max_size_bytes=config.max_upload_size_bytes,
        )
        clean_prompt = validate_prompt(prompt, config.max_prompt_length)

        logger.info(
            "Processing image edit",
            prompt_preview=clean_prompt[:50],
            filename=image.filename,
            content_type=image.content_type,
            size_bytes=len(content),
        )

        artifact = await gemini_service.edit_image(
            clean_prompt,
            ReferenceImage(data=content, mime_type=image.content_type),
            negative_prompt=negativePrompt,
        )

        logger.info("Successfully processed image edit")
        return images_body(artifact)

    except ImageStudioError as e:
        logger.error("Failed to edit image", error_type=type(e).__name__, error=str(e))
        raise


@router.post("/generate-image", summary="Generate Image", response_model=ImagesResponse)
async def generate_image(
    request: GenerateImageRequest,
    config: Config = Depends(get_config),
    gemini_service: GeminiService = Depends(get_gemini_service),
):
    """
    Generate an image from a text prompt.

    Args:
        request: Prompt and optional negative prompt.

    Returns:
        JSON object with the generated image as a data URI.

    Raises:
        ImageStudioError: Mapped to a JSON error response by the app's exception handler.
    """
    try:
        clean_prompt = validate_prompt(request.prompt, config.max_prompt_length)

        logger.info("Generating image", prompt_preview=clean_prompt[:50])

        artifact = await gemini_service.generate_image(clean_prompt, negative_prompt=request.negativePrompt)

        logger.info("Successfully generated image")
        return images_body(artifact)

    except ImageStudioError as e:
        logger.error("Failed to generate image", error_type=type(e).__name__, error=str(e))
        raise
