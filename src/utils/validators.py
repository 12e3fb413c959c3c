from typing import Iterable, Optional

from src.exceptions.validation import InputValidationError


def validate_prompt(prompt: Optional[str], max_length: int) -> str:
    """
    Validate a user prompt.

    Args:
        prompt: Prompt as submitted
        max_length: Maximum number of characters of the submitted prompt

    Returns:
        The prompt without surrounding whitespace

    Raises:
        InputValidationError: If the prompt is missing, blank or too long
    """
    if not prompt or not prompt.strip():
        raise InputValidationError("Prompt is required")

    if len(prompt) > max_length:
        raise InputValidationError(f"Prompt is too long (max {max_length} characters)")

    return prompt.strip()


def validate_city(city: Optional[str]) -> str:
    if not city or not city.strip():
        raise InputValidationError("City is required")
    return city.strip()


def validate_image_upload(
    content_type: Optional[str],
    size: int,
    allowed_types: Iterable[str],
    max_size_bytes: int,
):
    """
    Validate an uploaded image before it is forwarded.

    Raises:
        InputValidationError: If the file is empty, too large or of an unsupported type
    """
    if size == 0:
        raise InputValidationError("No image file provided")

    if size > max_size_bytes:
        raise InputValidationError(f"File is too large (max {max_size_bytes // (1024 * 1024)}MB)")

    allowed = [t.lower() for t in allowed_types]
    if (content_type or "").lower() not in allowed:
        raise InputValidationError(
            f"Unsupported image type: {content_type}. Allowed types: {', '.join(allowed)}"
        )
