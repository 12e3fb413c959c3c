from src.exceptions.base import ImageStudioError


class InputValidationError(ImageStudioError):
    """Exception for invalid client input (missing fields, limits, file types)."""

    pass
