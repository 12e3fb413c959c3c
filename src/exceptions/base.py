class ImageStudioError(Exception):
    """Base exception for all image studio errors."""

    pass
