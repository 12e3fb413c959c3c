from src.models.images.generate_image_request import GenerateImageRequest
from src.models.images.image_response import ImagesResponse, ImageUrl

__all__ = ["GenerateImageRequest", "ImagesResponse", "ImageUrl"]
