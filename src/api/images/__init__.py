from src.api.images.image_routes import router as images_router

__all__ = ["images_router"]
