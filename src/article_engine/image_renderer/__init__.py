# Image Renderer — Nano Banana section images, 2 calls in flight max
"""
Image renderer module. Best-effort: a failed render drops that image
only, and a missing API key skips the stage.
"""

from .client import NanoBananaClient, extract_image_url
from .models import ImageClient, RenderOutcome
from .renderer import DEFAULT_MAX_CONCURRENCY, ImageRenderer

__all__ = [
    "DEFAULT_MAX_CONCURRENCY",
    "ImageClient",
    "ImageRenderer",
    "NanoBananaClient",
    "RenderOutcome",
    "extract_image_url",
]
