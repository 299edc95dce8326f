"""Data models for the image renderer module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from src.common.errors import RenderingError
from src.common.models import GeneratedImage


@dataclass
class RenderOutcome:
    """Result of rendering one prompt: an image or the error that prevented it."""
    index: int
    prompt: str
    image: GeneratedImage | None = None
    error: RenderingError | None = None

    @property
    def ok(self) -> bool:
        return self.image is not None


class ImageClient(Protocol):
    """Image rendering collaborator contract. Returns the image URL."""

    async def render(self, prompt: str) -> str:
        ...
