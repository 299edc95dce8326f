"""Nano Banana (Gemini image model) rendering client."""

from __future__ import annotations

import httpx

from src.common.config import ImageSettings, get_image_api_key, settings
from src.common.logging import setup_logging

logger = setup_logging(module_name="image_renderer")


class NanoBananaClient:
    """Renders a prompt through the Gemini ``generateContent`` endpoint.

    The rendered image is returned as a ``data:`` URL built from the first
    inline image part of the response.
    """

    def __init__(self, api_key: str, config: ImageSettings | None = None) -> None:
        self.api_key = api_key
        self.config = config or settings.images

    @classmethod
    def from_env(cls, config: ImageSettings | None = None) -> NanoBananaClient | None:
        """Build a client from the environment, or None when no key is set."""
        api_key = get_image_api_key()
        if not api_key:
            return None
        return cls(api_key, config)

    @property
    def url(self) -> str:
        return f"{self.config.endpoint.rstrip('/')}/{self.config.model}:generateContent"

    async def render(self, prompt: str) -> str:
        """Render one prompt.

        Raises:
            httpx.HTTPError: On network errors or non-2xx status.
            ValueError: If the response carries no image.
        """
        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            response = await client.post(
                self.url,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.api_key,
                },
                json={
                    "contents": [{"parts": [{"text": f"Generate an image: {prompt}"}]}],
                    "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
                },
            )
            response.raise_for_status()
            data = response.json()

        image_url = extract_image_url(data)
        logger.info("Image rendered for prompt: %s", prompt[:50])
        return image_url


def extract_image_url(data: dict) -> str:
    """Return a data URL for the first inline image in a Gemini response."""
    for candidate in data.get("candidates") or []:
        parts = (candidate.get("content") or {}).get("parts") or []
        for part in parts:
            inline = part.get("inlineData") or part.get("inline_data")
            if inline and inline.get("data"):
                mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
                return f"data:{mime_type};base64,{inline['data']}"
    raise ValueError("Image response contained no image data")
