"""Image Renderer — best-effort, bounded-concurrency image rendering.

A fixed pool of workers drains a queue of prompts; each prompt's outcome
is captured on its own, so one failing render never discards the others.
The stage never raises: failures are logged and dropped from the output.

Usage:
    renderer = ImageRenderer(NanoBananaClient.from_env(), max_concurrency=2)
    images = await renderer.render_all(draft.image_prompts)
"""

from __future__ import annotations

import asyncio

from src.common.errors import RenderingError
from src.common.logging import setup_logging
from src.common.models import GeneratedImage

from .models import ImageClient, RenderOutcome

logger = setup_logging(module_name="image_renderer")

DEFAULT_MAX_CONCURRENCY = 2


class ImageRenderer:
    """Renders image prompts with at most ``max_concurrency`` calls in flight."""

    def __init__(
        self,
        client: ImageClient | None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        self._client = client
        self.max_concurrency = max(1, max_concurrency)

    @property
    def available(self) -> bool:
        """False when the image service is not configured."""
        return self._client is not None

    async def render_outcomes(self, prompts: list[str]) -> list[RenderOutcome]:
        """Render every prompt and return one outcome per prompt, in prompt order."""
        if not prompts or self._client is None:
            return []

        queue: asyncio.Queue[tuple[int, str]] = asyncio.Queue()
        for item in enumerate(prompts):
            queue.put_nowait(item)

        outcomes: list[RenderOutcome | None] = [None] * len(prompts)

        async def worker() -> None:
            while True:
                try:
                    index, prompt = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                outcomes[index] = await self._render_one(index, prompt)

        workers = min(self.max_concurrency, len(prompts))
        await asyncio.gather(*(worker() for _ in range(workers)))
        return [o for o in outcomes if o is not None]

    async def render_all(self, prompts: list[str]) -> list[GeneratedImage]:
        """Render prompts, keeping only the successes."""
        outcomes = await self.render_outcomes(prompts)
        failed = [o for o in outcomes if not o.ok]
        if failed:
            logger.warning(
                "Image rendering: %d of %d prompts failed", len(failed), len(outcomes)
            )
        return [o.image for o in outcomes if o.image is not None]

    async def _render_one(self, index: int, prompt: str) -> RenderOutcome:
        try:
            image_url = await self._client.render(prompt)
            image = GeneratedImage(image_url=image_url, prompt=prompt)
        except Exception as exc:
            logger.warning("Image render %d failed: %s", index, exc)
            return RenderOutcome(
                index=index,
                prompt=prompt,
                error=RenderingError(f"Image render failed for prompt {index}: {exc}"),
            )

        return RenderOutcome(index=index, prompt=prompt, image=image)
