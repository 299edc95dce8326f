"""Tests for the image renderer module.

Tests cover:
- Concurrency bound (never more than max_concurrency calls in flight)
- Partial failure keeps the successful images, in prompt order
- Unavailable image service
- Gemini response parsing and client construction
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.common.config import ImageSettings
from src.common.errors import RenderingError
from src.article_engine.image_renderer import (
    DEFAULT_MAX_CONCURRENCY,
    ImageRenderer,
    NanoBananaClient,
    extract_image_url,
)


class CountingClient:
    """Fake image client that records the peak number of in-flight calls."""

    def __init__(self, fail_on: set[str] | None = None, delay: float = 0.01):
        self.fail_on = fail_on or set()
        self.delay = delay
        self.in_flight = 0
        self.peak = 0
        self.calls: list[str] = []

    async def render(self, prompt: str) -> str:
        self.calls.append(prompt)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if prompt in self.fail_on:
                raise RuntimeError("quota exceeded")
            return f"data:image/png;base64,{prompt}"
        finally:
            self.in_flight -= 1


# === Test: Concurrency ===


class TestConcurrency:
    def test_default_is_two(self):
        assert DEFAULT_MAX_CONCURRENCY == 2
        assert ImageRenderer(CountingClient()).max_concurrency == 2

    @pytest.mark.parametrize("count", [0, 1, 2, 3, 5, 8])
    def test_never_more_than_two_in_flight(self, count):
        client = CountingClient()
        prompts = [f"p{i}" for i in range(count)]

        images = asyncio.run(ImageRenderer(client).render_all(prompts))

        assert len(images) == count
        assert client.peak <= 2
        assert sorted(client.calls) == sorted(prompts)
        if count >= 2:
            assert client.peak == 2

    def test_custom_bound(self):
        client = CountingClient()
        asyncio.run(ImageRenderer(client, max_concurrency=3).render_all(
            [f"p{i}" for i in range(7)]
        ))
        assert client.peak == 3

    def test_bound_floor_is_one(self):
        assert ImageRenderer(CountingClient(), max_concurrency=0).max_concurrency == 1


# === Test: Failure handling ===


class TestPartialFailure:
    def test_one_failure_keeps_the_rest(self):
        client = CountingClient(fail_on={"p1"})
        prompts = ["p0", "p1", "p2", "p3"]

        images = asyncio.run(ImageRenderer(client).render_all(prompts))

        assert [image.prompt for image in images] == ["p0", "p2", "p3"]
        assert images[0].image_url == "data:image/png;base64,p0"

    def test_outcomes_record_errors(self):
        client = CountingClient(fail_on={"p0"})

        outcomes = asyncio.run(ImageRenderer(client).render_outcomes(["p0", "p1"]))

        assert [o.index for o in outcomes] == [0, 1]
        assert not outcomes[0].ok
        assert isinstance(outcomes[0].error, RenderingError)
        assert "quota exceeded" in outcomes[0].error.message
        assert outcomes[1].ok
        assert outcomes[1].error is None

    def test_malformed_result_drops_only_that_image(self):
        class MalformedClient(CountingClient):
            async def render(self, prompt: str):
                url = await super().render(prompt)
                return None if prompt == "bad" else url

        renderer = ImageRenderer(MalformedClient())
        images = asyncio.run(renderer.render_all(["ok1", "bad", "ok2"]))
        assert [image.prompt for image in images] == ["ok1", "ok2"]

        outcomes = asyncio.run(renderer.render_outcomes(["bad"]))
        assert isinstance(outcomes[0].error, RenderingError)

    def test_all_fail_gives_empty_list(self):
        client = CountingClient(fail_on={"a", "b"})
        assert asyncio.run(ImageRenderer(client).render_all(["a", "b"])) == []

    def test_order_follows_prompts_not_completion(self):
        class SlowFirst(CountingClient):
            async def render(self, prompt: str) -> str:
                self.delay = 0.05 if prompt == "slow" else 0.0
                return await super().render(prompt)

        images = asyncio.run(ImageRenderer(SlowFirst()).render_all(["slow", "fast1", "fast2"]))
        assert [image.prompt for image in images] == ["slow", "fast1", "fast2"]


class TestUnavailable:
    def test_no_client(self):
        renderer = ImageRenderer(None)
        assert renderer.available is False
        assert asyncio.run(renderer.render_all(["p0"])) == []

    def test_with_client(self):
        assert ImageRenderer(CountingClient()).available is True


# === Test: Nano Banana client ===


class TestNanoBananaClient:
    def test_extract_camel_case_inline_data(self):
        data = {
            "candidates": [{
                "content": {"parts": [
                    {"text": "Here is your image"},
                    {"inlineData": {"mimeType": "image/jpeg", "data": "QUJD"}},
                ]}
            }]
        }
        assert extract_image_url(data) == "data:image/jpeg;base64,QUJD"

    def test_extract_snake_case_inline_data(self):
        data = {"candidates": [{"content": {"parts": [{"inline_data": {"data": "QUJD"}}]}}]}
        assert extract_image_url(data) == "data:image/png;base64,QUJD"

    @pytest.mark.parametrize(
        "data",
        [{}, {"candidates": []}, {"candidates": [{"content": {"parts": [{"text": "no"}]}}]}],
    )
    def test_extract_without_image_raises(self, data):
        with pytest.raises(ValueError):
            extract_image_url(data)

    def test_from_env_without_key(self, monkeypatch):
        monkeypatch.delenv("NANO_BANANA_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        assert NanoBananaClient.from_env() is None

    def test_from_env_with_key(self, monkeypatch):
        monkeypatch.setenv("NANO_BANANA_API_KEY", "key-1")
        client = NanoBananaClient.from_env(ImageSettings())
        assert client is not None
        assert client.api_key == "key-1"

    def test_url(self):
        client = NanoBananaClient(
            "k", ImageSettings(endpoint="https://api.test/v1beta/models/", model="img-model")
        )
        assert client.url == "https://api.test/v1beta/models/img-model:generateContent"

    def test_render_posts_prompt(self):
        response = MagicMock()
        response.json.return_value = {
            "candidates": [{"content": {"parts": [{"inlineData": {"data": "QUJD"}}]}}]
        }

        with patch("httpx.AsyncClient") as mock_client_cls:
            http = mock_client_cls.return_value
            http.__aenter__ = AsyncMock(return_value=http)
            http.__aexit__ = AsyncMock(return_value=False)
            http.post = AsyncMock(return_value=response)

            image_url = asyncio.run(NanoBananaClient("secret", ImageSettings()).render("a desk"))

        assert image_url == "data:image/png;base64,QUJD"
        kwargs = http.post.call_args.kwargs
        assert kwargs["headers"]["x-goog-api-key"] == "secret"
        assert "a desk" in kwargs["json"]["contents"][0]["parts"][0]["text"]
