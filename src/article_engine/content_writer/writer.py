"""Article Drafter — LLM-powered review article drafting.

Sends one structured request (instructions + product snapshot) to the
generative text service and turns its JSON answer into a DraftArticle.
Malformed output is fatal: there is no fallback article and no retry.

Usage:
    drafter = ArticleDrafter()
    draft = await drafter.draft(instructions, snapshot)
"""

from __future__ import annotations

import json

from src.common.config import (
    Settings,
    get_anthropic_api_key,
    get_openai_api_key,
    settings as default_settings,
)
from src.common.errors import DraftingError
from src.common.logging import setup_logging
from src.common.models import DraftArticle, ProductSnapshot

from .models import DraftInstructions, LLMProvider, WriterConfig
from .normalizer import normalize_draft
from .prompts import SYSTEM_PROMPT, build_article_prompt

logger = setup_logging(module_name="content_writer")


def extract_json_text(response_text: str) -> str:
    """Strip markdown code fences around a JSON answer."""
    json_str = response_text.strip()
    if "```json" in json_str:
        json_str = json_str.split("```json")[1].split("```")[0]
    elif json_str.startswith("```"):
        json_str = json_str.split("```")[1].split("```")[0]
    return json_str.strip()


def parse_draft_response(response_text: str) -> DraftArticle:
    """Parse and normalize the text service answer.

    Empty content yields an empty draft.

    Raises:
        DraftingError: If the content is not a JSON object.
    """
    json_str = extract_json_text(response_text or "")
    if not json_str:
        logger.warning("Empty drafting response, using empty article")
        return normalize_draft({})

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse article response from model: %s", exc)
        raise DraftingError("Failed to parse article response from model") from exc

    if not isinstance(data, dict):
        raise DraftingError("Article response from model is not a JSON object")

    return normalize_draft(data)


class ArticleDrafter:
    """Drafts a review article through the configured LLM provider."""

    def __init__(
        self,
        config: WriterConfig | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or default_settings
        self.config = config or WriterConfig(
            provider=LLMProvider(self.settings.llm.provider),
            temperature=self.settings.llm.temperature,
            max_tokens=self.settings.llm.max_tokens,
        )

    @property
    def model(self) -> str:
        if self.config.model:
            return self.config.model
        if self.config.provider == LLMProvider.ANTHROPIC:
            return self.settings.llm.anthropic_model
        return self.settings.llm.openai_model

    async def draft(
        self,
        instructions: DraftInstructions,
        product: ProductSnapshot,
    ) -> DraftArticle:
        """Generate a normalized DraftArticle.

        Raises:
            DraftingError: On service failure or unparseable output.
        """
        user_prompt = build_article_prompt(instructions, product)

        try:
            response_text = await self._call_llm(SYSTEM_PROMPT, user_prompt)
        except DraftingError:
            raise
        except Exception as exc:
            logger.error("Drafting request failed: %s", exc)
            raise DraftingError(f"Article drafting failed: {exc}") from exc

        draft = parse_draft_response(response_text)
        logger.info(
            "Draft generated: '%s' (%d sections, %d faqs, %d image prompts)",
            draft.title,
            len(draft.sections),
            len(draft.faqs),
            len(draft.image_prompts),
        )
        return draft

    # --- LLM Integration ---

    async def _call_llm(self, system_prompt: str, user_prompt: str) -> str:
        """Call the configured LLM provider and return the response text."""
        if self.config.provider == LLMProvider.ANTHROPIC:
            return await self._call_anthropic(system_prompt, user_prompt)
        return await self._call_openai(system_prompt, user_prompt)

    async def _call_openai(self, system_prompt: str, user_prompt: str) -> str:
        """Call OpenAI chat completions in JSON mode."""
        import openai

        client = openai.AsyncOpenAI(api_key=self._api_key(get_openai_api_key))
        async with client:
            response = await client.chat.completions.create(
                model=self.model,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def _call_anthropic(self, system_prompt: str, user_prompt: str) -> str:
        """Call Anthropic Claude messages API."""
        import anthropic

        client = anthropic.AsyncAnthropic(api_key=self._api_key(get_anthropic_api_key))
        async with client:
            response = await client.messages.create(
                model=self.model,
                max_tokens=self.config.max_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=self.config.temperature,
            )

        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )

    @staticmethod
    def _api_key(getter) -> str:
        try:
            return getter()
        except ValueError as exc:
            raise DraftingError(str(exc)) from exc
