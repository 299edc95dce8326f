"""Spellcheck Stage — corrects every free-text field of a draft.

Six independent invocations run concurrently: section bodies, FAQs
(serialized as "heading\\nbody"), title, meta description, excerpt and
call-to-action. Results are reassembled in that fixed order regardless of
completion order. Any failing invocation fails the whole stage.

Usage:
    stage = SpellcheckStage(LanguageToolChecker())
    corrected, adjustments = await stage.run(draft, "pt-BR")
"""

from __future__ import annotations

import asyncio

from src.common.errors import SpellcheckError
from src.common.logging import setup_logging
from src.common.models import ArticleSection, DraftArticle

from .models import BatchResult, SpellChecker

logger = setup_logging(module_name="spellcheck")

FAQ_SEPARATOR = "\n"

# Adjustment order in the response
INVOCATION_ORDER = ("sections", "faqs", "title", "meta", "excerpt", "cta")


def serialize_faq(faq: ArticleSection) -> str:
    return f"{faq.heading}{FAQ_SEPARATOR}{faq.body}"


def split_faq(corrected: str, original: ArticleSection) -> ArticleSection:
    """Split a corrected "heading\\nbody" string back into a FAQ.

    The first newline separates heading and body, so rejoining them gives
    back the corrected text. Without a newline the original heading is kept
    and the corrected text becomes the body.
    """
    if FAQ_SEPARATOR not in corrected:
        return ArticleSection(heading=original.heading, body=corrected)

    heading, body = corrected.split(FAQ_SEPARATOR, 1)
    return ArticleSection(heading=heading, body=body)


class SpellcheckStage:
    """Coordinates spellcheck invocations over a DraftArticle."""

    def __init__(self, checker: SpellChecker):
        self._checker = checker

    async def correct_blocks(self, blocks: list[str], language: str) -> BatchResult:
        """Correct blocks in order; output has the same length and order.

        Args:
            blocks: Text blocks to correct
            language: Target language code (e.g. "pt-BR")

        Returns:
            BatchResult with corrected blocks and adjustments in input order
        """
        result = BatchResult()
        for block in blocks:
            checked = await self._checker.correct(block, language)
            result.corrected.append(checked.corrected_text)
            result.adjustments.extend(checked.adjustments)
        return result

    async def run(
        self, draft: DraftArticle, language: str
    ) -> tuple[DraftArticle, list[str]]:
        """Spellcheck every text field of the draft.

        Returns:
            (corrected article, ordered adjustments)

        Raises:
            SpellcheckError: If any invocation fails.
        """
        jobs = {
            "sections": [s.body for s in draft.sections],
            "faqs": [serialize_faq(f) for f in draft.faqs],
            "title": [draft.title],
            "meta": [draft.meta_description],
            "excerpt": [draft.excerpt],
            "cta": [draft.call_to_action],
        }
        tasks = {
            name: asyncio.create_task(self.correct_blocks(jobs[name], language))
            for name in INVOCATION_ORDER
        }

        try:
            await asyncio.gather(*tasks.values())
        except Exception as exc:
            for task in tasks.values():
                task.cancel()
            await asyncio.gather(*tasks.values(), return_exceptions=True)
            logger.error("Spellcheck failed: %s", exc)
            raise SpellcheckError(f"Spellcheck failed: {exc}") from exc

        results = {name: task.result() for name, task in tasks.items()}
        corrected = self._apply(draft, results)
        adjustments = [
            line for name in INVOCATION_ORDER for line in results[name].adjustments
        ]

        logger.info("Spellcheck complete: %d adjustments", len(adjustments))
        return corrected, adjustments

    @staticmethod
    def _apply(draft: DraftArticle, results: dict[str, BatchResult]) -> DraftArticle:
        sections = [
            section.model_copy(update={"body": body})
            for section, body in zip(draft.sections, results["sections"].corrected)
        ]
        faqs = [
            split_faq(text, faq)
            for faq, text in zip(draft.faqs, results["faqs"].corrected)
        ]
        return draft.model_copy(
            update={
                "sections": sections,
                "faqs": faqs,
                "title": results["title"].corrected[0].strip(),
                "meta_description": results["meta"].corrected[0].strip(),
                "excerpt": results["excerpt"].corrected[0].strip(),
                "call_to_action": results["cta"].corrected[0].strip(),
            }
        )
