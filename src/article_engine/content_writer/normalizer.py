"""Coercion of the loosely-typed drafting payload into a DraftArticle.

Applied once, right after parsing. Missing or wrongly-typed fields
become empty strings / empty lists so later stages never check for them.
"""

from __future__ import annotations

from typing import Any

from src.common.models import AffiliateBlock, ArticleSection, DraftArticle

TEXT_FIELDS = ("title", "slug", "metaDescription", "excerpt", "callToAction")


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _items(value: Any) -> list[dict]:
    """Return the dict items of a list, or [] if it is not a list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _sections(value: Any) -> list[ArticleSection]:
    return [
        ArticleSection(
            heading=_text(item.get("heading")),
            body=_text(item.get("body")),
        )
        for item in _items(value)
    ]


def _affiliate_blocks(value: Any) -> list[AffiliateBlock]:
    return [
        AffiliateBlock(
            platform=_text(item.get("platform")),
            context=_text(item.get("context")),
            link=_text(item.get("link")),
        )
        for item in _items(value)
    ]


def _image_prompts(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [p.strip() for p in value if isinstance(p, str) and p.strip()]


def normalize_draft(payload: Any) -> DraftArticle:
    """Coerce a parsed payload into the strict DraftArticle shape.

    Args:
        payload: Parsed JSON from the text service (expected to be a dict)

    Returns:
        DraftArticle with every field present
    """
    data = payload if isinstance(payload, dict) else {}
    texts = {name: _text(data.get(name)) for name in TEXT_FIELDS}

    return DraftArticle(
        title=texts["title"],
        slug=texts["slug"],
        meta_description=texts["metaDescription"],
        excerpt=texts["excerpt"],
        sections=_sections(data.get("sections")),
        faqs=_sections(data.get("faqs")),
        call_to_action=texts["callToAction"],
        affiliate_blocks=_affiliate_blocks(data.get("affiliateBlocks")),
        image_prompts=_image_prompts(data.get("imagePrompts")),
    )
