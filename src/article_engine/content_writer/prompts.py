"""System and user prompts for LLM-based review article drafting.

The model must answer with a single JSON object matching OUTPUT_SCHEMA.
Product facts come only from the collected snapshot.
"""

from __future__ import annotations

import json

from src.common.models import ProductSnapshot

from .models import DraftInstructions

SYSTEM_PROMPT = """\
You are an expert affiliate SEO editor crafting long-form product review \
articles optimized for Google Discover and local search intent. \
Always return valid JSON.

Rules:
1. Write entirely in the requested target language, adapted to the target region.
2. Use only product facts present in the provided product data. Never invent prices or specs.
3. Reach at least the requested minimum word count across all section bodies.
4. Work every SEO keyword naturally into headings and body copy.
5. Place affiliate blocks only for platforms present in affiliateLinks, using those exact URLs.
6. Image prompts describe one illustrative image per major section, in English.
"""

# Description of the expected JSON object, included in every request
OUTPUT_SCHEMA = {
    "title": "string — SEO title",
    "slug": "string — url-safe slug",
    "metaDescription": "string — 150-160 characters",
    "excerpt": "string — 1-2 sentence teaser",
    "sections": [{"heading": "string", "body": "string (markdown)"}],
    "faqs": [{"heading": "question", "body": "answer"}],
    "callToAction": "string",
    "affiliateBlocks": [
        {"platform": "affiliate platform key", "context": "string", "link": "url"}
    ],
    "imagePrompts": ["string"],
}


def build_article_prompt(
    instructions: DraftInstructions,
    product: ProductSnapshot,
) -> str:
    """Build the JSON user message for a drafting request.

    Args:
        instructions: Editorial instructions for this request
        product: Product facts from the collector

    Returns:
        JSON-encoded user prompt
    """
    return json.dumps(
        {
            "instructions": instructions.to_prompt_dict(),
            "product": product.model_dump(mode="json", by_alias=True),
            "outputSchema": OUTPUT_SCHEMA,
        },
        ensure_ascii=False,
    )
