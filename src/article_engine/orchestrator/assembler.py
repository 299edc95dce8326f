"""Response assembly: GEO/SEO highlights + final response shape."""

from __future__ import annotations

from src.common.models import (
    DraftArticle,
    GeneratedImage,
    GenerationRequest,
    GenerationResponse,
    ProductSnapshot,
)


def build_geo_highlights(
    target_region: str,
    seo_keywords: list[str],
    additional_notes: str = "",
) -> list[str]:
    """Region line, keyword line, then the notes when supplied."""
    highlights = [
        f"Optimized for {target_region} audience",
        f"Keywords: {', '.join(seo_keywords)}",
    ]
    notes = (additional_notes or "").strip()
    if notes:
        highlights.append(notes)
    return highlights


def assemble_response(
    request: GenerationRequest,
    product: ProductSnapshot,
    article: DraftArticle,
    spelling_adjustments: list[str],
    images: list[GeneratedImage] | None = None,
) -> GenerationResponse:
    """Merge stage outputs into the final response.

    Affiliate blocks travel inside the article as drafted. ``images`` is
    left unset unless at least one image was rendered.
    """
    return GenerationResponse(
        product=product,
        article=article,
        spelling_adjustments=list(spelling_adjustments),
        geo_highlights=build_geo_highlights(
            request.target_region,
            request.seo_keywords,
            request.additional_notes,
        ),
        images=list(images) if images else None,
    )
