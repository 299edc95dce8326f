"""Shared Pydantic data models for the review article engine.

These models define the data contracts between the pipeline stages
and the inbound surfaces (HTTP API, CLI). Wire format is camelCase JSON;
attributes are snake_case. All stages import from here.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Enums ===

class AffiliatePlatform(str, Enum):
    """Affiliate platforms offered in the editor form."""
    AMAZON = "amazon"
    MERCADO_LIVRE = "mercadoLivre"
    SHOPEE = "shopee"
    MAGALU = "magalu"
    CLICKBANK = "clickbank"
    HOTMART = "hotmart"
    EDUZZ = "eduzz"
    KIWIFY = "kiwify"
    BRAIP = "braip"


class PipelineStage(str, Enum):
    """States of a single generation run."""
    VALIDATING = "validating"
    COLLECTING_PRODUCT = "collecting_product"
    DRAFTING = "drafting"
    SPELLCHECKING = "spellchecking"
    RENDERING = "rendering"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"


# Stages whose errors abort the request
FATAL_STAGES = frozenset({
    PipelineStage.VALIDATING,
    PipelineStage.COLLECTING_PRODUCT,
    PipelineStage.DRAFTING,
    PipelineStage.SPELLCHECKING,
})


# === Request ===

_HTTP_URL = TypeAdapter(HttpUrl)


class AffiliateConfigEntry(_CamelModel):
    """Affiliate settings for one platform. Either field may be missing."""
    base_url: str | None = None
    tag: str | None = None


class GenerationRequest(_CamelModel):
    """Validated input for one article generation run."""
    product_url: str
    target_language: str = Field(min_length=2)
    target_region: str = Field(min_length=2)
    seo_keywords: list[str] = Field(min_length=1)
    persona: str = Field(min_length=2)
    tone: str = Field(min_length=2)
    minimum_word_count: int = Field(ge=400, le=4000)
    include_images: bool = True
    affiliate_config: dict[str, AffiliateConfigEntry] = Field(default_factory=dict)
    additional_notes: str = ""

    @field_validator("product_url")
    @classmethod
    def _check_product_url(cls, value: str) -> str:
        # Validated as an http(s) URL but kept as typed
        value = value.strip()
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as exc:
            raise ValueError(exc.errors()[0]["msg"]) from exc
        return value

    @field_validator("seo_keywords")
    @classmethod
    def _strip_keywords(cls, value: list[str]) -> list[str]:
        keywords = [k.strip() for k in value if k and k.strip()]
        if not keywords:
            raise ValueError("at least one non-empty SEO keyword is required")
        return keywords

    @field_validator("additional_notes", mode="before")
    @classmethod
    def _notes_default(cls, value: Any) -> str:
        return value or ""

    @property
    def product_url_str(self) -> str:
        return self.product_url


# === Collaborator outputs ===

class ProductSnapshot(_CamelModel):
    """Product facts as returned by the collector."""
    url: str
    title: str = ""
    description: str = ""
    price: str = ""
    currency: str = ""
    brand: str = ""
    specs: dict[str, str] = Field(default_factory=dict)
    images: list[str] = Field(default_factory=list)


class ArticleSection(_CamelModel):
    """A heading/body pair used for both sections and FAQs."""
    heading: str = ""
    body: str = ""


class AffiliateBlock(_CamelModel):
    """A drafted paragraph-level affiliate placement."""
    platform: str = ""
    context: str = ""
    link: str = ""


class DraftArticle(_CamelModel):
    """Article as drafted by the text service, after normalization.

    Every field is always present. The same shape carries the corrected
    article once spellcheck has run.
    """
    title: str = ""
    slug: str = ""
    meta_description: str = ""
    excerpt: str = ""
    sections: list[ArticleSection] = Field(default_factory=list)
    faqs: list[ArticleSection] = Field(default_factory=list)
    call_to_action: str = ""
    affiliate_blocks: list[AffiliateBlock] = Field(default_factory=list)
    image_prompts: list[str] = Field(default_factory=list)


class GeneratedImage(_CamelModel):
    """One successfully rendered image."""
    image_url: str
    prompt: str


# === Response ===

class GenerationResponse(_CamelModel):
    """Final response of a successful run."""
    product: ProductSnapshot
    article: DraftArticle
    spelling_adjustments: list[str] = Field(default_factory=list)
    geo_highlights: list[str] = Field(default_factory=list)
    images: list[GeneratedImage] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to camelCase JSON, omitting ``images`` when absent."""
        data = self.model_dump(mode="json", by_alias=True)
        if not self.images:
            data.pop("images", None)
        return data
