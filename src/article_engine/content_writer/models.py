"""Data models for the content writer module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass
class WriterConfig:
    """Configuration for the article drafter."""
    provider: LLMProvider = LLMProvider.OPENAI
    model: str = ""  # Empty = use default from settings
    temperature: float = 0.6
    max_tokens: int = 8192


@dataclass
class DraftInstructions:
    """Editorial instructions sent alongside the product snapshot."""
    target_language: str
    target_region: str
    persona: str
    tone: str
    minimum_word_count: int
    seo_keywords: list[str]
    include_images: bool = True
    additional_notes: str = ""
    affiliate_links: dict[str, str] = field(default_factory=dict)

    def to_prompt_dict(self) -> dict:
        """camelCase view used inside the JSON prompt."""
        return {
            "targetLanguage": self.target_language,
            "targetRegion": self.target_region,
            "persona": self.persona,
            "tone": self.tone,
            "minimumWordCount": self.minimum_word_count,
            "seoKeywords": list(self.seo_keywords),
            "includeImages": self.include_images,
            "additionalNotes": self.additional_notes,
            "affiliateLinks": dict(self.affiliate_links),
        }
