# Content Writer — LLM drafter with strict JSON output + normalization
"""
Content Writer module for drafting review articles.

The drafter sends instructions + product snapshot to GPT or Claude and
normalizes the JSON answer into a DraftArticle with every field present.
"""

from .models import DraftInstructions, LLMProvider, WriterConfig
from .normalizer import normalize_draft
from .prompts import OUTPUT_SCHEMA, SYSTEM_PROMPT, build_article_prompt
from .writer import ArticleDrafter, parse_draft_response

__all__ = [
    "ArticleDrafter",
    "DraftInstructions",
    "LLMProvider",
    "WriterConfig",
    "OUTPUT_SCHEMA",
    "SYSTEM_PROMPT",
    "build_article_prompt",
    "normalize_draft",
    "parse_draft_response",
]
