# Spellcheck — LanguageTool correction of every article text field
"""
Spellcheck module. The stage fans out six invocations (sections, FAQs,
title, meta, excerpt, CTA) and reassembles them in that fixed order.
"""

from .checker import LanguageToolChecker, apply_matches
from .models import BatchResult, SpellChecker, SpellcheckResult
from .stage import INVOCATION_ORDER, SpellcheckStage, serialize_faq, split_faq

__all__ = [
    "BatchResult",
    "INVOCATION_ORDER",
    "LanguageToolChecker",
    "SpellChecker",
    "SpellcheckResult",
    "SpellcheckStage",
    "apply_matches",
    "serialize_faq",
    "split_faq",
]
