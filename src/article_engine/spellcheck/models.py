"""Data models for the spellcheck module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class SpellcheckResult:
    """Corrected text for one block plus the changes made."""
    corrected_text: str
    adjustments: list[str] = field(default_factory=list)


@dataclass
class BatchResult:
    """Corrected blocks (same length and order as the input) plus changes."""
    corrected: list[str] = field(default_factory=list)
    adjustments: list[str] = field(default_factory=list)


class SpellChecker(Protocol):
    """Spell-check collaborator contract."""

    async def correct(self, text: str, language: str) -> SpellcheckResult:
        ...
