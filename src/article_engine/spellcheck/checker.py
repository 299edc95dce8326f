"""LanguageTool spell-check client.

Posts text to a LanguageTool ``/v2/check`` endpoint and applies the first
suggested replacement of every match. Each applied change is reported as
a human-readable adjustment line.
"""

from __future__ import annotations

import httpx

from src.common.config import SpellcheckSettings, settings
from src.common.logging import setup_logging

from .models import SpellcheckResult

logger = setup_logging(module_name="spellcheck")


def apply_matches(text: str, matches: list[dict]) -> SpellcheckResult:
    """Apply LanguageTool matches to text.

    Matches without replacements, out-of-range matches, and matches
    overlapping an earlier one are ignored. Adjustments are listed in text
    order.
    """
    accepted: list[tuple[int, int, str]] = []
    adjustments: list[str] = []
    last_end = -1

    for match in sorted(matches, key=lambda m: m.get("offset", 0)):
        replacements = match.get("replacements") or []
        if not replacements:
            continue
        offset = int(match.get("offset", 0))
        length = int(match.get("length", 0))
        if offset < last_end or offset < 0 or offset + length > len(text):
            continue

        replacement = replacements[0].get("value", "")
        original = text[offset:offset + length]
        if replacement == original:
            continue

        accepted.append((offset, length, replacement))
        last_end = offset + length
        message = match.get("message", "").strip()
        line = f'"{original}" → "{replacement}"'
        adjustments.append(f"{line} ({message})" if message else line)

    corrected = text
    for offset, length, replacement in reversed(accepted):
        corrected = corrected[:offset] + replacement + corrected[offset + length:]

    return SpellcheckResult(corrected_text=corrected, adjustments=adjustments)


class LanguageToolChecker:
    """Async LanguageTool client implementing the SpellChecker contract."""

    def __init__(self, config: SpellcheckSettings | None = None) -> None:
        self.config = config or settings.spellcheck

    async def correct(self, text: str, language: str) -> SpellcheckResult:
        """Correct one block of text.

        Blank text is returned unchanged without a request.

        Raises:
            httpx.HTTPError: On network errors or non-2xx status.
        """
        if not text.strip():
            return SpellcheckResult(corrected_text=text)

        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            response = await client.post(
                self.config.api_url,
                data={"text": text, "language": language or "auto"},
            )
            response.raise_for_status()
            data = response.json()

        result = apply_matches(text, data.get("matches", []))
        logger.debug("LanguageTool applied %d corrections", len(result.adjustments))
        return result
