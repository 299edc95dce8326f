# Common utilities and shared modules
"""
Shared components used by every pipeline stage:
- Data models (Pydantic schemas)
- Error taxonomy
- Logging configuration
- Project configuration
"""

from .config import settings, Settings, PROJECT_ROOT
from .errors import (
    AffiliateLinkError,
    CollectionError,
    DraftingError,
    GenerationError,
    RenderingError,
    SpellcheckError,
)
from .logging import setup_logging

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "AffiliateLinkError",
    "CollectionError",
    "DraftingError",
    "GenerationError",
    "RenderingError",
    "SpellcheckError",
    "setup_logging",
]
