"""Error taxonomy for the generation pipeline.

Fatal errors abort the run and surface as a single message. RenderingError
is recorded by the image stage and never propagates past it.
"""

from __future__ import annotations

from .models import PipelineStage


class GenerationError(Exception):
    """Base class for pipeline errors, tagged with the stage that raised."""

    stage: PipelineStage = PipelineStage.FAILED

    def __init__(self, message: str, stage: PipelineStage | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    @property
    def message(self) -> str:
        return str(self)


class AffiliateLinkError(GenerationError):
    """An affiliate base URL could not be parsed."""
    stage = PipelineStage.VALIDATING


class CollectionError(GenerationError):
    """Product facts could not be fetched or parsed."""
    stage = PipelineStage.COLLECTING_PRODUCT


class DraftingError(GenerationError):
    """The text service failed or returned unparseable output."""
    stage = PipelineStage.DRAFTING


class SpellcheckError(GenerationError):
    """A spellcheck invocation failed."""
    stage = PipelineStage.SPELLCHECKING


class RenderingError(GenerationError):
    """An image render failed. Non-fatal."""
    stage = PipelineStage.RENDERING
