"""Generation Orchestrator — sequences the pipeline and owns the failure policy.

Stages:
    validating → collecting_product → drafting → spellchecking
    → rendering (optional) → assembling → done

Any error in validating, collecting_product, drafting or spellchecking
moves the run to ``failed`` and is raised as a GenerationError; no partial
article is returned. Rendering is best-effort and never fails the run.

Usage:
    orchestrator = GenerationOrchestrator()
    response = await orchestrator.generate(request)

    status, body = await handle_generate_request(payload)
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Protocol

from pydantic import ValidationError

from src.common.config import Settings, settings as default_settings
from src.common.errors import (
    AffiliateLinkError,
    CollectionError,
    DraftingError,
    GenerationError,
    SpellcheckError,
)
from src.common.logging import setup_logging
from src.common.models import (
    DraftArticle,
    FATAL_STAGES,
    GeneratedImage,
    GenerationRequest,
    GenerationResponse,
    PipelineStage,
    ProductSnapshot,
)
from src.article_engine.affiliate import build_affiliate_links
from src.article_engine.content_writer import ArticleDrafter, DraftInstructions
from src.article_engine.image_renderer import ImageRenderer, NanoBananaClient
from src.article_engine.product_collector import ProductSnapshotCollector
from src.article_engine.spellcheck import LanguageToolChecker, SpellcheckStage

from .assembler import assemble_response

logger = setup_logging(module_name="orchestrator")

# Error raised for an unexpected collaborator exception in a fatal stage
STAGE_ERRORS: dict[PipelineStage, type[GenerationError]] = {
    PipelineStage.VALIDATING: AffiliateLinkError,
    PipelineStage.COLLECTING_PRODUCT: CollectionError,
    PipelineStage.DRAFTING: DraftingError,
    PipelineStage.SPELLCHECKING: SpellcheckError,
}


class ProductCollector(Protocol):
    """Product collaborator contract (blocking; run in a worker thread)."""

    def fetch(self, product_url: str) -> ProductSnapshot:
        ...


class TextGenerator(Protocol):
    """Drafting collaborator contract."""

    async def draft(
        self, instructions: DraftInstructions, product: ProductSnapshot
    ) -> DraftArticle:
        ...


class GenerationOrchestrator:
    """Runs one generation request start to finish.

    Collaborators are injectable; defaults are built from settings. The
    image stage is skipped when no image API key is configured.
    """

    def __init__(
        self,
        collector: ProductCollector | None = None,
        drafter: TextGenerator | None = None,
        spellcheck: SpellcheckStage | None = None,
        renderer: ImageRenderer | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or default_settings
        self.collector = collector or ProductSnapshotCollector(self.settings.scraper)
        self.drafter = drafter or ArticleDrafter(settings=self.settings)
        self.spellcheck = spellcheck or SpellcheckStage(
            LanguageToolChecker(self.settings.spellcheck)
        )
        self.renderer = renderer or ImageRenderer(
            NanoBananaClient.from_env(self.settings.images),
            max_concurrency=self.settings.images.max_concurrency,
        )
        self.stage = PipelineStage.VALIDATING
        self.stage_history: list[PipelineStage] = []

    def _enter(self, stage: PipelineStage) -> None:
        self.stage = stage
        self.stage_history.append(stage)
        logger.info("Stage: %s", stage.value)

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Run the pipeline for a validated request.

        Any exception raised while in one of FATAL_STAGES fails the run.
        Exceptions that are not GenerationErrors are wrapped in the error
        type of that stage.

        Raises:
            GenerationError: On any fatal-stage failure.
        """
        self.stage_history = []
        try:
            return await self._run(request)
        except GenerationError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            if self.stage not in FATAL_STAGES:
                raise
            error_cls = STAGE_ERRORS.get(self.stage, GenerationError)
            error = error_cls(f"{self.stage.value} failed: {exc}")
            self._fail(error)
            raise error from exc

    def _fail(self, exc: GenerationError) -> None:
        failed_at = self.stage
        exc.stage = failed_at
        self._enter(PipelineStage.FAILED)
        logger.error("Generation failed during %s: %s", failed_at.value, exc)

    async def _run(self, request: GenerationRequest) -> GenerationResponse:
        product_url = request.product_url_str

        # Product fetch runs in a worker thread while affiliate links are built
        self._enter(PipelineStage.VALIDATING)
        loop = asyncio.get_running_loop()
        product_future = loop.run_in_executor(None, self.collector.fetch, product_url)
        try:
            affiliate_links = build_affiliate_links(request.affiliate_config, product_url)
        except Exception:
            product_future.cancel()
            raise

        self._enter(PipelineStage.COLLECTING_PRODUCT)
        product = await self._await_product(product_future)

        self._enter(PipelineStage.DRAFTING)
        instructions = DraftInstructions(
            target_language=request.target_language,
            target_region=request.target_region,
            persona=request.persona,
            tone=request.tone,
            minimum_word_count=request.minimum_word_count,
            seo_keywords=request.seo_keywords,
            include_images=request.include_images,
            additional_notes=request.additional_notes,
            affiliate_links=affiliate_links,
        )
        draft = await self.drafter.draft(instructions, product)

        self._enter(PipelineStage.SPELLCHECKING)
        article, adjustments = await self.spellcheck.run(draft, request.target_language)

        images = await self._render_images(request, article.image_prompts)

        self._enter(PipelineStage.ASSEMBLING)
        response = assemble_response(request, product, article, adjustments, images)

        self._enter(PipelineStage.DONE)
        return response

    async def _await_product(self, product_future: asyncio.Future) -> ProductSnapshot:
        try:
            return await product_future
        except GenerationError:
            raise
        except Exception as exc:
            raise CollectionError(f"Product collection failed: {exc}") from exc

    async def _render_images(
        self, request: GenerationRequest, prompts: list[str]
    ) -> list[GeneratedImage]:
        if not request.include_images or not prompts:
            return []
        if not self.renderer.available:
            logger.warning("Image service not configured, skipping image stage")
            return []

        self._enter(PipelineStage.RENDERING)
        try:
            images = await self.renderer.render_all(prompts)
        except Exception as exc:
            logger.warning("Image stage skipped after error: %s", exc)
            return []

        logger.info("Rendered %d of %d images", len(images), len(prompts))
        return images


# --- Request handling shared by the HTTP API and the CLI ---


def flatten_validation_error(exc: ValidationError) -> dict[str, Any]:
    """Group validation messages by top-level field.

    Returns:
        {"formErrors": [...], "fieldErrors": {field: [...]}}
    """
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for error in json.loads(exc.json(include_url=False)):
        loc = error.get("loc") or []
        message = error.get("msg", "Invalid value")
        if loc:
            field_errors.setdefault(str(loc[0]), []).append(message)
        else:
            form_errors.append(message)
    return {"formErrors": form_errors, "fieldErrors": field_errors}


async def handle_generate_request(
    payload: Any,
    orchestrator: GenerationOrchestrator | None = None,
) -> tuple[int, dict[str, Any]]:
    """Validate a JSON payload and run the pipeline.

    Returns:
        (HTTP status, response body). Failures produce ``{"error": ...}``
        with status 400.
    """
    try:
        request = GenerationRequest.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Rejected invalid request: %d errors", exc.error_count())
        return 400, {"error": flatten_validation_error(exc)}

    orchestrator = orchestrator or GenerationOrchestrator()
    try:
        response = await orchestrator.generate(request)
    except GenerationError as exc:
        return 400, {"error": exc.message}

    return 200, response.to_dict()
