"""CLI entry point for article generation.

Usage:
    python -m src.article_engine.orchestrator.main --input request.json
    python -m src.article_engine.orchestrator.main --input request.json \
        --output article.json --no-images --provider anthropic
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from src.common.config import Settings
from src.common.logging import setup_logging

from .pipeline import GenerationOrchestrator, handle_generate_request

logger = setup_logging(module_name="orchestrator.main")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a review article from a product URL")
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to a generation request JSON file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the response JSON here instead of stdout",
    )
    parser.add_argument(
        "--no-images",
        action="store_true",
        help="Skip image rendering regardless of the request",
    )
    parser.add_argument(
        "--provider",
        choices=["openai", "anthropic"],
        help="LLM provider (default: from settings)",
    )

    args = parser.parse_args(argv)

    if not args.input.exists():
        logger.error("Request file not found: %s", args.input)
        return 1

    with open(args.input, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as exc:
            logger.error("Request file is not valid JSON: %s", exc)
            return 1

    if args.no_images and isinstance(payload, dict):
        payload["includeImages"] = False

    settings = Settings.load()
    if args.provider:
        settings.llm.provider = args.provider

    status, body = asyncio.run(
        handle_generate_request(payload, GenerationOrchestrator(settings=settings))
    )
    rendered = json.dumps(body, ensure_ascii=False, indent=2)

    if status != 200:
        logger.error("Generation failed: %s", json.dumps(body["error"], ensure_ascii=False))
        return 1

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(rendered)
        logger.info("Article written to: %s", args.output)
    else:
        print(rendered)

    return 0


if __name__ == "__main__":
    sys.exit(main())
