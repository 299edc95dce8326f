"""FastAPI HTTP API for the article engine.

Run with: uvicorn src.article_engine.api:app --reload
"""

from __future__ import annotations

import asyncio
import json

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.common.logging import setup_logging
from src.article_engine.orchestrator import GenerationOrchestrator, handle_generate_request

logger = setup_logging(module_name="api")

# Interval between client-disconnect checks while a run is in flight
DISCONNECT_POLL_SECONDS = 0.5

app = FastAPI(title="article-engine", version="0.1.0")


def get_orchestrator() -> GenerationOrchestrator:
    return GenerationOrchestrator()


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/generate")
async def generate(request: Request):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse({"error": "Request body must be valid JSON"}, status_code=400)

    task = asyncio.create_task(handle_generate_request(payload, get_orchestrator()))
    while not task.done():
        done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
        if done:
            break
        if await request.is_disconnected():
            logger.warning("Client disconnected, cancelling generation")
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            return JSONResponse({"error": "Client disconnected"}, status_code=499)

    status, body = task.result()
    return JSONResponse(body, status_code=status)
