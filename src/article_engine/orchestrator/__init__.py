# Orchestrator — stage sequencing, failure policy, response assembly
"""
Orchestrator module. Runs collect → draft → spellcheck → render → assemble
for one request. Fatal stages abort with a single error; the image stage
degrades to "no images".
"""

from .assembler import assemble_response, build_geo_highlights
from .pipeline import (
    GenerationOrchestrator,
    ProductCollector,
    TextGenerator,
    flatten_validation_error,
    handle_generate_request,
)

__all__ = [
    "GenerationOrchestrator",
    "ProductCollector",
    "TextGenerator",
    "assemble_response",
    "build_geo_highlights",
    "flatten_validation_error",
    "handle_generate_request",
]
