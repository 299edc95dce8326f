# Article Engine: product URL → publish-ready review article
"""
Generation pipeline modules:
- affiliate: affiliate tracking link construction
- product_collector: product fact scraping
- content_writer: LLM-powered article drafting + normalization
- spellcheck: LanguageTool-backed correction of every text field
- image_renderer: bounded-concurrency section image rendering
- orchestrator: stage sequencing, failure policy, response assembly
- api: FastAPI inbound surface
"""
