# Product Collector — product page → ProductSnapshot
"""
Product collector module. Fetches a product page and extracts the
facts forwarded to the drafting prompt (JSON-LD, OpenGraph, meta tags).
"""

from .collector import ProductSnapshotCollector, parse_product_html
from .http_client import HTTPClient

__all__ = [
    "HTTPClient",
    "ProductSnapshotCollector",
    "parse_product_html",
]
