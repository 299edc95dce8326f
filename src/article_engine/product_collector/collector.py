"""Product snapshot collector.

Fetches a product page and extracts the facts the drafting prompt needs:
title, description, price, brand, specs and image URLs.

Sources, in priority order:
    1. JSON-LD ``Product`` blocks (schema.org)
    2. OpenGraph / product meta tags
    3. Plain ``<title>`` and ``<meta name="description">``

Usage:
    collector = ProductSnapshotCollector()
    snapshot = collector.fetch("https://example.com/p")
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from src.common.config import ScraperSettings, settings
from src.common.errors import CollectionError
from src.common.logging import setup_logging
from src.common.models import ProductSnapshot

from .http_client import HTTPClient

logger = setup_logging(module_name="product_collector")

MAX_IMAGES = 8
MAX_SPECS = 30


class ProductSnapshotCollector:
    """Collects product facts from a product page URL."""

    def __init__(
        self,
        config: ScraperSettings | None = None,
        client: HTTPClient | None = None,
    ) -> None:
        self.config = config or settings.scraper
        self._client = client or HTTPClient(self.config)

    def fetch(self, product_url: str) -> ProductSnapshot:
        """Fetch and parse a product page.

        Raises:
            CollectionError: If the page cannot be fetched or parsed.
        """
        try:
            resp = self._client.get(product_url)
        except requests.RequestException as exc:
            raise CollectionError(f"Failed to fetch product page: {exc}") from exc

        try:
            snapshot = parse_product_html(resp.text, product_url)
        except Exception as exc:
            raise CollectionError(f"Failed to parse product page: {exc}") from exc

        logger.info("Collected product snapshot: %s", snapshot.title or product_url)
        return snapshot


def parse_product_html(html: str, product_url: str) -> ProductSnapshot:
    """Extract a ProductSnapshot from raw HTML."""
    soup = BeautifulSoup(html, "lxml")
    ld = _find_json_ld_product(soup)

    title = (
        _as_text(ld.get("name"))
        or _meta(soup, "og:title")
        or (soup.title.get_text(strip=True) if soup.title else "")
    )
    description = (
        _as_text(ld.get("description"))
        or _meta(soup, "og:description")
        or _meta(soup, "description")
    )

    offers = ld.get("offers") or {}
    if isinstance(offers, list):
        offers = offers[0] if offers else {}
    if not isinstance(offers, dict):
        offers = {}

    price = (
        _as_text(offers.get("price") or offers.get("lowPrice"))
        or _meta(soup, "product:price:amount")
        or _meta(soup, "og:price:amount")
    )
    currency = (
        _as_text(offers.get("priceCurrency"))
        or _meta(soup, "product:price:currency")
        or _meta(soup, "og:price:currency")
    )

    brand = ld.get("brand") or ""
    if isinstance(brand, dict):
        brand = brand.get("name", "")
    brand = _as_text(brand) or _meta(soup, "product:brand")

    return ProductSnapshot(
        url=product_url,
        title=title,
        description=description,
        price=price,
        currency=currency,
        brand=brand,
        specs=_extract_specs(ld, soup),
        images=_extract_images(ld, soup, product_url),
    )


def _find_json_ld_product(soup: BeautifulSoup) -> dict[str, Any]:
    """Return the first schema.org Product object found in JSON-LD scripts."""
    for script in soup.find_all("script", type="application/ld+json"):
        try:
            data = json.loads(script.string or "")
        except json.JSONDecodeError:
            logger.debug("Skipping malformed JSON-LD block")
            continue

        candidates = data if isinstance(data, list) else [data]
        for item in list(candidates):
            if isinstance(item, dict) and "@graph" in item:
                candidates.extend(item["@graph"])
        for item in candidates:
            if not isinstance(item, dict):
                continue
            kind = item.get("@type")
            kinds = kind if isinstance(kind, list) else [kind]
            if "Product" in kinds:
                return item
    return {}


def _meta(soup: BeautifulSoup, name: str) -> str:
    el = soup.find("meta", attrs={"property": name}) or soup.find(
        "meta", attrs={"name": name}
    )
    if el and el.get("content"):
        return el["content"].strip()
    return ""


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _extract_specs(ld: dict[str, Any], soup: BeautifulSoup) -> dict[str, str]:
    """Collect specs from JSON-LD additionalProperty, then spec tables."""
    specs: dict[str, str] = {}

    for prop in ld.get("additionalProperty") or []:
        if isinstance(prop, dict) and prop.get("name"):
            specs[_as_text(prop["name"])] = _as_text(prop.get("value"))

    for key in ("sku", "gtin13", "mpn", "model", "color", "material"):
        if ld.get(key) and key not in specs:
            specs[key] = _as_text(ld[key])

    if not specs:
        for row in soup.select("table tr"):
            cells = row.find_all(["th", "td"])
            if len(cells) == 2:
                key = cells[0].get_text(" ", strip=True)
                value = cells[1].get_text(" ", strip=True)
                if key and value:
                    specs[key] = value
            if len(specs) >= MAX_SPECS:
                break

    return specs


def _extract_images(
    ld: dict[str, Any], soup: BeautifulSoup, product_url: str
) -> list[str]:
    images: list[str] = []

    ld_images = ld.get("image") or []
    if isinstance(ld_images, (str, dict)):
        ld_images = [ld_images]
    for img in ld_images:
        url = img.get("url", "") if isinstance(img, dict) else _as_text(img)
        if url:
            images.append(urljoin(product_url, url))

    og_image = _meta(soup, "og:image")
    if og_image:
        images.append(urljoin(product_url, og_image))

    # Dedupe, keep order
    seen: set[str] = set()
    unique = [u for u in images if not (u in seen or seen.add(u))]
    return unique[:MAX_IMAGES]
