"""Affiliate Link Builder — per-platform tracking URLs for a product.

Builds the affiliate link map handed to the drafting prompt. Each
configured platform gets its base URL with the affiliate tag and the
product URL set as query parameters.

Usage:
    links = build_affiliate_links(request.affiliate_config, "https://example.com/p")
    # {"amazon": "https://amzn.to/x?ref=tag123&target=https%3A%2F%2Fexample.com%2Fp"}
"""

from __future__ import annotations

from typing import Mapping
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from src.common.errors import AffiliateLinkError
from src.common.logging import setup_logging
from src.common.models import AffiliateConfigEntry, AffiliatePlatform

logger = setup_logging(module_name="affiliate")

# Query parameter names understood by the tracking redirectors
TAG_PARAM = "ref"
TARGET_PARAM = "target"

AffiliateLinkMap = dict[str, str]

KNOWN_PLATFORMS = frozenset(p.value for p in AffiliatePlatform)


def build_tracked_url(base_url: str, tag: str, product_url: str) -> str:
    """Set the tag and target parameters on a base URL.

    Existing query parameters are kept in order; existing values for the
    tag/target keys are replaced.

    Raises:
        AffiliateLinkError: If the base URL has no scheme or host.
    """
    try:
        parsed = urlparse(base_url.strip())
    except ValueError as exc:
        raise AffiliateLinkError(f"Invalid affiliate base URL: {base_url}") from exc

    if not parsed.scheme or not parsed.netloc:
        raise AffiliateLinkError(f"Invalid affiliate base URL: {base_url}")

    params = [
        (k, v)
        for k, v in parse_qsl(parsed.query, keep_blank_values=True)
        if k not in (TAG_PARAM, TARGET_PARAM)
    ]
    params.append((TAG_PARAM, tag))
    params.append((TARGET_PARAM, product_url))

    return urlunparse(parsed._replace(query=urlencode(params)))


def build_affiliate_links(
    affiliate_config: Mapping[str, AffiliateConfigEntry | dict],
    product_url: str,
) -> AffiliateLinkMap:
    """Build the platform → tracking URL map for a product.

    Platforms missing a base URL or tag are skipped. Keys outside
    AffiliatePlatform are still linked but logged as unknown.

    Args:
        affiliate_config: Mapping of platform key to its settings
        product_url: Product page URL used as the redirect target

    Returns:
        Mapping of platform key to tracking URL, in configuration order
    """
    links: AffiliateLinkMap = {}

    for platform, entry in affiliate_config.items():
        if platform not in KNOWN_PLATFORMS:
            logger.warning("Unknown affiliate platform %s, building link anyway", platform)
        if isinstance(entry, dict):
            entry = AffiliateConfigEntry.model_validate(entry)

        base_url = (entry.base_url or "").strip()
        tag = (entry.tag or "").strip()
        if not base_url or not tag:
            logger.debug("Skipping affiliate platform %s: incomplete config", platform)
            continue

        links[platform] = build_tracked_url(base_url, tag, product_url)

    logger.info("Built %d affiliate links", len(links))
    return links
