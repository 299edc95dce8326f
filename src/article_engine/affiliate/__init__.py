# Affiliate — tracking URL construction per platform
"""
Affiliate module mapping affiliate configuration + product URL to
per-platform tracking URLs. Pure: no I/O.
"""

from .builder import (
    KNOWN_PLATFORMS,
    AffiliateLinkMap,
    TAG_PARAM,
    TARGET_PARAM,
    build_affiliate_links,
    build_tracked_url,
)

__all__ = [
    "AffiliateLinkMap",
    "KNOWN_PLATFORMS",
    "TAG_PARAM",
    "TARGET_PARAM",
    "build_affiliate_links",
    "build_tracked_url",
]
