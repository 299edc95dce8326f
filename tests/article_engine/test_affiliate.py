"""Tests for the affiliate module.

Tests cover:
- Tracking URL construction (tag + target parameters)
- Skipping incomplete platform configuration
- Existing query parameters on base URLs
- Malformed base URLs
- Determinism
"""

import logging
from urllib.parse import parse_qs, urlparse

import pytest

from src.common.errors import AffiliateLinkError
from src.common.models import AffiliateConfigEntry, AffiliatePlatform
from src.article_engine.affiliate import (
    KNOWN_PLATFORMS,
    TAG_PARAM,
    TARGET_PARAM,
    build_affiliate_links,
    build_tracked_url,
)

PRODUCT_URL = "https://example.com/p"


class TestBuildTrackedUrl:
    def test_sets_tag_and_target(self):
        url = build_tracked_url("https://amzn.to/x", "tag123", PRODUCT_URL)
        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert parsed.netloc == "amzn.to"
        assert parsed.path == "/x"
        assert query[TAG_PARAM] == ["tag123"]
        assert query[TARGET_PARAM] == [PRODUCT_URL]

    def test_keeps_existing_params(self):
        url = build_tracked_url("https://shop.example/r?campaign=spring", "t1", PRODUCT_URL)
        query = parse_qs(urlparse(url).query)
        assert query["campaign"] == ["spring"]
        assert query[TAG_PARAM] == ["t1"]

    def test_replaces_existing_tag(self):
        url = build_tracked_url("https://shop.example/r?ref=old", "new", PRODUCT_URL)
        assert parse_qs(urlparse(url).query)[TAG_PARAM] == ["new"]

    @pytest.mark.parametrize("base_url", ["amzn.to/x", "not a url", "/relative/path"])
    def test_malformed_base_url(self, base_url):
        with pytest.raises(AffiliateLinkError):
            build_tracked_url(base_url, "tag", PRODUCT_URL)


class TestBuildAffiliateLinks:
    def test_amazon_scenario(self):
        links = build_affiliate_links(
            {"amazon": AffiliateConfigEntry(base_url="https://amzn.to/x", tag="tag123")},
            PRODUCT_URL,
        )
        assert list(links) == ["amazon"]
        query = parse_qs(urlparse(links["amazon"]).query)
        assert query[TAG_PARAM] == ["tag123"]
        assert query[TARGET_PARAM] == [PRODUCT_URL]

    def test_accepts_plain_dicts(self):
        links = build_affiliate_links(
            {"shopee": {"baseUrl": "https://s.shopee.com.br/a", "tag": "abc"}},
            PRODUCT_URL,
        )
        assert "shopee" in links

    def test_skips_incomplete_entries(self):
        links = build_affiliate_links(
            {
                "amazon": AffiliateConfigEntry(base_url="https://amzn.to/x", tag="tag123"),
                "shopee": AffiliateConfigEntry(tag="only-tag"),
                "magalu": AffiliateConfigEntry(base_url="https://magalu.com/x"),
                "hotmart": AffiliateConfigEntry(base_url="  ", tag="  "),
            },
            PRODUCT_URL,
        )
        assert list(links) == ["amazon"]

    def test_empty_config(self):
        assert build_affiliate_links({}, PRODUCT_URL) == {}

    def test_idempotent(self):
        config = {
            "amazon": AffiliateConfigEntry(base_url="https://amzn.to/x", tag="tag123"),
            "mercadoLivre": AffiliateConfigEntry(
                base_url="https://mercadolivre.com/sec/1?x=1", tag="ml"
            ),
        }
        assert build_affiliate_links(config, PRODUCT_URL) == build_affiliate_links(
            config, PRODUCT_URL
        )

    def test_malformed_base_url_propagates(self):
        with pytest.raises(AffiliateLinkError):
            build_affiliate_links(
                {"amazon": AffiliateConfigEntry(base_url="amzn", tag="t")},
                PRODUCT_URL,
            )

    def test_known_platforms(self):
        assert KNOWN_PLATFORMS == {p.value for p in AffiliatePlatform}
        assert {"amazon", "mercadoLivre", "shopee", "hotmart"} <= KNOWN_PLATFORMS

    def test_unknown_platform_is_linked_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="affiliate"):
            links = build_affiliate_links(
                {
                    "amazon": AffiliateConfigEntry(base_url="https://amzn.to/x", tag="t"),
                    "myshop": AffiliateConfigEntry(base_url="https://myshop.test/r", tag="m"),
                },
                PRODUCT_URL,
            )

        assert list(links) == ["amazon", "myshop"]
        assert "Unknown affiliate platform myshop" in caplog.text
        assert "amazon" not in caplog.text
