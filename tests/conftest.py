"""Shared test fixtures for the article engine."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.models import GenerationRequest, ProductSnapshot


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_request_payload() -> dict:
    """Return a valid camelCase request body."""
    return {
        "productUrl": "https://example.com/p",
        "targetLanguage": "pt-BR",
        "targetRegion": "Brazil",
        "seoKeywords": ["melhor preço", "review completo"],
        "persona": "Especialista em reviews transparentes",
        "tone": "Conversacional e confiável",
        "minimumWordCount": 1800,
        "includeImages": True,
        "affiliateConfig": {
            "amazon": {"baseUrl": "https://amzn.to/x", "tag": "tag123"},
        },
        "additionalNotes": "Destaque diferenciais locais.",
    }


@pytest.fixture
def sample_request(sample_request_payload) -> GenerationRequest:
    return GenerationRequest.model_validate(sample_request_payload)


@pytest.fixture
def sample_product() -> ProductSnapshot:
    return ProductSnapshot(
        url="https://example.com/p",
        title="Fone Bluetooth XYZ",
        description="Fone sem fio com cancelamento de ruído.",
        price="299.90",
        currency="BRL",
        brand="XYZ",
        specs={"Bateria": "30h"},
        images=["https://example.com/img/1.jpg"],
    )


@pytest.fixture
def sample_draft_payload() -> dict:
    """A complete drafting answer as the text service would return it."""
    return {
        "title": "Fone XYZ review completo",
        "slug": "fone-xyz-review",
        "metaDescription": "Vale a pena? Veja o melhor preço.",
        "excerpt": "Testamos o fone XYZ.",
        "sections": [
            {"heading": "Design", "body": "O design é leve."},
            {"heading": "Bateria", "body": "Dura 30 horas."},
        ],
        "faqs": [
            {"heading": "É à prova d'água?", "body": "Sim, IPX4."},
        ],
        "callToAction": "Confira o melhor preço",
        "affiliateBlocks": [
            {
                "platform": "amazon",
                "context": "Compre na Amazon",
                "link": "https://amzn.to/x?ref=tag123",
            }
        ],
        "imagePrompts": ["headphones on a desk", "person running with headphones"],
    }
