"""Shared pytest fixtures for the demogen test suite.

Provides reusable fixtures for:
- Temporary output directories
- Sample user inputs and generated content
- An assembled DemoConfig
- A mocked text-generation server
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from demogen.content.models import DemoConfig, DemoInputs, GeneratedContent


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary directory that receives generated demos."""
    output_dir = tmp_path / "demos"
    output_dir.mkdir()
    yield output_dir


# ---------------------------------------------------------------------------
# Inputs & content
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_inputs_dict() -> dict[str, Any]:
    """Raw inputs as they would appear in an ``--inputs`` JSON file."""
    return {
        "companyName": "Sunset Travel",
        "industry": "Travel",
        "writeKey": "abc123XYZ",
        "apiToken": "token-secret",
        "spaceId": "spa_12345",
        "website": "https://sunset.example",
        "notes": "Boutique beach resorts",
    }


@pytest.fixture
def sample_inputs() -> DemoInputs:
    return DemoInputs(
        company_name="Sunset Travel",
        company_slug="sunset-travel",
        industry="Travel",
        write_key="abc123XYZ",
        api_token="token-secret",
        space_id="spa_12345",
        website="https://sunset.example",
        notes="Boutique beach resorts",
    )


@pytest.fixture
def sample_content_dict() -> dict[str, Any]:
    """Generated content in the camelCase shape the model is asked for."""
    return {
        "products": [
            {
                "name": "Luxury Beach Resort",
                "price": "From $299/night",
                "description": "Oceanfront suites with world-class amenities. Perfect for getaways.",
                "heroTitle": "Luxury Beach Resort - Your Paradise Awaits",
                "heroSubtitle": "Unwind in oceanfront luxury.",
                "ctaText": "Book Now",
                "badges": ["Popular", "Beachfront"],
                "colorGradient": "linear-gradient(135deg, #6B8CAE 0%, #8B9FB8 100%)",
            },
            {
                "name": "Mountain Lodge Escape",
                "price": "From $189/night",
                "description": "Cozy cabins with alpine views. Ideal for hikers.",
                "heroTitle": "Breathe the Mountain Air",
                "heroSubtitle": "Trails, fireplaces, and quiet nights.",
                "ctaText": "Reserve",
                "badges": ["New"],
                "colorGradient": "linear-gradient(135deg, #52BD95 0%, #2d3748 100%)",
            },
        ],
        "events": {
            "productViewed": {
                "name": "Hotel Viewed",
                "properties": ["hotel_name", "price_per_night"],
            },
            "navigationClick": {"name": "Navigation Click", "properties": ["section", "text"]},
            "ctaClicked": {"name": "Booking CTA Clicked", "properties": ["button_text"]},
            "leadSubmitted": {"name": "Travel Inquiry Submitted", "properties": ["interested_in"]},
        },
        "traits": {
            "lastProductViewed": "last_hotel_viewed",
            "productsViewedList": "hotels_viewed_list",
            "productViewCount": "hotel_view_count",
            "totalWebsiteVisits": "total_website_visits",
        },
        "navigation": ["Home", "Hotels", "Deals", "Contact"],
        "messaging": {
            "welcomeBack": "Welcome back to Sunset Travel!",
            "basedOnInterest": "Based on Your Interest",
            "recommendedForYou": "Recommended For You",
            "continueJourney": "Continue Where You Left Off",
            "postPurchase": "Perfect Additions For You",
        },
    }


@pytest.fixture
def sample_content(sample_content_dict: dict[str, Any]) -> GeneratedContent:
    return GeneratedContent.model_validate(sample_content_dict)


@pytest.fixture
def demo_config(sample_inputs: DemoInputs, sample_content: GeneratedContent) -> DemoConfig:
    return DemoConfig.from_parts(sample_inputs, sample_content)


# ---------------------------------------------------------------------------
# Mock text-generation server
# ---------------------------------------------------------------------------

def make_generate_response(text: str, model: str = "qwen3:8b") -> MagicMock:
    """Build a mocked ``httpx.Response`` for ``/api/generate``."""
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = {
        "model": model,
        "response": text,
        "done": True,
        "total_duration": 2_000_000_000,
    }
    response.raise_for_status = MagicMock()
    return response


def make_async_client(post_return=None, post_side_effect=None, get_return=None) -> AsyncMock:
    """Build an ``httpx.AsyncClient`` stand-in usable as an async context manager."""
    client = AsyncMock()
    client.post = AsyncMock(return_value=post_return, side_effect=post_side_effect)
    client.get = AsyncMock(return_value=get_return)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture
def mock_ollama(sample_content_dict: dict[str, Any]):
    """Patch httpx.AsyncClient so generate calls return ``sample_content_dict``.

    Usage:
        def test_something(mock_ollama):
            with mock_ollama:
                ...
    """
    response = make_generate_response(json.dumps(sample_content_dict))
    return patch("httpx.AsyncClient", return_value=make_async_client(post_return=response))


@pytest.fixture
def generate_response():
    """Factory fixture: ``generate_response(text)`` -> mocked response."""
    return make_generate_response


@pytest.fixture
def async_client():
    """Factory fixture: ``async_client(post_return=..., ...)`` -> mocked AsyncClient."""
    return make_async_client
