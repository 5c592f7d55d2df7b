"""Industry-specific demo content generation.

Builds a prompt describing exactly what the demo templates need (products,
analytics event names, profile trait names, navigation, and personalization
copy), sends it to the text-generation service, and validates the JSON it
returns into a ``GeneratedContent`` model.
"""

from __future__ import annotations

import json
import re
import textwrap
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from demogen.content.models import DemoInputs, GeneratedContent
from demogen.ollama_client import OllamaClient


class ContentGenerationError(Exception):
    """Raised when demo content cannot be generated or validated."""


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = (
    "You write realistic marketing content and analytics tracking plans for "
    "product demos. You always answer with a single JSON object and nothing else."
)

_CONTENT_GUIDE = textwrap.dedent("""\
    Generate demo website content as ONE JSON object with these keys:

    "products": 5-6 products or services specific to the company and industry.
      Each product:
        "name": 2-5 words
        "price": formatted like "From $X" or "Starting at $X/month"
        "description": 2 sentences focused on the value proposition
        "heroTitle": engaging headline, 5-8 words
        "heroSubtitle": 1 sentence elaboration
        "ctaText": action-oriented, 2-4 words ("Get Started", "Book Now")
        "badges": 1-2 short tags like ["Popular", "New", "Best Value"]
        "colorGradient": CSS linear-gradient with professional colors

    "events": analytics event names that are INDUSTRY-SPECIFIC, not generic.
      Bad: "Product Viewed". Good (Travel): "Hotel Viewed", "Booking Started".
      Keys "productViewed", "navigationClick", "ctaClicked", "leadSubmitted",
      and optionally "locationVisit"; each is {"name": str, "properties": [str]}.

    "traits": snake_case profile trait names with keys
      "lastProductViewed", "productsViewedList", "productViewCount",
      "lastLocationVisit" (optional), "totalWebsiteVisits".
      Example (Travel): "last_hotel_viewed", "hotels_viewed_list".

    "navigation": 4-5 menu labels. The first is always "Home" and the last is
      always "Contact"; the middle items fit the industry.

    "messaging": personalization copy with keys
      "welcomeBack", "basedOnInterest", "recommendedForYou",
      "continueJourney", "postPurchase".
    """)


def build_content_prompt(inputs: DemoInputs) -> str:
    """Return the generation prompt for *inputs*."""
    lines = [
        _CONTENT_GUIDE,
        "Company details:",
        f"- Company: {inputs.company_name}",
        f"- Industry: {inputs.industry}",
    ]
    if inputs.website:
        lines.append(f"- Website: {inputs.website}")
    if inputs.notes:
        lines.append(f"- Notes: {inputs.notes}")
    lines.append("")
    lines.append("Respond with the JSON object only.")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def parse_content_response(raw: str) -> dict[str, Any]:
    """Best-effort extraction of the JSON object from a model response.

    Model output sometimes includes markdown fences or preamble text; this
    strips those away before parsing.

    Raises:
        ContentGenerationError: If no JSON object can be recovered.
    """
    cleaned = re.sub(r"```(?:json)?\s*", "", raw)
    cleaned = cleaned.strip().rstrip("`").strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        data = None
        match = re.search(r"\{[\s\S]*\}", cleaned)
        if match:
            try:
                data = json.loads(match.group(0))
            except json.JSONDecodeError:
                data = None

    if not isinstance(data, dict):
        raise ContentGenerationError("Model response did not contain a JSON object")
    return data


def _validate_content(data: dict[str, Any]) -> GeneratedContent:
    try:
        return GeneratedContent.model_validate(data)
    except ValidationError as exc:
        raise ContentGenerationError(f"Generated content failed validation: {exc}") from exc


def load_content(path: str | Path) -> GeneratedContent:
    """Load pre-generated content from a JSON file."""
    raw = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ContentGenerationError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ContentGenerationError(f"Expected a JSON object in {path}")
    return _validate_content(data)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class ContentGenerator:
    """Asks the text-generation service for demo content."""

    def __init__(
        self,
        client: OllamaClient,
        model: str,
        fallback_model: str | None = None,
    ) -> None:
        self.client = client
        self.model = model
        self.fallback_model = fallback_model

    async def generate(self, inputs: DemoInputs) -> GeneratedContent:
        """Generate and validate content for *inputs*.

        ``inputs.model``, when set, overrides the configured model.

        Raises:
            ContentGenerationError: On service failure, unparseable output, or
                output that does not match the content schema.
        """
        response = await self.client.generate_with_fallback(
            build_content_prompt(inputs),
            primary_model=inputs.model or self.model,
            fallback_model=self.fallback_model,
            system=SYSTEM_PROMPT,
            json_mode=True,
        )
        if not response.success:
            raise ContentGenerationError(response.error or "Content generation failed")

        return _validate_content(parse_content_response(response.text))
