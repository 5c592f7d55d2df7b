"""Pydantic v2 models for demo content.

Defines the inputs gathered from the user, the content produced by the
text-generation service, and the assembled ``DemoConfig`` whose
``to_context()`` output is the data context handed to the template engine.
Field names are snake_case in Python and camelCase in the rendered context
(``hero_title`` -> ``{{heroTitle}}``).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ContentModel(BaseModel):
    """Base model: camelCase aliases, populate by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Generated content
# ---------------------------------------------------------------------------

class Product(_ContentModel):
    """A product or service shown on the demo storefront."""
    name: str = Field(..., description="2-5 words")
    price: str = Field(..., description="e.g. 'From $299/night'")
    description: str = Field(default="", description="Two sentences of value proposition")
    hero_title: str = Field(default="", description="Headline, 5-8 words")
    hero_subtitle: str = Field(default="")
    cta_text: str = Field(default="Learn More", description="Action-oriented, 2-4 words")
    badges: list[str] = Field(default_factory=list, description="1-2 tags like 'Popular'")
    color_gradient: str = Field(
        default="linear-gradient(135deg, #6B8CAE 0%, #8B9FB8 100%)",
        description="CSS gradient used for the product card",
    )


class EventSpec(_ContentModel):
    """An analytics event name and the properties tracked with it."""
    name: str
    properties: list[str] = Field(default_factory=list)


class EventCatalog(_ContentModel):
    """Industry-specific names for every tracked event."""
    product_viewed: EventSpec
    navigation_click: EventSpec = Field(
        default_factory=lambda: EventSpec(name="Navigation Click", properties=["section", "text"])
    )
    cta_clicked: EventSpec
    lead_submitted: EventSpec
    location_visit: Optional[EventSpec] = None


class TraitCatalog(_ContentModel):
    """snake_case profile trait names."""
    last_product_viewed: str
    products_viewed_list: str
    product_view_count: str
    last_location_visit: Optional[str] = None
    total_website_visits: str = Field(default="total_website_visits")


class Messaging(_ContentModel):
    """Personalization copy for the different visitor states."""
    welcome_back: str
    based_on_interest: str
    recommended_for_you: str
    continue_journey: str
    post_purchase: str


class BrandColors(_ContentModel):
    """Site palette."""
    primary: str = Field(default="#6B8CAE")
    accent: str = Field(default="#52BD95")
    dark: str = Field(default="#2d3748")


class GeneratedContent(_ContentModel):
    """Everything the text-generation service is asked to produce."""
    products: list[Product] = Field(default_factory=list)
    events: EventCatalog
    traits: TraitCatalog
    navigation: list[str] = Field(default_factory=lambda: ["Home", "Contact"])
    messaging: Messaging


# ---------------------------------------------------------------------------
# User inputs
# ---------------------------------------------------------------------------

class DemoInputs(_ContentModel):
    """Values gathered from the user before content generation."""
    company_name: str
    company_slug: str = Field(..., description="Sanitized name used for the output folder")
    industry: str
    write_key: str
    api_token: str
    space_id: str
    model: str = Field(default="", description="Generation model override")
    website: str = Field(default="")
    notes: str = Field(default="")


# ---------------------------------------------------------------------------
# Assembled configuration
# ---------------------------------------------------------------------------

class DemoConfig(_ContentModel):
    """Complete data for one demo: user inputs plus generated content."""
    company_name: str
    company_slug: str
    industry: str
    write_key: str
    api_token: str
    space_id: str
    website: str = Field(default="")
    products: list[Product] = Field(default_factory=list)
    events: EventCatalog
    traits: TraitCatalog
    navigation: list[str] = Field(default_factory=list)
    messaging: Messaging
    colors: BrandColors = Field(default_factory=BrandColors)

    @classmethod
    def from_parts(
        cls,
        inputs: DemoInputs,
        content: GeneratedContent,
        colors: BrandColors | None = None,
    ) -> "DemoConfig":
        """Merge user inputs and generated content into one config."""
        return cls(
            company_name=inputs.company_name,
            company_slug=inputs.company_slug,
            industry=inputs.industry,
            write_key=inputs.write_key,
            api_token=inputs.api_token,
            space_id=inputs.space_id,
            website=inputs.website,
            products=content.products,
            events=content.events,
            traits=content.traits,
            navigation=content.navigation,
            messaging=content.messaging,
            colors=colors or BrandColors(),
        )

    def to_context(self) -> dict[str, Any]:
        """Return the data context used to render the demo templates."""
        context = self.model_dump(by_alias=True)
        context["productCount"] = len(self.products)
        return context
