"""Demo content: input/content models and the content generator."""

from demogen.content.generator import (
    ContentGenerationError,
    ContentGenerator,
    build_content_prompt,
    load_content,
    parse_content_response,
)
from demogen.content.models import (
    BrandColors,
    DemoConfig,
    DemoInputs,
    EventCatalog,
    EventSpec,
    GeneratedContent,
    Messaging,
    Product,
    TraitCatalog,
)

__all__ = [
    "BrandColors",
    "ContentGenerationError",
    "ContentGenerator",
    "DemoConfig",
    "DemoInputs",
    "EventCatalog",
    "EventSpec",
    "GeneratedContent",
    "Messaging",
    "Product",
    "TraitCatalog",
    "build_content_prompt",
    "load_content",
    "parse_content_response",
]
