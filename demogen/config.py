"""demogen configuration.

Typed configuration for the demo generator.  All settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from demogen.content.models import BrandColors
from demogen.scaffolder.generator import demo_dir_name


class OllamaConfig(BaseModel):
    """Configuration for the text-generation server."""

    url: str = Field(default="http://localhost:11434")
    model: str = Field(default="qwen3:8b")
    fallback_model: str = Field(default="llama3.1:8b")
    timeout: int = Field(default=180, ge=10, description="Per-request timeout in seconds")


class Config(BaseModel):
    """Top-level demogen configuration.

    Instances are created once by the CLI entry point and then passed to
    ``DemoPipeline``; nothing in the package reads configuration globally.
    """

    output_dir: Path = Field(default=Path("."))
    template_dir: Path | None = Field(
        default=None,
        description="Override for the packaged template directory",
    )
    install_dependencies: bool = Field(
        default=True,
        description="Run `npm install` inside the generated demo",
    )
    install_timeout: int = Field(default=600, ge=30)
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    colors: BrandColors = Field(default_factory=BrandColors)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def demo_path(self, slug: str) -> Path:
        """Directory the demo for *slug* is written to."""
        return self.output_dir / demo_dir_name(slug)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            DEMOGEN_OUTPUT_DIR, DEMOGEN_TEMPLATE_DIR, DEMOGEN_SKIP_INSTALL,
            DEMOGEN_OLLAMA_URL, DEMOGEN_OLLAMA_MODEL, DEMOGEN_OLLAMA_TIMEOUT.
        """
        ollama_kwargs: dict[str, Any] = {}
        if os.environ.get("DEMOGEN_OLLAMA_URL"):
            ollama_kwargs["url"] = os.environ["DEMOGEN_OLLAMA_URL"]
        if os.environ.get("DEMOGEN_OLLAMA_MODEL"):
            ollama_kwargs["model"] = os.environ["DEMOGEN_OLLAMA_MODEL"]
        if os.environ.get("DEMOGEN_OLLAMA_TIMEOUT"):
            ollama_kwargs["timeout"] = int(os.environ["DEMOGEN_OLLAMA_TIMEOUT"])

        template_dir = os.environ.get("DEMOGEN_TEMPLATE_DIR")
        skip_install = os.environ.get("DEMOGEN_SKIP_INSTALL", "").strip().lower()

        return cls(
            output_dir=Path(os.environ.get("DEMOGEN_OUTPUT_DIR", ".")),
            template_dir=Path(template_dir) if template_dir else None,
            install_dependencies=skip_install not in ("1", "true", "yes"),
            ollama=OllamaConfig(**ollama_kwargs),
        )
