"""demogen pipeline orchestrator.

Runs the demo generation workflow:

Step 1: INPUTS  -- Gather and validate company, industry, and credentials.
Step 2: CONTENT -- Generate industry-specific products, events, and traits.
Step 3: RENDER  -- Render the demo templates into ``<output>/<slug>-demo``.
Step 4: INSTALL -- Run ``npm install`` in the generated demo.

Usage::

    python -m demogen.pipeline
    python -m demogen.pipeline --inputs inputs.json --content content.json -o ./demos
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError
from pydantic.alias_generators import to_camel
from rich.panel import Panel
from rich.prompt import Prompt

from demogen.config import Config
from demogen.content.generator import ContentGenerationError, ContentGenerator, load_content
from demogen.content.models import DemoConfig, DemoInputs, GeneratedContent
from demogen.ollama_client import OllamaClient
from demogen.scaffolder.generator import DemoGenerator
from demogen.scaffolder.templates import TemplateNotFoundError, TemplateRenderer
from demogen.utils import (
    STEP_NAMES,
    console,
    format_duration,
    load_json,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
    save_json,
)
from demogen.validators import (
    ValidationResult,
    sanitize_path,
    validate_api_token,
    validate_company_name,
    validate_industry,
    validate_space_id,
    validate_write_key,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when a pipeline step fails irrecoverably."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        super().__init__(f"Step {step} ({STEP_NAMES.get(step, '?')}): {message}")


# ---------------------------------------------------------------------------
# Input gathering
# ---------------------------------------------------------------------------

# (field, prompt label, validator)
_REQUIRED_FIELDS: list[tuple[str, str, Callable[[str], ValidationResult]]] = [
    ("company_name", "Company name", validate_company_name),
    ("industry", "Industry (e.g., Travel, SaaS, E-Commerce)", validate_industry),
    ("write_key", "Segment Write Key", validate_write_key),
    ("api_token", "Profiles API Token", validate_api_token),
    ("space_id", "Space ID", validate_space_id),
]

_CREDENTIAL_FIELDS = {"api_token", "write_key"}


def prompt_inputs(ask: Callable[..., str] = Prompt.ask) -> DemoInputs:
    """Interactively gather inputs, re-asking until each field validates.

    Args:
        ask: Prompt function, ``rich.prompt.Prompt.ask`` by default.
    """
    values: dict[str, str] = {}
    for field, label, validator in _REQUIRED_FIELDS:
        while True:
            answer = ask(label, default="") or ""
            result = validator(answer)
            if result.valid:
                values[field] = answer.strip()
                if field == "company_name":
                    values["company_slug"] = result.sanitized or ""
                break
            print_error(f"Error: {result.error}")

    values["model"] = (ask("Generation model (blank for default)", default="") or "").strip()
    values["website"] = (ask("Company website (optional)", default="") or "").strip()
    values["notes"] = (ask("Additional notes/context (optional)", default="") or "").strip()
    return DemoInputs(**values)


def prompt_output_dir(default: str | Path, ask: Callable[..., str] = Prompt.ask) -> Path:
    """Ask where the demo folder should go; a blank answer keeps *default*."""
    answer = ask("Output directory (blank for current setting)", default="") or ""
    cleaned = sanitize_path(answer)
    return Path(cleaned) if cleaned else Path(default)


def load_inputs(path: str | Path) -> DemoInputs:
    """Load inputs from a JSON file and run the same validators as the prompt.

    Keys may be snake_case or camelCase.

    Raises:
        PipelineError: If the file is missing, unreadable, or a field is invalid.
    """
    try:
        raw = load_json(path)
    except (OSError, ValueError) as exc:
        raise PipelineError(1, f"Cannot read inputs file {path}: {exc}") from exc

    values: dict[str, Any] = {}
    for field, label, validator in _REQUIRED_FIELDS:
        alias = to_camel(field)
        answer = raw.get(field, raw.get(alias, ""))
        result = validator(answer if isinstance(answer, str) else "")
        if not result.valid:
            raise PipelineError(1, f"{label}: {result.error}")
        values[field] = answer.strip()
        if field == "company_name":
            values["company_slug"] = result.sanitized

    for field in ("model", "website", "notes"):
        alias = to_camel(field)
        values[field] = str(raw.get(field, raw.get(alias, "")) or "").strip()

    return DemoInputs(**values)


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class DemoPipeline:
    """Drives content generation and rendering for one demo.

    Attributes:
        config: Generator configuration.
        client: Text-generation client built from ``config.ollama`` unless
            one is passed in.
        content_generator: Produces ``GeneratedContent`` for the inputs.
    """

    def __init__(
        self,
        config: Config,
        client: OllamaClient | None = None,
        content_generator: ContentGenerator | None = None,
    ) -> None:
        self.config = config
        self.client = client or OllamaClient(
            base_url=config.ollama.url,
            timeout=config.ollama.timeout,
        )
        self.content_generator = content_generator or ContentGenerator(
            self.client,
            model=config.ollama.model,
            fallback_model=config.ollama.fallback_model,
        )
        self.renderer = TemplateRenderer(config.template_dir)

    async def _check_server(self, model: str) -> None:
        """Fail early when the generation server or the requested model is missing."""
        if not await self.client.is_available():
            raise PipelineError(
                2, f"Text-generation server not reachable at {self.client.base_url}"
            )
        console.print(f"  [green]+[/green] Text-generation server online at {self.client.base_url}")

        if not model or await self.client.has_model(model):
            return
        fallback = self.config.ollama.fallback_model
        if fallback and fallback != model and await self.client.has_model(fallback):
            print_warning(f"  Model {model} is not pulled; falling back to {fallback}.")
            return
        raise PipelineError(
            2, f"Model {model} is not available at {self.client.base_url} (run: ollama pull {model})"
        )

    async def _generate_content(self, inputs: DemoInputs) -> GeneratedContent:
        print_step_header(2, STEP_NAMES[2])
        await self._check_server(inputs.model or self.config.ollama.model)
        console.print(
            f"  Generating content for [bold]{inputs.company_name}[/bold] ({inputs.industry})..."
        )
        try:
            content = await self.content_generator.generate(inputs)
        except ContentGenerationError as exc:
            raise PipelineError(2, str(exc)) from exc
        print_success(f"  Generated {len(content.products)} products.")
        return content

    async def run(self, inputs: DemoInputs, content: GeneratedContent | None = None) -> Path:
        """Generate the demo and return its directory.

        Args:
            inputs: Validated user inputs.
            content: Pre-generated content; skips the generation service.

        Raises:
            PipelineError: If content generation or rendering fails.
        """
        start = time.monotonic()

        if content is None:
            content = await self._generate_content(inputs)

        demo = DemoConfig.from_parts(inputs, content, colors=self.config.colors)
        demo_path = self.config.demo_path(demo.company_slug)

        print_step_header(3, STEP_NAMES[3])
        if demo_path.exists():
            print_warning(f"  Directory {demo_path} already exists. Overwriting...")

        generator = DemoGenerator(demo, renderer=self.renderer)
        try:
            files = await generator.generate(demo_path)
        except TemplateNotFoundError as exc:
            raise PipelineError(3, str(exc)) from exc
        except OSError as exc:
            raise PipelineError(3, f"Cannot write demo files: {exc}") from exc
        await save_json(
            demo.model_dump(by_alias=True, exclude=_CREDENTIAL_FIELDS),
            demo_path / "demo-config.json",
        )

        installed = False
        if self.config.install_dependencies:
            print_step_header(4, STEP_NAMES[4])
            installed = await generator.install_dependencies(
                demo_path, timeout=self.config.install_timeout
            )

        self._print_next_steps(demo, demo_path)
        print_summary_table(
            {
                "Demo directory": str(demo_path),
                "Files generated": str(len(files)),
                "Products": str(len(demo.products)),
                "Dependencies installed": "yes" if installed else "no",
                "Elapsed": format_duration(time.monotonic() - start),
            },
            title="Demo Summary",
        )
        return demo_path

    @staticmethod
    def _print_next_steps(demo: DemoConfig, demo_path: Path) -> None:
        console.print(
            Panel(
                "\n".join([
                    f"1. cd {demo_path}",
                    "2. npm start",
                    "3. Open http://localhost:3000 in your browser",
                    "",
                    f"Includes {len(demo.products)} industry-specific products, "
                    "analytics tracking, Profiles API personalization,",
                    "toast notifications for events, and softReset()/hardReset() helpers.",
                ]),
                title="[bold green]Demo generated[/bold green]",
                style="green",
            )
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """CLI entry point for ``python -m demogen.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="demogen -- scaffold a tracking and personalization demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m demogen.pipeline\n"
            "  python -m demogen.pipeline --inputs inputs.json -o ./demos\n"
            "  python -m demogen.pipeline --inputs inputs.json --content content.json --skip-install\n"
        ),
    )
    parser.add_argument("--output", "-o", default=None, help="Output directory (default: .)")
    parser.add_argument("--inputs", default=None, help="JSON file with inputs (skips prompts)")
    parser.add_argument(
        "--content", default=None, help="JSON file with pre-generated content (skips generation)"
    )
    parser.add_argument("--model", default=None, help="Generation model tag")
    parser.add_argument("--ollama-url", default=None, help="Text-generation server URL")
    parser.add_argument("--template-dir", default=None, help="Override the template directory")
    parser.add_argument("--skip-install", action="store_true", help="Do not run npm install")

    args = parser.parse_args()

    config = Config.from_env()
    output = sanitize_path(args.output)
    if output:
        config.output_dir = Path(output)
    if args.template_dir:
        config.template_dir = Path(args.template_dir)
    if args.model:
        config.ollama.model = args.model
    if args.ollama_url:
        config.ollama.url = args.ollama_url
    if args.skip_install:
        config.install_dependencies = False

    console.print(Panel("[bold]Tracking Demo Generator[/bold]", style="cyan"))

    try:
        if args.inputs:
            inputs = load_inputs(args.inputs)
        else:
            print_step_header(1, STEP_NAMES[1])
            inputs = prompt_inputs()
            if not output:
                config.output_dir = prompt_output_dir(config.output_dir)

        content = load_content(args.content) if args.content else None
        asyncio.run(DemoPipeline(config).run(inputs, content=content))
    except (PipelineError, ContentGenerationError, ValidationError, OSError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_warning("Aborted.")
        sys.exit(130)

    print_success("Demo generated successfully!")


if __name__ == "__main__":
    main()
