"""File-backed template rendering for demo scaffolding.

Provides the TemplateRenderer class which loads ``.template`` files from the
``demogen/scaffolder/templates/`` directory and renders them with the
``engine`` module, either to a string or straight to an output file.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from demogen.scaffolder import engine


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateNotFoundError(FileNotFoundError):
    """Raised when a template file does not exist under the template root."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Template not found: {path}")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders ``{{var}}`` templates for demo scaffolding.

    The renderer discovers ``.template`` files under a configurable template
    directory.  Templates are rendered with a data context that typically
    holds the company, product, and tracking content for one demo.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)

    # -- Loading -----------------------------------------------------------

    def load_template(self, template_path: str) -> str:
        """Read a template relative to the template directory.

        Raises:
            TemplateNotFoundError: If the file does not exist.
        """
        path = self.template_dir / template_path
        if not path.is_file():
            raise TemplateNotFoundError(path)
        return path.read_text(encoding="utf-8")

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"base/index.html.template"``).
            context: Data context for placeholder and section lookups.

        Returns:
            The rendered template content as a string.
        """
        return engine.render(self.load_template(template_path), context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output
        path.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
