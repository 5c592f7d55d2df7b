"""Demo file generation.

Takes a ``DemoConfig`` and renders the static demo templates (storefront
page, tracking script, Node server, ``package.json``) into an output
directory, then optionally installs the demo's npm dependencies.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from demogen.content.models import DemoConfig
from demogen.utils import console, ensure_dir, print_success, print_warning, run_command

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Template -> output mapping
# ---------------------------------------------------------------------------

DEFAULT_FILE_MAP: dict[str, str] = {
    "base/index.html.template": "index.html",
    "base/app.js.template": "app.js",
    "base/server.js.template": "server.js",
    "base/package.json.template": "package.json",
}


def demo_dir_name(slug: str) -> str:
    """Folder name for a demo: ``"acme"`` -> ``"acme-demo"``."""
    return f"{slug}-demo"


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class DemoGenerator:
    """Renders every demo template for one ``DemoConfig``."""

    def __init__(
        self,
        demo: DemoConfig,
        renderer: TemplateRenderer | None = None,
        file_map: dict[str, str] | None = None,
    ) -> None:
        self.demo = demo
        self.renderer = renderer or TemplateRenderer()
        self.file_map = dict(file_map) if file_map is not None else dict(DEFAULT_FILE_MAP)

    # -- Public API --------------------------------------------------------

    async def generate(self, output_dir: str | Path) -> list[Path]:
        """Render every mapped template into *output_dir*.

        Args:
            output_dir: Directory that receives the rendered files.  It is
                created if missing.

        Returns:
            The written file paths, in mapping order.

        Raises:
            TemplateNotFoundError: If a mapped template is missing.
        """
        out = await asyncio.to_thread(ensure_dir, output_dir)

        context = self.demo.to_context()
        console.print(f"  Generating demo files in [bold]{out}[/bold]")

        written: list[Path] = []
        for template_path, output_name in self.file_map.items():
            path = await self.renderer.render_to_file(template_path, out / output_name, context)
            print_success(f"  + Generated: {path}")
            written.append(path)
        return written

    async def install_dependencies(self, project_dir: str | Path, timeout: int = 600) -> bool:
        """Run ``npm install`` in *project_dir*.

        A failure is reported as a warning; the demo can still be installed
        manually afterwards.
        """
        try:
            returncode, _stdout, stderr = await run_command(
                ["npm", "install"], cwd=project_dir, timeout=timeout
            )
        except OSError as exc:
            print_warning(f"  Could not run npm install: {exc}")
            print_warning('  You can run "npm install" manually later.')
            return False

        if returncode != 0:
            print_warning(f"  npm install failed: {stderr[:500]}")
            print_warning('  You can run "npm install" manually later.')
            return False

        print_success("  Dependencies installed successfully.")
        return True
