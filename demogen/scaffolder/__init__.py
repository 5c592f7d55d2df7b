"""demogen scaffolder -- renders the demo web application.

The ``engine`` module implements the ``{{var}}`` / ``{{#list}}`` template
language; ``TemplateRenderer`` adds file loading and writing on top of it,
and ``DemoGenerator`` renders the full set of demo files.

Quick usage::

    from demogen.scaffolder import DemoGenerator, render

    render("Hello {{name}}!", {"name": "Acme"})   # -> "Hello Acme!"

    generator = DemoGenerator(demo_config)
    paths = await generator.generate("/tmp/acme-demo")
"""

from demogen.scaffolder.engine import render
from demogen.scaffolder.generator import DEFAULT_FILE_MAP, DemoGenerator, demo_dir_name
from demogen.scaffolder.templates import TemplateNotFoundError, TemplateRenderer

__all__ = [
    "DEFAULT_FILE_MAP",
    "DemoGenerator",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "demo_dir_name",
    "render",
]
