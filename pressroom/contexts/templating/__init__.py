"""
Templating Context

Responsibilities:
- Builds the Jinja2 environment and its helper filters
- Maps layout names to template files and validates the default layout
- Resolves partials relative to the layout that references them
- Caches compiled templates (one compile per template file per cache)

Owns: Template engine configuration, layout/partial lookup, compiled-template cache
Never: Parses documents or decides phase order
"""

from pressroom.contexts.templating.engine import compile_template, create_environment
from pressroom.contexts.templating.registries import (
    TEMPLATE_EXTENSIONS,
    TemplateCache,
    TemplateRegistry,
)

__all__ = [
    "compile_template",
    "create_environment",
    "TEMPLATE_EXTENSIONS",
    "TemplateCache",
    "TemplateRegistry",
]
