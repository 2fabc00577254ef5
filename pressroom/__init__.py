"""
PRESSROOM - Page Rendering Engine for Static Site Rendering Of Outlined Markdown

Turns a tree of markdown documents with YAML front-matter into HTML pages by
rendering each document through a named Jinja2 layout.

Architecture:
- Content Context: Front-matter extraction, markdown to HTML, document model
- Templating Context: Template engine, layout/partial resolution, compiled-template cache
- Rendering Context: Hook pipeline, per-document orchestration, build driver
"""

__version__ = "0.1.0"
