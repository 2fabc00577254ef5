"""
Content Context

Responsibilities:
- Splits documents into YAML front-matter and markdown body
- Converts markdown bodies to HTML fragments
- Defines the Document structure shared by every rendering phase and hook

Owns: Front-matter parsing, markdown configuration, document model
Never: Selects layouts or touches templates
"""

from pressroom.contexts.content.document import DEFAULT_LAYOUT, Document
from pressroom.contexts.content.frontmatter import FrontMatter, parse_front_matter
from pressroom.contexts.content.markdown import MarkdownRenderer, slugify

__all__ = [
    "DEFAULT_LAYOUT",
    "Document",
    "FrontMatter",
    "parse_front_matter",
    "MarkdownRenderer",
    "slugify",
]
