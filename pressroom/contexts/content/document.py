"""
Document Data Structure

The per-file state that flows through every rendering phase and every hook.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from markupsafe import Markup

DEFAULT_LAYOUT = "default"


@dataclass
class Document:
    """
    One content file on its way to HTML.

    Built fresh for each build pass, mutated in place as it moves through the
    pipeline, and discarded once its output is written.

    Attributes:
        source_path: Absolute path of the markdown file
        relative_path: POSIX path relative to the content root
        output_path: POSIX path of the output file relative to the output root
        raw_text: Full file contents
        attributes: Parsed front-matter
        frontmatter: Raw YAML source of the front-matter block
        body_begin: 1-based line where the body starts in raw_text
        body: Markdown text, then the rendered HTML, then a render-safe Markup
        raw_body: Markdown text, kept once the body has been rendered
        markdown_file: Source path exposed to templates
        layout_file: Resolved layout template (set during layout resolution)
        modified_time: Source file modification time
        created_time: Source file metadata-change time
        site: Site-wide data shared by every document
    """

    source_path: Path
    relative_path: str
    output_path: str
    raw_text: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)
    frontmatter: str = ""
    body_begin: int = 1
    body: Union[str, Markup] = ""
    raw_body: Optional[str] = None
    markdown_file: Optional[Path] = None
    layout_file: Optional[Path] = None
    modified_time: Optional[datetime] = None
    created_time: Optional[datetime] = None
    site: Dict[str, Any] = field(default_factory=dict)

    @property
    def layout_name(self) -> str:
        """Layout requested by the front-matter, 'default' when absent or empty."""
        return self.attributes.get("layout") or DEFAULT_LAYOUT

    def to_context(self) -> Dict[str, Any]:
        """
        Build the template render context.

        Front-matter attributes sit at the top level so templates can write
        {{ title }}; document fields are laid over them so a front-matter key
        can never shadow body, site, layout_file and the rest.
        """
        context = dict(self.attributes)
        context.update({f.name: getattr(self, f.name) for f in fields(self)})
        return context
