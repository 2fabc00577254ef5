"""
Document Pipeline

Drives one content file through every phase, strictly in order:

    READ -> PARSE_FRONT_MATTER -> BEFORE_MARKDOWN -> RENDER_MARKDOWN ->
    AFTER_MARKDOWN -> MARK_SAFE -> BEFORE_COMPILE -> RESOLVE_LAYOUT ->
    COMPILE -> RENDER -> AFTER_COMPILE

Any failure leaves the pipeline as a PressroomError tagged with the phase and
the document's source path. Errors raised by other libraries are wrapped:
template rendering failures become TemplateRenderError, anything else
DocumentError.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Iterator, Optional

from markupsafe import Markup

from pressroom.config import DEFAULT_TARGET_EXTENSION, BuildConfig
from pressroom.contexts.content.document import Document
from pressroom.contexts.content.frontmatter import parse_front_matter
from pressroom.contexts.content.markdown import MarkdownRenderer
from pressroom.contexts.rendering.hooks import (
    CallbackHooks,
    DocumentHooks,
    run_document_hook,
    run_output_hook,
)
from pressroom.contexts.rendering.logger import _log_debug
from pressroom.contexts.templating.registries import TemplateRegistry
from pressroom.exceptions import DocumentError, PressroomError, TemplateRenderError


class Phase(Enum):
    """Processing phases, in execution order. Values are what errors report."""

    READ = "read"
    PARSE_FRONT_MATTER = "parse_front_matter"
    BEFORE_MARKDOWN = "before_markdown"
    RENDER_MARKDOWN = "render_markdown"
    AFTER_MARKDOWN = "after_markdown"
    MARK_SAFE = "mark_safe"
    BEFORE_COMPILE = "before_compile"
    RESOLVE_LAYOUT = "resolve_layout"
    COMPILE = "compile"
    RENDER = "render"
    AFTER_COMPILE = "after_compile"
    WRITE = "write"


@dataclass
class RenderResult:
    """
    Output of one document pass.

    Attributes:
        document: Document after every hook ran
        html: Final page content
    """

    document: Document
    html: str


def output_path_for(relative_path: str, target_extension: str = DEFAULT_TARGET_EXTENSION) -> str:
    """
    Map a source path to its output path by swapping the final extension.

    Examples:
        >>> output_path_for("guide/intro.md")
        'guide/intro.html'
        >>> output_path_for("README")
        'README.html'
    """
    return PurePosixPath(relative_path).with_suffix(target_extension).as_posix()


@contextmanager
def phase_context(phase: Phase, source_path: Optional[Path]) -> Iterator[None]:
    """Tag errors leaving a phase with the phase and document path."""
    try:
        yield
    except PressroomError as e:
        e.tag(phase.value, source_path)
        raise
    except Exception as e:
        error_class = TemplateRenderError if phase is Phase.RENDER else DocumentError
        raise error_class(
            f"Unexpected error during {phase.value}",
            phase=phase.value,
            source_path=source_path,
            cause=e,
        ) from e


class DocumentPipeline:
    """
    Renders content files to HTML pages for one build pass.

    Holds the markdown renderer, the template registry (and through it the
    compiled-template cache) and the hook set. Build a new pipeline per pass so
    edited templates are picked up.
    """

    def __init__(
        self,
        config: BuildConfig,
        hooks: Optional[DocumentHooks] = None,
        registry: Optional[TemplateRegistry] = None,
        renderer: Optional[MarkdownRenderer] = None,
    ):
        """
        Args:
            config: Build settings
            hooks: Hook set; defaults to CallbackHooks built from config.callbacks
            registry: Template registry; defaults to one built from config
            renderer: Markdown renderer; defaults to one built from config

        Raises:
            ConfigurationError: If the default layout, templates root or callbacks are invalid
        """
        self.config = config
        self.hooks = hooks if hooks is not None else CallbackHooks(config.callbacks)
        self.registry = registry or TemplateRegistry(
            templates_path=config.templates_path,
            layouts=config.layouts,
            template_extensions=config.template_extensions,
            template_options=config.template_options,
        )
        self.renderer = renderer or MarkdownRenderer(
            markdown_options=config.markdown_options,
            anchor_options=config.anchor_options,
            highlight_options=config.highlight_options,
        )

    def load_document(self, source_path: Path, relative_path: Optional[str] = None) -> Document:
        """
        Read a content file and split off its front-matter.

        Args:
            source_path: File to read
            relative_path: POSIX path relative to the content root (default: file name)

        Returns:
            Document with attributes, body and file metadata populated

        Raises:
            DocumentError: If the file cannot be read as UTF-8
            MalformedFrontMatterError: If the front-matter block is invalid
        """
        source_path = Path(source_path)
        relative_path = relative_path or source_path.name

        with phase_context(Phase.READ, source_path):
            raw_text = source_path.read_text(encoding="utf-8")
            stat = source_path.stat()

        with phase_context(Phase.PARSE_FRONT_MATTER, source_path):
            parsed = parse_front_matter(raw_text)

        return Document(
            source_path=source_path,
            relative_path=relative_path,
            output_path=output_path_for(relative_path, self.config.target_extension),
            raw_text=raw_text,
            attributes=parsed.attributes,
            frontmatter=parsed.frontmatter,
            body_begin=parsed.body_begin,
            body=parsed.body,
            markdown_file=source_path,
            modified_time=datetime.fromtimestamp(stat.st_mtime),
            created_time=datetime.fromtimestamp(stat.st_ctime),
            site=self.config.data,
        )

    def render_document(self, doc: Document) -> str:
        """
        Run a loaded document through markdown, hooks and its layout.

        Returns:
            Final HTML (after the after_compile hook)
        """
        source_path = doc.source_path

        with phase_context(Phase.BEFORE_MARKDOWN, source_path):
            doc = run_document_hook(self.hooks, "before_markdown", doc)

        with phase_context(Phase.RENDER_MARKDOWN, source_path):
            doc.raw_body = doc.body
            doc.body = self.renderer.render(doc.body)

        with phase_context(Phase.AFTER_MARKDOWN, source_path):
            doc = run_document_hook(self.hooks, "after_markdown", doc)

        with phase_context(Phase.MARK_SAFE, source_path):
            doc.body = Markup(doc.body)

        with phase_context(Phase.BEFORE_COMPILE, source_path):
            doc = run_document_hook(self.hooks, "before_compile", doc)

        with phase_context(Phase.RESOLVE_LAYOUT, source_path):
            doc.layout_file = self.registry.resolve_layout(doc.layout_name)

        with phase_context(Phase.COMPILE, source_path):
            template = self.registry.get_template(doc.layout_file)

        with phase_context(Phase.RENDER, source_path):
            html = template.render(doc.to_context())

        with phase_context(Phase.AFTER_COMPILE, source_path):
            html = run_output_hook(self.hooks, doc, html)

        _log_debug(f"Rendered {doc.relative_path} with layout '{doc.layout_name}'")
        return html

    def process_file(self, source_path: Path, relative_path: Optional[str] = None) -> RenderResult:
        """Load and render one content file."""
        doc = self.load_document(source_path, relative_path)
        html = self.render_document(doc)
        return RenderResult(document=doc, html=html)
