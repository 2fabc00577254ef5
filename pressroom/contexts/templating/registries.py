"""
Templating Registries

Layout and partial resolution backed by a read-through cache of compiled templates.
"""

import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from jinja2 import Environment, Template, pass_context
from jinja2.runtime import Context
from markupsafe import Markup

from pressroom.contexts.content.document import DEFAULT_LAYOUT
from pressroom.contexts.templating.engine import compile_template, create_environment
from pressroom.contexts.templating.logger import (
    _log_debug,
    log_compile_failure,
    log_template_compiled,
)
from pressroom.exceptions import (
    ConfigurationError,
    LayoutNotFoundError,
    PartialNotFoundError,
    TemplateCompileError,
    TemplateRenderError,
)

# Probed in order for partials; layouts always use the first
TEMPLATE_EXTENSIONS = (".html.jinja", ".jinja")

Compiler = Callable[[Environment, str, Path], Template]


class TemplateCache:
    """
    Read-through cache of compiled templates keyed by resolved file path.

    Each distinct path is compiled at most once per cache lifetime. Compilation
    happens outside the lock; if two callers race on the same path the first
    stored template wins and the late one is discarded. Failed compiles are
    never stored. Nothing is invalidated when files change on disk: build a new
    cache (or call clear()) for every pass that may see edited templates.
    """

    def __init__(self, compiler: Callable[[str, Path], Template]):
        """
        Args:
            compiler: Turns (source, path) into a compiled template
        """
        self._compiler = compiler
        self._cache: Dict[Path, Template] = {}
        self._lock = threading.Lock()
        self.compile_count = 0

    def get(self, template_path: Path) -> Template:
        """
        Return the compiled template for a file, compiling it on first use.

        Raises:
            TemplateCompileError: If the template has syntax errors or cannot be read
        """
        key = Path(template_path).resolve()

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        start_time = time.time()
        try:
            source = key.read_text(encoding="utf-8")
            template = self._compiler(source, key)
        except TemplateCompileError as e:
            log_compile_failure(key, e)
            raise
        except OSError as e:
            log_compile_failure(key, e)
            raise TemplateCompileError(
                "Unable to read template", template_path=key, cause=e
            ) from e

        with self._lock:
            self.compile_count += 1
            winner = self._cache.setdefault(key, template)

        log_template_compiled(key, time.time() - start_time)
        return winner

    def is_cached(self, template_path: Path) -> bool:
        """Check if a template file has a compiled entry."""
        return Path(template_path).resolve() in self._cache

    def clear(self) -> None:
        """Drop every compiled template."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


class TemplateRegistry:
    """
    Resolves layouts and partials to template files and hands out compiled templates.

    Layouts are looked up by name: an explicit entry in `layouts` wins, otherwise
    the name is joined with the templates root and the first template extension.
    Partials are looked up next to the layout that uses them, so every layout
    directory carries its own partials:

        templates/
            default.html.jinja
            docs/page.html.jinja     {{ partial("nav") }} -> templates/docs/nav.html.jinja
            docs/nav.html.jinja
            blog/post.html.jinja     {{ partial("nav") }} -> templates/blog/nav.jinja
            blog/nav.jinja
    """

    def __init__(
        self,
        templates_path: Path,
        layouts: Optional[Mapping[str, Any]] = None,
        template_extensions: Sequence[str] = TEMPLATE_EXTENSIONS,
        template_options: Optional[Dict[str, Any]] = None,
        compiler: Compiler = compile_template,
    ):
        """
        Initialize the registry and validate the default layout.

        Args:
            templates_path: Root directory of the layout templates
            layouts: Layout name -> template path (relative to templates_path, or
                absolute). Must contain 'default'.
            template_extensions: Candidate extensions, probed in order
            template_options: Forwarded to the Jinja2 environment
            compiler: Compile function, swappable for instrumentation

        Raises:
            ConfigurationError: If the templates root or the default layout is missing
        """
        self.templates_path = Path(templates_path)
        self.layouts = dict(layouts or {})
        self.template_extensions = tuple(template_extensions)

        if not self.template_extensions:
            raise ConfigurationError("At least one template extension is required")
        if not self.templates_path.is_dir():
            raise ConfigurationError(f"Templates directory not found: {self.templates_path}")
        if DEFAULT_LAYOUT not in self.layouts:
            raise ConfigurationError(
                "layouts.default is required: documents without a 'layout' attribute render with it"
            )

        default_path = self.get_layout_path(DEFAULT_LAYOUT)
        if not default_path.is_file():
            raise ConfigurationError(f"Default layout not found at {default_path}")

        self.env = create_environment(template_options)
        self.env.globals["partial"] = self._make_partial_helper()
        self.cache = TemplateCache(lambda source, path: compiler(self.env, source, path))

        _log_debug(f"Template registry ready at {self.templates_path} (default: {default_path})")

    def get_layout_path(self, name: str) -> Path:
        """
        Get the file path for a layout name without checking that it exists.

        Args:
            name: Layout name (e.g., 'default', 'blog/post')

        Returns:
            Path to the layout template
        """
        configured = self.layouts.get(name)
        if configured is not None:
            path = Path(configured)
            return path if path.is_absolute() else self.templates_path / path
        return self.templates_path / f"{name}{self.template_extensions[0]}"

    def resolve_layout(self, name: str) -> Path:
        """
        Resolve a layout name to an existing template file.

        Raises:
            LayoutNotFoundError: If no file exists at the layout's path
        """
        layout_path = self.get_layout_path(name)
        if not layout_path.is_file():
            raise LayoutNotFoundError(name, layout_path)
        return layout_path

    def resolve_partial(self, name: str, referencing_layout_file: Path) -> Path:
        """
        Resolve a partial relative to the directory of the layout that references it.

        Args:
            name: Partial name, optionally with subdirectories (e.g., 'nav', 'shared/footer')
            referencing_layout_file: Layout template whose directory anchors the lookup

        Returns:
            First candidate path that exists

        Raises:
            PartialNotFoundError: Listing every candidate tried
        """
        base = Path(referencing_layout_file).parent / name
        attempted = [base.with_name(base.name + ext) for ext in self.template_extensions]

        for candidate in attempted:
            if candidate.is_file():
                return candidate

        raise PartialNotFoundError(name, attempted)

    def get_template(self, template_path: Path) -> Template:
        """Get a compiled template, compiling and caching it on first use."""
        return self.cache.get(template_path)

    def render_partial(
        self, partial_name: str, context: Mapping[str, Any], /, **params
    ) -> Markup:
        """
        Render a partial with the caller's context plus keyword parameters.

        Returns:
            Render-safe markup, so the including template does not escape it again
        """
        layout_file = context.get("layout_file")
        if layout_file is None:
            raise TemplateRenderError(f"partial('{partial_name}') used outside of a layout")

        template = self.get_template(self.resolve_partial(partial_name, layout_file))
        return Markup(template.render({**context, **params}))

    def is_cached(self, template_path: Path) -> bool:
        """Check if a template file is in the cache."""
        return self.cache.is_cached(template_path)

    def clear_cache(self) -> None:
        """Clear the template cache."""
        self.cache.clear()

    def _make_partial_helper(self) -> Callable:
        registry = self

        @pass_context
        def partial(context: Context, partial_name: str, /, **params) -> Markup:
            return registry.render_partial(partial_name, context.get_all(), **params)

        return partial
