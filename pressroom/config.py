"""
Build Configuration

Collects everything a build pass needs: where content, templates and output
live, which layouts exist, and the options forwarded to the markdown renderer
and the template engine.

Configuration can be built in code or loaded from YAML:

    # site.yaml
    content_path: src/content
    templates_path: src/templates
    output_path: dist
    layouts:
      default: default.html.jinja
    markdown_options:
      typographer: false
    callbacks:
      before_compile: mysite.hooks:add_navigation
    data:
      title: My Site
      url: https://example.org

    >>> config = load_build_config(Path("site.yaml"), fail_fast=True)
"""

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from pressroom.contexts.templating.registries import TEMPLATE_EXTENSIONS
from pressroom.exceptions import ConfigurationError

load_dotenv()
CONTENT_PATH = Path(os.getenv("PRESSROOM_CONTENT_PATH", "src/content"))
TEMPLATES_PATH = Path(os.getenv("PRESSROOM_TEMPLATES_PATH", "src/templates"))
OUTPUT_PATH = Path(os.getenv("PRESSROOM_OUTPUT_PATH", "dist"))
LOGS_PATH = Path(os.getenv("PRESSROOM_LOGS_PATH", "logs"))

# Source files treated as documents
DEFAULT_EXTENSIONS = (".md", ".markdown")
DEFAULT_TARGET_EXTENSION = ".html"

# Keys whose relative values are anchored at the config file's directory
PATH_KEYS = ("content_path", "templates_path", "output_path")


def _normalize_extension(extension: str) -> str:
    extension = str(extension)
    return extension if extension.startswith(".") else f".{extension}"


@dataclass
class BuildConfig:
    """
    Settings for one build pass.

    Attributes:
        content_path: Root of the markdown tree
        templates_path: Root of the layout templates
        output_path: Root of the generated HTML tree
        layouts: Layout name -> template path; 'default' is required
        extensions: Source extensions rendered as documents
        target_extension: Extension given to output files
        template_extensions: Candidate template extensions, probed in order
        markdown_options: markdown-it options (html, linkify, typographer, ...)
        anchor_options: Heading anchor options
        highlight_options: Pygments HtmlFormatter options
        template_options: Forwarded verbatim to the Jinja2 environment
        callbacks: Hook phase -> callable or "module:function"
        data: Site-wide context, exposed to templates as `site`
        fail_fast: Stop the pass at the first failed document
    """

    content_path: Path = CONTENT_PATH
    templates_path: Path = TEMPLATES_PATH
    output_path: Path = OUTPUT_PATH
    layouts: Dict[str, Any] = field(default_factory=dict)
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    target_extension: str = DEFAULT_TARGET_EXTENSION
    template_extensions: Tuple[str, ...] = TEMPLATE_EXTENSIONS
    markdown_options: Dict[str, Any] = field(default_factory=dict)
    anchor_options: Dict[str, Any] = field(default_factory=dict)
    highlight_options: Dict[str, Any] = field(default_factory=dict)
    template_options: Dict[str, Any] = field(default_factory=dict)
    callbacks: Dict[str, Any] = field(default_factory=dict)
    data: Dict[str, Any] = field(default_factory=dict)
    fail_fast: bool = False

    def __post_init__(self):
        self.content_path = Path(self.content_path)
        self.templates_path = Path(self.templates_path)
        self.output_path = Path(self.output_path)
        self.extensions = tuple(_normalize_extension(ext) for ext in self.extensions)
        self.target_extension = _normalize_extension(self.target_extension)
        self.template_extensions = tuple(
            _normalize_extension(ext) for ext in self.template_extensions
        )


def _default_values() -> Dict[str, Any]:
    """BuildConfig defaults as plain containers OmegaConf can merge into."""
    values = asdict(BuildConfig())
    for key in PATH_KEYS:
        values[key] = str(values[key])
    values["extensions"] = list(values["extensions"])
    values["template_extensions"] = list(values["template_extensions"])
    return values


def load_build_config(config_path: Optional[Path] = None, **overrides) -> BuildConfig:
    """
    Load a BuildConfig from YAML, merged over the defaults.

    OmegaConf interpolations (e.g., `${data.url}`) are resolved. Relative paths
    in the file are taken relative to the file's directory. Keyword overrides
    are applied last and may hold values YAML cannot (callables for callbacks);
    None-valued overrides are ignored.

    Args:
        config_path: YAML file; None uses defaults and overrides only
        **overrides: BuildConfig field values

    Returns:
        BuildConfig

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or names unknown keys
    """
    known_keys = {f.name for f in fields(BuildConfig)}
    file_values: Dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        try:
            loaded = OmegaConf.load(config_path)
            merged = OmegaConf.merge(OmegaConf.create(_default_values()), loaded)
            values = OmegaConf.to_container(merged, resolve=True)
            file_values = OmegaConf.to_container(loaded, resolve=False) or {}
        except (OSError, yaml.YAMLError, OmegaConfBaseException) as e:
            raise ConfigurationError(f"Unable to load config {config_path}", cause=e) from e
    else:
        values = _default_values()

    unknown = sorted(set(values) - known_keys)
    if unknown:
        raise ConfigurationError(
            f"Unknown config keys {unknown} in {config_path}. Valid keys: {sorted(known_keys)}"
        )

    if config_path is not None:
        for key in PATH_KEYS:
            if key in file_values and not Path(values[key]).is_absolute():
                values[key] = config_path.parent / values[key]

    for key, value in overrides.items():
        if key not in known_keys:
            raise ConfigurationError(f"Unknown config override '{key}'")
        if value is not None:
            values[key] = value

    return BuildConfig(**values)
