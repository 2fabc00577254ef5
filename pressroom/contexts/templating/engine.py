"""
Template Engine

Builds the Jinja2 environment and compiles template sources into reusable
templates. Layout selection and partial lookup live in registries.py.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    ChainableUndefined,
    DebugUndefined,
    Environment,
    StrictUndefined,
    Template,
    TemplateSyntaxError,
    Undefined,
)

from pressroom.contexts.templating.helpers import TEMPLATE_FILTERS
from pressroom.exceptions import ConfigurationError, TemplateCompileError

DEFAULT_TEMPLATE_OPTIONS: Dict[str, Any] = {
    # {{ value }} is escaped unless it is Markup (document bodies, partials)
    "autoescape": True,
    "keep_trailing_newline": True,
}

# Names accepted for the 'undefined' option when config comes from YAML
UNDEFINED_TYPES = {
    "default": Undefined,
    "strict": StrictUndefined,
    "chainable": ChainableUndefined,
    "debug": DebugUndefined,
}


def create_environment(template_options: Optional[Dict[str, Any]] = None) -> Environment:
    """
    Create the Jinja2 environment shared by all layouts and partials of a pipeline.

    Args:
        template_options: Keyword arguments forwarded verbatim to jinja2.Environment;
            they override DEFAULT_TEMPLATE_OPTIONS. 'undefined' may be given by
            name ('strict', 'chainable', 'debug', 'default').

    Returns:
        Environment with the template helper filters registered

    Raises:
        ConfigurationError: If the options are not accepted by Jinja2
    """
    options = {**DEFAULT_TEMPLATE_OPTIONS, **(template_options or {})}

    undefined = options.get("undefined")
    if isinstance(undefined, str):
        if undefined not in UNDEFINED_TYPES:
            raise ConfigurationError(
                f"Unknown undefined type '{undefined}'. Valid names: {sorted(UNDEFINED_TYPES)}"
            )
        options["undefined"] = UNDEFINED_TYPES[undefined]

    try:
        env = Environment(**options)
    except TypeError as e:
        raise ConfigurationError(
            f"Invalid template options: {sorted(options)}", cause=e
        ) from e

    env.filters.update(TEMPLATE_FILTERS)
    return env


def compile_template(env: Environment, source: str, template_path: Path) -> Template:
    """
    Compile template source, keeping the file path in tracebacks and errors.

    Args:
        env: Environment the template belongs to
        source: Template source text
        template_path: File the source was read from

    Returns:
        Compiled Jinja2 Template

    Raises:
        TemplateCompileError: If the source has syntax errors
    """
    try:
        code = env.compile(source, name=template_path.name, filename=str(template_path))
    except TemplateSyntaxError as e:
        raise TemplateCompileError(
            e.message or "Invalid template syntax",
            template_path=template_path,
            lineno=e.lineno,
            cause=e,
        ) from e

    return env.template_class.from_code(env, code, env.make_globals(None))
