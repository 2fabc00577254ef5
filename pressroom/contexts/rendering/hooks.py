"""
Hook Pipeline

Four fixed interception points in document processing, in this order:

1. before_markdown(doc)        doc.body is still raw markdown
2. after_markdown(doc)         doc.body is HTML, not yet marked render-safe
3. before_compile(doc)         last chance to change attributes such as 'layout'
4. after_compile(doc, html)    html is the rendered page; return a str to replace it

The first three return the document to continue with (usually the same object,
mutated). after_compile returns the replacement output or None to keep it.
"""

import importlib
from typing import Any, Callable, Mapping, Optional, Union

from pressroom.contexts.content.document import Document
from pressroom.contexts.rendering.logger import _log_debug
from pressroom.exceptions import ConfigurationError, HookError

HOOK_PHASES = ("before_markdown", "after_markdown", "before_compile", "after_compile")


class DocumentHooks:
    """
    Base hook set. Every method is a no-op; subclass and override the phases you need.

        class AddNavigation(DocumentHooks):
            def before_compile(self, doc):
                doc.attributes.setdefault("nav", build_nav())
                return doc
    """

    def before_markdown(self, doc: Document) -> Document:
        return doc

    def after_markdown(self, doc: Document) -> Document:
        return doc

    def before_compile(self, doc: Document) -> Document:
        return doc

    def after_compile(self, doc: Document, html: str) -> Optional[str]:
        return None


class CallbackHooks(DocumentHooks):
    """Hook set built from a mapping of phase name -> callable (or "module:function")."""

    def __init__(self, callbacks: Optional[Mapping[str, Union[str, Callable]]] = None):
        """
        Raises:
            ConfigurationError: For unknown phase names or values that are not callable
        """
        self.callbacks = {}

        for phase, callback in (callbacks or {}).items():
            if phase not in HOOK_PHASES:
                raise ConfigurationError(
                    f"Unknown hook '{phase}'. Valid hooks: {list(HOOK_PHASES)}"
                )
            if callback is None:
                continue
            if isinstance(callback, str):
                callback = import_callback(callback)
            if not callable(callback):
                raise ConfigurationError(f"Hook '{phase}' is not callable: {callback!r}")
            self.callbacks[phase] = callback

        _log_debug(f"Registered hooks: {list(self.callbacks) or 'none'}")

    def before_markdown(self, doc: Document) -> Document:
        return self._call("before_markdown", doc)

    def after_markdown(self, doc: Document) -> Document:
        return self._call("after_markdown", doc)

    def before_compile(self, doc: Document) -> Document:
        return self._call("before_compile", doc)

    def after_compile(self, doc: Document, html: str) -> Optional[str]:
        callback = self.callbacks.get("after_compile")
        return callback(doc, html) if callback else None

    def _call(self, phase: str, doc: Document) -> Document:
        callback = self.callbacks.get(phase)
        return callback(doc) if callback else doc


def import_callback(reference: str) -> Callable:
    """
    Import a callable named as "package.module:function".

    Raises:
        ConfigurationError: If the reference is malformed or cannot be imported
    """
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(f"Hook reference must look like 'module:function', got '{reference}'")

    try:
        target: Any = importlib.import_module(module_name)
        for part in attribute.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Unable to import hook '{reference}'", cause=e) from e

    return target


def run_document_hook(hooks: DocumentHooks, phase: str, doc: Document) -> Document:
    """
    Invoke one of the document-returning hooks.

    Raises:
        HookError: If the hook raises or does not return a Document
    """
    try:
        result = getattr(hooks, phase)(doc)
    except Exception as e:
        raise HookError(phase, doc.source_path, e) from e

    if not isinstance(result, Document):
        raise HookError(
            phase,
            doc.source_path,
            TypeError(f"{phase} must return a Document, got {type(result).__name__}"),
        )
    return result


def run_output_hook(hooks: DocumentHooks, doc: Document, html: str) -> str:
    """
    Invoke after_compile; a returned str replaces the rendered output.

    Raises:
        HookError: If the hook raises or returns something other than str or None
    """
    try:
        result = hooks.after_compile(doc, html)
    except Exception as e:
        raise HookError("after_compile", doc.source_path, e) from e

    if result is None:
        return html
    if not isinstance(result, str):
        raise HookError(
            "after_compile",
            doc.source_path,
            TypeError(f"after_compile must return str or None, got {type(result).__name__}"),
        )
    return result
