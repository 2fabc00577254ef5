"""Exception taxonomy for document rendering, tagged with phase and document path."""

from pathlib import Path
from typing import Iterable, Optional


class PressroomError(Exception):
    """
    Base exception for all rendering failures.

    Attributes:
        message: Error description
        phase: Processing phase that failed (e.g., 'resolve_layout'), if known
        source_path: Path of the document being processed, if any
        cause: The original exception, if this error wraps one
    """

    def __init__(
        self,
        message: str,
        phase: Optional[str] = None,
        source_path: Optional[Path] = None,
        cause: Optional[BaseException] = None,
    ):
        self.message = message
        self.phase = phase
        self.source_path = source_path
        self.cause = cause
        super().__init__(message)

    def tag(self, phase: str, source_path: Optional[Path]) -> "PressroomError":
        """Record phase and document path unless a more specific site already did."""
        if self.phase is None:
            self.phase = phase
        if self.source_path is None:
            self.source_path = source_path
        return self

    def __str__(self) -> str:
        parts = [self.message]

        if self.source_path is not None:
            parts.append(f"\nDocument: {self.source_path}")
        if self.phase is not None:
            parts.append(f"Phase: {self.phase}")
        if self.cause is not None:
            parts.append(f"\nOriginal error: {type(self.cause).__name__}: {self.cause}")

        return "\n".join(parts)


class ConfigurationError(PressroomError):
    """Raised for invalid or missing build configuration. Fatal for the whole pass."""

    pass


class MalformedFrontMatterError(PressroomError):
    """
    Raised when a front-matter block never closes or is not a YAML mapping.

    Attributes:
        line: 1-based line in the document where the problem was detected
    """

    def __init__(self, message: str, line: Optional[int] = None, **kwargs):
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message, **kwargs)


class LayoutNotFoundError(PressroomError):
    """
    Raised when a document names a layout whose template file does not exist.

    Attributes:
        layout: Requested layout name
        attempted_path: Path that was probed
    """

    def __init__(self, layout: str, attempted_path: Path, **kwargs):
        self.layout = layout
        self.attempted_path = attempted_path
        super().__init__(
            f"Invalid layout: '{layout}' does not exist at {attempted_path}", **kwargs
        )


class PartialNotFoundError(PressroomError):
    """
    Raised when no candidate file exists for a partial.

    Attributes:
        partial: Requested partial name
        attempted_paths: Every path probed, in resolution order
    """

    def __init__(self, partial: str, attempted_paths: Iterable[Path], **kwargs):
        self.partial = partial
        self.attempted_paths = list(attempted_paths)
        tried = ", ".join(str(p) for p in self.attempted_paths)
        super().__init__(f"Unable to locate partial '{partial}' (tried: {tried})", **kwargs)


class TemplateCompileError(PressroomError):
    """
    Raised when a template has invalid syntax. Never cached.

    Attributes:
        template_path: Template file that failed to compile
        lineno: Line of the syntax error, when the engine reports one
    """

    def __init__(
        self,
        message: str,
        template_path: Optional[Path] = None,
        lineno: Optional[int] = None,
        **kwargs,
    ):
        self.template_path = template_path
        self.lineno = lineno

        parts = [message]
        if template_path is not None:
            parts.append(f"\nTemplate: {template_path}")
        if lineno is not None:
            parts.append(f"Line: {lineno}")

        super().__init__("\n".join(parts), **kwargs)


class TemplateRenderError(PressroomError):
    """
    Raised when a compiled template fails while rendering.

    Attributes:
        template_path: Template that was rendering
    """

    def __init__(self, message: str, template_path: Optional[Path] = None, **kwargs):
        self.template_path = template_path
        if template_path is not None:
            message = f"{message}\nTemplate: {template_path}"
        super().__init__(message, **kwargs)


class HookError(PressroomError):
    """Raised when a user callback fails or returns something of the wrong shape."""

    def __init__(self, phase: str, source_path: Optional[Path], cause: BaseException):
        super().__init__(
            f"Hook '{phase}' failed", phase=phase, source_path=source_path, cause=cause
        )


class WriteError(PressroomError):
    """
    Raised when an output file cannot be written.

    Attributes:
        output_path: Destination that failed
    """

    def __init__(self, output_path: Path, cause: BaseException, **kwargs):
        self.output_path = output_path
        super().__init__(f"Unable to write {output_path}", cause=cause, **kwargs)


class DocumentError(PressroomError):
    """Raised for unexpected failures while processing a single document."""

    pass
