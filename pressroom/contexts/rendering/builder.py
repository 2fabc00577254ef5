"""
Site Builder

Walks the content tree, renders every document through a DocumentPipeline and
mirrors the result into the output tree:

    content/                     output/
        index.md         ->          index.html
        guide/           ->          guide/
        guide/intro.md   ->          guide/intro.html

Documents that fail are logged and reported in the BuildResult; the rest of
the pass carries on unless fail_fast is set.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from pressroom.config import BuildConfig
from pressroom.contexts.rendering.hooks import DocumentHooks
from pressroom.contexts.rendering.logger import (
    _log_debug,
    log_build_result,
    log_build_start,
    log_document_failure,
)
from pressroom.contexts.rendering.pipeline import DocumentPipeline, Phase
from pressroom.exceptions import PressroomError, WriteError


@dataclass
class DocumentFailure:
    """
    One document that could not be built.

    Attributes:
        path: Relative path of the source entry
        phase: Phase that failed (e.g., 'resolve_layout')
        error: The tagged exception
    """

    path: str
    phase: Optional[str]
    error: PressroomError


@dataclass
class BuildResult:
    """
    Outcome of a build pass.

    Attributes:
        written: Output files written, relative to the output root
        directories: Directory entries mirrored into the output root
        failures: Documents that failed, in processing order
        elapsed: Wall-clock duration of the pass in seconds
    """

    written: List[str] = field(default_factory=list)
    directories: List[str] = field(default_factory=list)
    failures: List[DocumentFailure] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def success(self) -> bool:
        """True when every document was written."""
        return not self.failures


def walk_tree(root: Path, extensions: Optional[Sequence[str]] = None) -> List[str]:
    """
    List a directory tree as relative POSIX paths.

    Entries are sorted by name within each directory and directories come right
    before their contents, with a trailing '/':

        ['about.md', 'guide/', 'guide/intro.md', 'index.md']

    Args:
        root: Directory to walk
        extensions: Keep only files ending in one of these (case-insensitive);
            None keeps every file. Directories are always listed.

    Returns:
        Relative paths in walk order
    """
    root = Path(root)
    suffixes = tuple(ext.lower() for ext in extensions) if extensions is not None else None
    entries: List[str] = []

    def _walk(directory: Path, prefix: str) -> None:
        for child in sorted(directory.iterdir(), key=lambda p: p.name):
            if child.is_dir():
                entries.append(f"{prefix}{child.name}/")
                _walk(child, f"{prefix}{child.name}/")
            elif suffixes is None or child.name.lower().endswith(suffixes):
                entries.append(f"{prefix}{child.name}")

    _walk(root, "")
    return entries


def write_output(output_file: Path, html: str) -> None:
    """
    Write a page as UTF-8, creating parent directories as needed.

    Raises:
        WriteError: If the directory or file cannot be written
    """
    output_file = Path(output_file)
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(html, encoding="utf-8")
    except OSError as e:
        raise WriteError(output_file, e, phase=Phase.WRITE.value) from e


class SiteBuilder:
    """Builds a content tree into an output tree."""

    def __init__(self, config: BuildConfig, hooks: Optional[DocumentHooks] = None):
        """
        Args:
            config: Build settings
            hooks: Hook set; defaults to CallbackHooks built from config.callbacks
        """
        self.config = config
        self.hooks = hooks

    def build(self, paths: Optional[Sequence[str]] = None) -> BuildResult:
        """
        Run one build pass.

        A fresh pipeline (and template cache) is created for every pass, so
        template edits between passes are always picked up.

        Args:
            paths: Relative entries to build, directories ending in '/'
                (default: walk_tree of the content root, filtered by config.extensions)

        Returns:
            BuildResult listing written files, mirrored directories and failures

        Raises:
            ConfigurationError: Before anything is read or written, if the
                layouts, templates root or callbacks are invalid
            PressroomError: The first document failure, when config.fail_fast is set
        """
        start_time = time.time()
        config = self.config

        pipeline = DocumentPipeline(config, hooks=self.hooks)

        if paths is None:
            paths = walk_tree(config.content_path, config.extensions)

        log_build_start(config.content_path, config.output_path, len(paths))
        result = BuildResult()

        for relative_path in paths:
            if relative_path.endswith("/"):
                self._mirror_directory(relative_path, result)
                continue

            try:
                rendered = pipeline.process_file(config.content_path / relative_path, relative_path)
                write_output(config.output_path / rendered.document.output_path, rendered.html)
            except PressroomError as e:
                self._record_failure(relative_path, e, result)
                continue

            result.written.append(rendered.document.output_path)
            _log_debug(f"Wrote {rendered.document.output_path}")

        result.elapsed = time.time() - start_time
        log_build_result(result)
        return result

    def _mirror_directory(self, relative_path: str, result: BuildResult) -> None:
        directory = self.config.output_path / relative_path
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error = WriteError(directory, e, phase=Phase.WRITE.value)
            self._record_failure(relative_path, error, result)
            return
        result.directories.append(relative_path)

    def _record_failure(self, relative_path: str, error: PressroomError, result: BuildResult) -> None:
        log_document_failure(relative_path, error)
        result.failures.append(DocumentFailure(path=relative_path, phase=error.phase, error=error))
        if self.config.fail_fast:
            raise error
