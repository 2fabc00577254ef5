"""
Rendering Context

Responsibilities:
- Drives each document through the fixed phase sequence
- Runs user hooks at the four interception points
- Walks the content tree and mirrors it into the output tree
- Reports per-document failures and output sizes

Owns: Phase order, hook invocation, build passes, output writing
Never: Parses front-matter or compiles templates itself
"""

from pressroom.contexts.rendering.builder import (
    BuildResult,
    DocumentFailure,
    SiteBuilder,
    walk_tree,
    write_output,
)
from pressroom.contexts.rendering.hooks import HOOK_PHASES, CallbackHooks, DocumentHooks
from pressroom.contexts.rendering.pipeline import (
    DocumentPipeline,
    Phase,
    RenderResult,
    output_path_for,
)

__all__ = [
    "BuildResult",
    "DocumentFailure",
    "SiteBuilder",
    "walk_tree",
    "write_output",
    "HOOK_PHASES",
    "CallbackHooks",
    "DocumentHooks",
    "DocumentPipeline",
    "Phase",
    "RenderResult",
    "output_path_for",
]
