"""
Output Size Report

Lists every file in a built site with a human-readable size:

    3KB     guide/intro.html
    812B    index.html
"""

from pathlib import Path
from typing import List, Tuple

from pressroom.contexts.rendering.logger import _log_info


def format_size(num_bytes: int) -> str:
    """
    Format a file size as whole bytes below 1 KiB, otherwise rounded kilobytes.

    Examples:
        >>> format_size(512)
        '512B'
        >>> format_size(1536)
        '2KB'
    """
    if num_bytes < 1024:
        return f"{num_bytes}B"
    # Round half up
    return f"{int(num_bytes / 1024 + 0.5)}KB"


def collect_output_sizes(root: Path) -> List[Tuple[str, str]]:
    """
    Collect (relative path, size label) for every file under root, sorted by path.
    """
    root = Path(root)
    return [
        (path.relative_to(root).as_posix(), format_size(path.stat().st_size))
        for path in sorted(root.rglob("*"))
        if path.is_file()
    ]


def log_output_sizes(root: Path) -> List[Tuple[str, str]]:
    """Log one line per output file and return the collected sizes."""
    sizes = collect_output_sizes(root)
    for relative_path, label in sizes:
        _log_info(f"{label}\t{relative_path}")
    return sizes
