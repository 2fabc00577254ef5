"""
Shared utilities for PRESSROOM.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamp formatting
"""

from pressroom.utils.timestamp import format_timestamp, now

__all__ = ["format_timestamp", "now"]
