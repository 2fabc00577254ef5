"""
Front-Matter Parser

Splits raw document text into a YAML metadata block and the markdown body.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

import yaml
from yaml.constructor import ConstructorError

from pressroom.exceptions import MalformedFrontMatterError

# Tokens accepted on the first line to open a front-matter block
OPENING_DELIMITERS = ("---", "= yaml =")
# Closes a block regardless of which token opened it (YAML document end marker)
DOCUMENT_END_MARKER = "..."

BYTE_ORDER_MARK = "\ufeff"


@dataclass
class FrontMatter:
    """
    Result of splitting a document.

    Attributes:
        attributes: Parsed metadata (empty when the document has no block)
        body: Text after the block, verbatim
        frontmatter: Raw YAML source of the block
        body_begin: 1-based line number where the body starts
    """

    attributes: Dict[str, Any] = field(default_factory=dict)
    body: str = ""
    frontmatter: str = ""
    body_begin: int = 1


def parse_front_matter(text: str) -> FrontMatter:
    """
    Split a document into front-matter attributes and body.

    A block opens when the first line (after an optional byte order mark) is
    '---' or '= yaml =', and closes at the next line holding the same token or
    '...'. The closing line's terminator is consumed; everything after it is
    the body, untouched.

    Args:
        text: Full document text

    Returns:
        FrontMatter with attributes and body. Without a block, attributes is
        empty and body is the input unchanged.

    Raises:
        MalformedFrontMatterError: If the block never closes, is not valid YAML,
            or does not hold a mapping
    """
    lines = text.splitlines(keepends=True)
    if not lines:
        return FrontMatter(body=text)

    opening = lines[0].lstrip(BYTE_ORDER_MARK).rstrip()
    if opening not in OPENING_DELIMITERS:
        return FrontMatter(body=text)

    for index in range(1, len(lines)):
        if lines[index].rstrip() in (opening, DOCUMENT_END_MARKER):
            closing_index = index
            break
    else:
        raise MalformedFrontMatterError(
            f"Front-matter opened with '{opening}' is never closed", line=1
        )

    block = "".join(lines[1:closing_index])
    body = "".join(lines[closing_index + 1 :])

    return FrontMatter(
        attributes=_load_attributes(block),
        body=body,
        frontmatter=block.rstrip("\r\n"),
        body_begin=closing_index + 2,
    )


class StringKeyLoader(yaml.SafeLoader):
    """
    SafeLoader whose mappings have str keys at every level.

    Keys are converted while each mapping is built, so YAML keys that are
    distinct but equal in Python (1 and true, 1 and 1.0) both survive. Keys that
    collide once converted (1 and "1") are rejected.
    """

    def construct_mapping(self, node, deep=False):
        if not isinstance(node, yaml.MappingNode):
            return super().construct_mapping(node, deep=deep)

        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            key = str(self.construct_object(key_node, deep=deep))
            if key in mapping:
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key '{key}'",
                    key_node.start_mark,
                )
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def _load_attributes(block: str) -> Dict[str, Any]:
    """Parse the YAML block into a string-keyed dict."""
    try:
        data = yaml.load(block, Loader=StringKeyLoader)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        # Block content starts on line 2 of the document; marks are 0-based
        line = mark.line + 2 if mark is not None else None
        raise MalformedFrontMatterError(
            "Front-matter is not valid YAML", line=line, cause=e
        ) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise MalformedFrontMatterError(
            f"Front-matter must be a mapping, got {type(data).__name__}", line=2
        )

    return data
