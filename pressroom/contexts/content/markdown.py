"""
Markdown Renderer

Converts markdown bodies to HTML fragments with markdown-it-py. One renderer is
configured per pipeline and applied uniformly to every document:
- raw HTML pass-through, autolinking and typographic replacements (switchable)
- heading anchors with permalinks (mdit_py_plugins.anchors)
- fenced-code syntax highlighting (Pygments)
- a table of contents in place of a [[toc]] / ${toc} paragraph
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_core import StateCore
from markdown_it.token import Token
from mdit_py_plugins.anchors import anchors_plugin
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from pressroom.contexts.content.logger import _log_debug

DEFAULT_MARKDOWN_OPTIONS = {
    "html": True,
    "linkify": True,
    "typographer": True,
}

DEFAULT_ANCHOR_OPTIONS = {
    "min_level": 1,
    "max_level": 6,
    "permalink": True,
    "permalinkSymbol": "⚭",
}

TOC_MARKER = re.compile(r"^\s*(\$\{toc\}|\[\[toc\]\])\s*$", re.IGNORECASE)
TOC_CONTAINER_CLASS = "table-of-contents"


def slugify(text: str) -> str:
    """
    Turn heading text into an anchor id ("Hello World!" -> "hello-world").

    Also registered as a template filter so links built in templates match the
    anchors generated for headings.
    """
    return re.sub(r"[^\w\- ]", "", str(text).strip().lower().replace(" ", "-"))


class MarkdownRenderer:
    """Markdown to HTML converter configured once per build pass."""

    def __init__(
        self,
        markdown_options: Optional[Dict[str, Any]] = None,
        anchor_options: Optional[Dict[str, Any]] = None,
        highlight_options: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            markdown_options: markdown-it options; override DEFAULT_MARKDOWN_OPTIONS key by key
            anchor_options: anchors_plugin keyword arguments; override DEFAULT_ANCHOR_OPTIONS
            highlight_options: Keyword arguments for Pygments' HtmlFormatter
        """
        self.markdown_options = {**DEFAULT_MARKDOWN_OPTIONS, **(markdown_options or {})}
        self.anchor_options = {
            "slug_func": slugify,
            **DEFAULT_ANCHOR_OPTIONS,
            **(anchor_options or {}),
        }
        self.formatter = HtmlFormatter(**{**(highlight_options or {}), "nowrap": True})

        self.md = (
            MarkdownIt("js-default", {**self.markdown_options, "highlight": self._highlight})
            .use(anchors_plugin, **self.anchor_options)
            .use(toc_plugin)
        )
        _log_debug(f"Markdown renderer configured: {self.markdown_options}")

    def render(self, text: str) -> str:
        """Render a markdown body to an HTML fragment."""
        return self.md.render(text)

    def _highlight(self, code: str, lang: str, attrs: Dict[str, Any]) -> str:
        """Highlight a fenced block; empty string lets markdown-it escape it as plain code."""
        if not lang:
            return ""
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            return ""
        return highlight(code, lexer, self.formatter)


def toc_plugin(md: MarkdownIt, min_level: int = 1, max_level: int = 6) -> None:
    """
    Replace a paragraph holding only [[toc]] or ${toc} with a nested heading list.

    Must be used after anchors_plugin: entries link to the heading ids it assigns.
    """

    def toc_rule(state: StateCore) -> None:
        headings = _collect_headings(state.tokens, min_level, max_level)
        tokens: List[Token] = []
        idx = 0

        while idx < len(state.tokens):
            if _is_toc_paragraph(state.tokens, idx):
                nav = Token("html_block", "", 0)
                nav.content = _render_toc(headings)
                tokens.append(nav)
                idx += 3
                continue
            tokens.append(state.tokens[idx])
            idx += 1

        state.tokens = tokens

    md.core.ruler.push("toc", toc_rule)


def _is_toc_paragraph(tokens: List[Token], idx: int) -> bool:
    if idx + 2 >= len(tokens):
        return False
    return (
        tokens[idx].type == "paragraph_open"
        and tokens[idx + 1].type == "inline"
        and tokens[idx + 2].type == "paragraph_close"
        and TOC_MARKER.match(tokens[idx + 1].content) is not None
    )


def _collect_headings(
    tokens: List[Token], min_level: int, max_level: int
) -> List[Tuple[int, str, str]]:
    """(level, id, text) for every anchored heading within the level range."""
    headings = []
    for idx, token in enumerate(tokens):
        if token.type != "heading_open":
            continue
        level = int(token.tag[1])
        slug = token.attrGet("id")
        if slug is None or not min_level <= level <= max_level:
            continue
        headings.append((level, str(slug), _heading_text(tokens[idx + 1])))
    return headings


def _heading_text(inline: Token) -> str:
    """Plain heading text, leaving out the permalink the anchors plugin appended."""
    parts = []
    in_permalink = False
    for child in inline.children or []:
        if child.type == "link_open" and "header-anchor" in str(child.attrGet("class") or ""):
            in_permalink = True
        elif child.type == "link_close" and in_permalink:
            in_permalink = False
        elif not in_permalink and child.type in ("text", "code_inline"):
            parts.append(child.content)
    return "".join(parts).strip()


def _render_toc(headings: List[Tuple[int, str, str]]) -> str:
    html = [f'<nav class="{TOC_CONTAINER_CLASS}">']
    open_levels: List[int] = []

    for level, slug, text in headings:
        if not open_levels or level > open_levels[-1]:
            html.append("<ol>")
            open_levels.append(level)
        else:
            html.append("</li>")
            # Close a list only when the heading also belongs above its parent item
            while len(open_levels) > 1 and level <= open_levels[-2]:
                html.append("</ol></li>")
                open_levels.pop()
            # Shallower than its siblings but deeper than the parent: same list
            if level < open_levels[-1]:
                open_levels[-1] = level
        html.append(f'<li><a href="#{escapeHtml(slug)}">{escapeHtml(text)}</a>')

    while open_levels:
        html.append("</li></ol>")
        open_levels.pop()

    html.append("</nav>\n")
    return "".join(html)
