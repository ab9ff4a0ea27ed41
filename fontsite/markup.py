"""Markdown to HTML rendering for page content."""

from __future__ import annotations

from markdown_it import MarkdownIt


def _is_relative(link: str) -> bool:
    if not link:
        return False
    if link.startswith("#"):
        return True
    if link == "/" or (link.startswith("/") and not link.startswith("//")):
        return True
    return link.startswith("./") or link.startswith("../")


def _link_open(self, tokens, idx, options, env):
    token = tokens[idx]
    if not _is_relative(str(token.attrGet("href") or "")):
        token.attrSet("target", "_blank")
    return self.renderToken(tokens, idx, options, env)


_MARKDOWN = MarkdownIt("commonmark", {"typographer": True}).enable(
    ["table", "strikethrough", "replacements", "smartquotes"]
)
_MARKDOWN.add_render_rule("link_open", _link_open)


def md2html(md: str) -> str:
    """Render Markdown as HTML; links leaving the site open in a new tab."""
    return _MARKDOWN.render(md)