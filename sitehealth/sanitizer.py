"""HTML sanitization for check descriptions.

Descriptions may carry light formatting (paragraphs, emphasis, code, lists)
but never links, scripts, styles or attributes. Anything else that looks
like markup is dropped; a ``<`` that does not start a tag is escaped.
"""

from __future__ import annotations

import re

ALLOWED_TAGS: frozenset[str] = frozenset(
    {"br", "p", "strong", "b", "em", "i", "u", "code", "pre", "ul", "ol", "li"},
)

# Elements removed together with everything between their tags
_BLOCK_TAGS = ("script", "style", "iframe", "object", "embed", "noscript")

_BLOCK_PATTERNS = [
    re.compile(  # REGEX OK: XSS prevention
        rf"<\s*{tag}\b[^>]*>.*?<\s*/\s*{tag}\s*>",
        re.IGNORECASE | re.DOTALL,
    )
    for tag in _BLOCK_TAGS
]
_UNCLOSED_BLOCK = re.compile(  # REGEX OK: XSS prevention
    rf"<\s*(?:{'|'.join(_BLOCK_TAGS)})\b.*",
    re.IGNORECASE | re.DOTALL,
)
_COMMENT = re.compile(r"<!--.*?(?:-->|$)", re.DOTALL)
_TAG = re.compile(  # REGEX OK: HTML tag parsing
    r"""<\s*(/?)\s*([a-zA-Z][a-zA-Z0-9]*)"""
    r"""((?:\s+[^\s>"'=/]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>"']+))?)*)"""
    r"""\s*/?\s*>""",
)


class DescriptionSanitizer:
    """Reduce a description to the allowed formatting tags."""

    def __init__(self, allowed_tags: frozenset[str] | None = None) -> None:
        self.allowed_tags = allowed_tags or ALLOWED_TAGS

    def sanitize(self, description: str) -> str:
        if not description:
            return ""
        data = _COMMENT.sub("", description)
        for pattern in _BLOCK_PATTERNS:
            data = pattern.sub("", data)
        data = _UNCLOSED_BLOCK.sub("", data)
        return self._rebuild(data)

    __call__ = sanitize

    def _rebuild(self, data: str) -> str:
        parts: list[str] = []
        position = 0
        for match in _TAG.finditer(data):
            parts.append(_escape_text(data[position : match.start()]))
            closing, name = match.group(1), match.group(2).lower()
            if name in self.allowed_tags:
                if name == "br":
                    parts.append("<br>")
                else:
                    parts.append(f"</{name}>" if closing else f"<{name}>")
            position = match.end()
        parts.append(_escape_text(data[position:]))
        return "".join(parts)


def _escape_text(text: str) -> str:
    return text.replace("<", "&lt;").replace(">", "&gt;")


__all__ = ["ALLOWED_TAGS", "DescriptionSanitizer"]
