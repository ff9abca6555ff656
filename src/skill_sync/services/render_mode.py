"""Render-mode classifier — decides how a fetched document should be shown.

A document rendered outside its repository cannot resolve relative links
(``./assets/x.png``, ``../doc.md``), so any such link downgrades the whole
document to plain text.
"""

from __future__ import annotations

import re

from skill_sync.domain.entities import RenderMode

# ── Link shapes ─────────────────────────────────────────────────────────────

_INLINE_LINK_RE = re.compile(r"!?\[[^\]]*\]\(([^)]+)\)")
_REFERENCE_DEF_RE = re.compile(r"^\s*\[[^\]]+\]:\s*(\S+)", re.MULTILINE)
_HTML_ATTR_RE = re.compile(
    r"<(?:a|img)\s+[^>]*(?:href|src)=[\"']([^\"']+)[\"'][^>]*>",
    re.IGNORECASE,
)

_ABSOLUTE_PREFIXES = ("http://", "https://")


def collect_urls(document: str) -> list[str]:
    """Return every link target found in *document*, in shape order."""
    urls: list[str] = []
    urls.extend(m.group(1) for m in _INLINE_LINK_RE.finditer(document))
    urls.extend(m.group(1) for m in _REFERENCE_DEF_RE.finditer(document))
    urls.extend(m.group(1) for m in _HTML_ATTR_RE.finditer(document))
    return urls


def classify(document: str) -> RenderMode:
    """Return ``PLAIN`` if any link is relative, else ``MARKDOWN``."""
    for url in collect_urls(document):
        if not url.strip().startswith(_ABSOLUTE_PREFIXES):
            return RenderMode.PLAIN
    return RenderMode.MARKDOWN
