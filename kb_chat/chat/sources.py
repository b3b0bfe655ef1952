"""Split a generated answer into its body and the trailing source citations.

Two citation shapes are recognised, tried in order:

    Answer body.

    **Sources:**
    - *Pricing Guide*
    - Campaign Rules

and a single trailing line:

    Answer body.
    Source: Pricing Guide.

The body is only ever truncated, never rewritten.
"""
from __future__ import annotations

import re
from typing import Callable, Optional

from kb_chat.core.contracts.chat import ExtractionResult

BLOCK_PLACEHOLDERS = frozenset({"Search_Knowledge_Base Tool"})
INLINE_PLACEHOLDERS = frozenset({"Search_Knowledge_Base Tool", "Opera knowledge base documents"})

# "Sources:", "Source:", "**Sources**:", "**Sources:**" on a line of its own
_BLOCK_HEADER = re.compile(r"^[ \t]*\*{0,2}Sources?(?:\*{0,2}:|:\*{0,2})[ \t]*\r?\n", re.IGNORECASE | re.MULTILINE)
# the marker needs whitespace after it, so "---" rules and "*emphasis*" lines are not bullets
_BULLET = re.compile(r"^[ \t]*[-*][ \t]+\*{0,2}([^*\n]*)", re.MULTILINE)
# "." does not cross newlines, so this only matches on the final line
_INLINE = re.compile(r"\*{0,2}\bSource:[ \t]*(.+?)\.?\s*\Z", re.IGNORECASE)

Matcher = Callable[[str], Optional[ExtractionResult]]


def _clean_name(raw: str) -> str:
    return raw.strip(" \t\r*")


def match_block_citations(text: str) -> ExtractionResult | None:
    headers = list(_BLOCK_HEADER.finditer(text))
    if not headers:
        return None
    header = headers[-1]
    sources = []
    for m in _BULLET.finditer(text, header.end()):
        name = _clean_name(m.group(1))
        if name.strip("-") and name not in BLOCK_PLACEHOLDERS:
            sources.append(name)
    return ExtractionResult(clean_text=text[: header.start()].rstrip(), sources=sources)


def match_inline_citation(text: str) -> ExtractionResult | None:
    m = _INLINE.search(text)
    if not m:
        return None
    name = _clean_name(m.group(1))
    sources = [name] if name and name not in INLINE_PLACEHOLDERS else []
    return ExtractionResult(clean_text=text[: m.start()].rstrip(), sources=sources)


MATCHERS: tuple[Matcher, ...] = (match_block_citations, match_inline_citation)


def extract_sources(text: str) -> ExtractionResult:
    """Return the answer without its citation tail plus the cited source names.

    Never fails: text without a recognised tail comes back unchanged with no sources.
    """
    for matcher in MATCHERS:
        result = matcher(text)
        if result is not None:
            return result
    return ExtractionResult(clean_text=text, sources=[])
