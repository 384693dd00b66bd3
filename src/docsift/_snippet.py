"""Best-window snippet selection for search results."""

from __future__ import annotations

from collections.abc import Collection

from ._config import SearchConfig
from ._text import highlight_terms

ELLIPSIS = "..."

_DEFAULT_CONFIG = SearchConfig()


def find_best_snippet_position(
    content_lower: str,
    query: str,
    matched_terms: Collection[str],
    config: SearchConfig = _DEFAULT_CONFIG,
) -> int:
    """Center of the window holding the most distinct matched terms.

    Windows of ``snippet_window`` chars are tried every ``snippet_step``
    chars; the first window with the highest count wins. Without any hit
    the first occurrence of the query is used, else position 0.
    """
    terms = [t.lower() for t in matched_terms]
    window = config.snippet_window
    best_position = 0
    max_matches = 0

    for i in range(0, len(content_lower) - window, config.snippet_step):
        chunk = content_lower[i:i + window]
        matches = sum(1 for term in terms if term in chunk)
        if matches > max_matches:
            max_matches = matches
            best_position = i + window // 2

    if max_matches == 0:
        query_index = content_lower.find(query)
        if query_index != -1:
            best_position = query_index

    return best_position


def create_snippet(
    content: str,
    query: str,
    matched_terms: Collection[str],
    config: SearchConfig = _DEFAULT_CONFIG,
) -> str:
    """Excerpt of content around the densest cluster of matched terms, highlighted."""
    if len(content) <= config.snippet_threshold:
        return highlight_terms(content, matched_terms)

    position = find_best_snippet_position(
        content.lower(), query.lower().strip(), matched_terms, config,
    )
    start = max(0, position - config.snippet_before)
    end = min(len(content), position + config.snippet_after)

    snippet = content[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(content):
        snippet = snippet + ELLIPSIS

    return highlight_terms(snippet, matched_terms)
