"""Docsift: in-memory documentation index with ranked, highlighted search."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._config import SearchConfig
from ._errors import DocsiftChecksumError, DocsiftError, DocsiftVersionError
from ._index import InvertedIndex, parse_query
from ._loader import load_corpus, write_corpus
from ._parser import parse_sections
from ._stop_words import STOP_WORDS
from ._text import (
    expand_with_synonyms,
    extract_phrases,
    fuzzy_match_score,
    highlight_terms,
    levenshtein,
    process_text,
    remove_stop_words,
    stem,
    tokenize,
)
from ._types import (
    CodeExample,
    ContentBlock,
    HeadingBlock,
    IndexedDocument,
    IndexStatistics,
    ParsedCorpus,
    SearchMatch,
    SearchQuery,
    SearchResult,
    Section,
)

if TYPE_CHECKING:
    from pathlib import Path

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "load",
    "CodeExample",
    "ContentBlock",
    "DocsiftChecksumError",
    "DocsiftError",
    "DocsiftVersionError",
    "DocumentationLibrary",
    "HeadingBlock",
    "IndexedDocument",
    "IndexStatistics",
    "InvertedIndex",
    "ParsedCorpus",
    "SearchConfig",
    "SearchMatch",
    "SearchQuery",
    "SearchResult",
    "Section",
    "STOP_WORDS",
    "expand_with_synonyms",
    "extract_phrases",
    "fuzzy_match_score",
    "highlight_terms",
    "levenshtein",
    "load_corpus",
    "parse_query",
    "parse_sections",
    "process_text",
    "remove_stop_words",
    "stem",
    "tokenize",
    "write_corpus",
]


def load(
    data_dir: Path | str, config: SearchConfig | None = None
) -> "DocumentationLibrary":
    """Load a corpus bundle and return a ready-to-query DocumentationLibrary.

    Args:
        data_dir: Directory holding ``manifest.json`` and ``headings.bin``.
        config: Search tunables. Defaults to ``SearchConfig()``.
    """
    from ._library import DocumentationLibrary

    return DocumentationLibrary(load_corpus(data_dir), config=config)


# Deferred import so DocumentationLibrary is available as
# docsift.DocumentationLibrary without loading it eagerly.
def __getattr__(name: str):
    if name == "DocumentationLibrary":
        from ._library import DocumentationLibrary
        return DocumentationLibrary
    raise AttributeError(f"module 'docsift' has no attribute {name!r}")
