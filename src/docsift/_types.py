"""Data structures for docsift."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class ContentBlock:
    tag: str                      # element name: p, ul, ol, pre, code, div, ...
    text: str = ""
    items: tuple[str, ...] = ()   # list-item texts for ul/ol


@dataclass(slots=True, frozen=True)
class HeadingBlock:
    level: int                    # 1 (most significant) to 6
    text: str
    id: str | None = None
    blocks: tuple[ContentBlock, ...] = ()  # everything up to the next heading


@dataclass(slots=True, frozen=True)
class CodeExample:
    code: str
    context: str
    language: str                 # java | sql | xml | text


@dataclass(slots=True, frozen=True)
class Section:
    id: str | None
    title: str
    content: str
    level: int
    breadcrumb: str               # ancestor titles joined by " > "
    code_examples: tuple[CodeExample, ...] = ()


@dataclass(slots=True, frozen=True)
class IndexedDocument:
    id: str
    section: Section
    title_tokens: tuple[str, ...]
    content_tokens: tuple[str, ...]
    all_tokens: frozenset[str]
    phrases: tuple[str, ...]      # 2- and 3-token windows over title + content


@dataclass(slots=True, frozen=True)
class SearchQuery:
    terms: frozenset[str]
    phrases: tuple[str, ...]
    original_query: str


@dataclass(slots=True, frozen=True)
class SearchMatch:
    document: IndexedDocument
    score: float
    matched_terms: frozenset[str]
    term_matches: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class SearchResult:
    title: str
    content: str                  # highlighted snippet
    breadcrumb: str
    score: float
    matched_terms: frozenset[str] = field(default_factory=frozenset)


@dataclass(slots=True, frozen=True)
class IndexStatistics:
    document_count: int
    term_count: int
    phrase_count: int
    average_document_length: float


@dataclass(slots=True)
class ParsedCorpus:
    sections: list[Section] = field(default_factory=list)
    by_title: dict[str, Section] = field(default_factory=dict)
    by_id: dict[str, Section] = field(default_factory=dict)
    examples_by_topic: dict[str, list[CodeExample]] = field(default_factory=dict)
