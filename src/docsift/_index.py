"""InvertedIndex: term/phrase postings with TF-IDF plus heuristic boosts."""

from __future__ import annotations

import logging
import math
import threading
from collections import Counter

from ._text import (
    expand_with_synonyms,
    extract_phrases,
    fuzzy_match_score,
    process_text,
)
from ._types import (
    IndexedDocument,
    IndexStatistics,
    SearchMatch,
    SearchQuery,
    Section,
)

logger = logging.getLogger(__name__)

# Scoring constants. Relative ordering of results depends on these.
TFIDF_SCALE = 100.0
TITLE_TERM_MULTIPLIER = 3.0
PHRASE_BOOST = 50.0
TITLE_QUERY_BOOST = 30.0
LEVEL_WEIGHT = 2.0
CONCISE_BOOST = 10.0
CONCISE_MAX_CHARS = 1000

FUZZY_THRESHOLD = 0.80


def parse_query(query: str) -> SearchQuery:
    """Split a raw query into quoted phrases and synonym-expanded terms.

    Every double-quoted, non-blank span becomes a lower-cased phrase and is
    removed from the text; the remainder is normalized with ``process_text``
    and each term is expanded with its stem and synonym group.
    """
    phrases: list[str] = []
    remainder = query
    if '"' in query:
        parts = query.split('"')
        for quoted in parts[1::2]:
            if quoted.strip():
                phrases.append(quoted.strip().lower())
                remainder = remainder.replace(f'"{quoted}"', "")

    terms: set[str] = set()
    for term in process_text(remainder):
        terms |= expand_with_synonyms(term)

    return SearchQuery(
        terms=frozenset(terms),
        phrases=tuple(phrases),
        original_query=query,
    )


class InvertedIndex:
    """Append-only in-memory index over documentation sections.

    All mutation happens under one lock (single writer). Readers snapshot
    the key sets they iterate under the same lock and score without it, so
    a document added mid-search may or may not be visible to that search.

    Typo tolerance compares every query term against the whole vocabulary,
    so a search costs O(vocabulary size x query terms).
    """

    __slots__ = (
        "_term_frequencies", "_documents", "_document_word_counts",
        "_phrase_index", "_total_documents", "_fuzzy_threshold", "_lock",
    )

    def __init__(self, fuzzy_threshold: float = FUZZY_THRESHOLD) -> None:
        self._term_frequencies: dict[str, dict[str, int]] = {}
        self._documents: dict[str, IndexedDocument] = {}
        self._document_word_counts: dict[str, int] = {}
        self._phrase_index: dict[str, set[str]] = {}
        self._total_documents = 0
        self._fuzzy_threshold = fuzzy_threshold
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return self._total_documents

    def get_document(self, doc_id: str) -> IndexedDocument | None:
        return self._documents.get(doc_id)

    # -- Ingestion --

    def add_document(self, section: Section) -> str:
        """Index a section and return its document id.

        The id is the section's own id or ``doc_<ordinal>``. A section whose
        id is already indexed is skipped and the existing id returned, so the
        first section with an id wins. ``ParsedCorpus.by_id`` keeps the last
        one instead; ``DocumentationLibrary.get_section`` resolves through
        the index so lookups and search hits agree.
        """
        title_tokens = tuple(process_text(section.title))
        content_tokens = tuple(process_text(section.content))
        phrases = tuple(extract_phrases(f"{section.title} {section.content}"))
        all_tokens = title_tokens + content_tokens
        term_counts = Counter(all_tokens)

        with self._lock:
            doc_id = section.id
            if doc_id and doc_id in self._documents:
                logger.warning(
                    "Document id %r already indexed; skipping section %r",
                    doc_id, section.title,
                )
                return doc_id
            if not doc_id:
                ordinal = self._total_documents
                doc_id = f"doc_{ordinal}"
                while doc_id in self._documents:
                    ordinal += 1
                    doc_id = f"doc_{ordinal}"

            self._documents[doc_id] = IndexedDocument(
                id=doc_id,
                section=section,
                title_tokens=title_tokens,
                content_tokens=content_tokens,
                all_tokens=frozenset(all_tokens),
                phrases=phrases,
            )
            self._document_word_counts[doc_id] = len(all_tokens)

            for term, frequency in term_counts.items():
                self._term_frequencies.setdefault(term, {})[doc_id] = frequency

            for phrase in phrases:
                self._phrase_index.setdefault(phrase.lower(), set()).add(doc_id)

            self._total_documents += 1

        return doc_id

    # -- Query --

    def search(self, query: str | None, max_results: int = 10) -> list[SearchMatch]:
        """Ranked search with synonym expansion, typo tolerance and phrase AND."""
        if query is None or not query.strip():
            logger.debug("Ignoring empty query")
            return []

        parsed = parse_query(query)
        candidates = self._find_candidates(parsed)
        if not candidates:
            return []

        with self._lock:
            documents = list(self._documents.values())
            total_documents = self._total_documents

        matches: list[SearchMatch] = []
        for doc in documents:
            if doc.id not in candidates:
                continue
            score = self._score(doc, parsed, total_documents)
            if score <= 0:
                continue
            matches.append(SearchMatch(
                document=doc,
                score=score,
                matched_terms=self._matched_terms(doc, parsed),
                term_matches=self._term_matches(doc, parsed),
            ))

        matches.sort(key=lambda m: m.score, reverse=True)
        return matches[:max(0, max_results)]

    def _postings(self, term: str) -> set[str]:
        with self._lock:
            postings = self._term_frequencies.get(term)
            return set(postings) if postings else set()

    def _phrase_postings(self, phrase: str) -> set[str]:
        with self._lock:
            return set(self._phrase_index.get(phrase, ()))

    def _find_candidates(self, query: SearchQuery) -> set[str]:
        candidates: set[str] = set()

        if query.terms:
            with self._lock:
                vocabulary = list(self._term_frequencies)
            for term in query.terms:
                candidates |= self._postings(term)
                for indexed_term in vocabulary:
                    if fuzzy_match_score(term, indexed_term) > self._fuzzy_threshold:
                        candidates |= self._postings(indexed_term)

        # Phrases narrow: the first one seeds an empty set, every later one
        # (or any phrase when terms already matched) intersects.
        phrase_applied = False
        for phrase in query.phrases:
            phrase_docs = self._phrase_postings(phrase)
            if not phrase_applied and not candidates:
                candidates = phrase_docs
            else:
                candidates &= phrase_docs
            phrase_applied = True

        return candidates

    # -- Scoring --

    def _score(
        self, doc: IndexedDocument, query: SearchQuery, total_documents: int
    ) -> float:
        score = 0.0

        for term in query.terms:
            score += self._term_score(doc, term, total_documents)

        if any(phrase in doc.phrases for phrase in query.phrases):
            score += PHRASE_BOOST

        section = doc.section
        if query.original_query.lower() in section.title.lower():
            score += TITLE_QUERY_BOOST

        score += (7 - section.level) * LEVEL_WEIGHT

        if 0 < len(section.content) < CONCISE_MAX_CHARS:
            score += CONCISE_BOOST

        return score

    def _term_score(
        self, doc: IndexedDocument, term: str, total_documents: int
    ) -> float:
        """(tf / doc_length) * ln(N / df) * 100, tripled for title terms."""
        postings = self._term_frequencies.get(term)
        if not postings:
            return 0.0
        term_freq = postings.get(doc.id)
        docs_with_term = len(postings)
        if not term_freq or docs_with_term == 0 or total_documents == 0:
            return 0.0

        tf = term_freq / (self._document_word_counts.get(doc.id) or 1)
        idf = math.log(total_documents / docs_with_term)
        tfidf = tf * idf
        if term in doc.title_tokens:
            tfidf *= TITLE_TERM_MULTIPLIER
        return tfidf * TFIDF_SCALE

    def _matched_terms(
        self, doc: IndexedDocument, query: SearchQuery
    ) -> frozenset[str]:
        return frozenset(t for t in query.terms if t in doc.all_tokens)

    def _term_matches(
        self, doc: IndexedDocument, query: SearchQuery
    ) -> dict[str, int]:
        counts: dict[str, int] = {}
        for term in query.terms:
            postings = self._term_frequencies.get(term)
            if postings and doc.id in postings:
                counts[term] = postings[doc.id]
        return counts

    # -- Statistics --

    def get_statistics(self) -> IndexStatistics:
        with self._lock:
            word_counts = list(self._document_word_counts.values())
            return IndexStatistics(
                document_count=self._total_documents,
                term_count=len(self._term_frequencies),
                phrase_count=len(self._phrase_index),
                average_document_length=(
                    sum(word_counts) / len(word_counts) if word_counts else 0.0
                ),
            )
