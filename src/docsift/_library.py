"""DocumentationLibrary: parsed corpus + inverted index behind one query API."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from ._config import SearchConfig
from ._index import InvertedIndex
from ._parser import parse_sections
from ._snippet import create_snippet
from ._types import (
    CodeExample,
    HeadingBlock,
    IndexStatistics,
    SearchResult,
    Section,
)

logger = logging.getLogger(__name__)

NOT_FOUND_TEMPLATE = "No documentation found for topic: {topic}"


def format_section(section: Section) -> str:
    """Render a section as markdown with its breadcrumb and code examples."""
    parts = [
        f"# {section.title}\n\n",
        f"**Section:** {section.breadcrumb}\n\n",
        f"{section.content}\n\n",
    ]
    if section.code_examples:
        parts.append("## Code Examples\n\n")
        for n, example in enumerate(section.code_examples, start=1):
            parts.append(f"### Example {n}\n")
            if example.context:
                parts.append(f"{example.context}\n\n")
            parts.append(f"```{example.language}\n{example.code}\n```\n\n")
    return "".join(parts)


class DocumentationLibrary:
    """Main entry point. Parses headings once and serves queries over them."""

    __slots__ = ("_config", "_corpus", "_index")

    def __init__(
        self,
        headings: Iterable[HeadingBlock],
        config: SearchConfig | None = None,
    ) -> None:
        self._config = config or SearchConfig()
        start = time.perf_counter()
        self._corpus = parse_sections(headings)
        self._index = self._build_index()
        elapsed_ms = (time.perf_counter() - start) * 1000

        n_examples = sum(len(s.code_examples) for s in self._corpus.sections)
        logger.info(
            "Documentation loaded in %.1fms: %d sections, %d code examples, %s",
            elapsed_ms, len(self._corpus.sections), n_examples,
            self._index.get_statistics(),
        )

    @property
    def sections(self) -> list[Section]:
        return list(self._corpus.sections)

    @property
    def index(self) -> InvertedIndex:
        return self._index

    def rebuild(self) -> None:
        """Rebuild the inverted index from the parsed sections."""
        self._index = self._build_index()

    def _build_index(self) -> InvertedIndex:
        index = InvertedIndex(fuzzy_threshold=self._config.fuzzy_threshold)
        for section in self._corpus.sections:
            index.add_document(section)
        return index

    # -- Public query API --

    def search(self, query: str | None, limit: int | None = None) -> list[SearchResult]:
        """Ranked results with highlighted snippets; blank queries return []."""
        if query is None or not query.strip():
            return []
        if limit is None:
            limit = self._config.max_results

        normalized = query.lower().strip()
        results: list[SearchResult] = []
        for match in self._index.search(query, limit):
            section = match.document.section
            results.append(SearchResult(
                title=section.title,
                content=create_snippet(
                    section.content, normalized, match.matched_terms, self._config,
                ),
                breadcrumb=section.breadcrumb,
                score=match.score,
                matched_terms=match.matched_terms,
            ))
        return results

    def get_code_examples(self, topic: str | None) -> list[CodeExample]:
        if not topic:
            return []
        return list(self._corpus.examples_by_topic.get(topic.lower().strip(), ()))

    def get_section(self, section_id: str) -> Section | None:
        """Section indexed under an id, the same one search hits carry.

        The index keeps the first section with a given id; the parsed
        lookup map (which keeps the last) is only a fallback.
        """
        doc = self._index.get_document(section_id)
        if doc is not None:
            return doc.section
        return self._corpus.by_id.get(section_id)

    def find_sections(self, query: str, limit: int = 10) -> list[Section]:
        """Plain substring match over title, content and breadcrumb.

        Title matches rank first, then shallower headings.
        """
        q = query.lower().strip()
        if not q:
            return []
        hits = [
            s for s in self._corpus.by_title.values()
            if q in s.title.lower()
            or q in s.content.lower()
            or q in s.breadcrumb.lower()
        ]
        hits.sort(key=lambda s: (q not in s.title.lower(), s.level))
        return hits[:limit]

    def get_documentation_content(self, topic: str | None) -> str:
        """Formatted view of the section best matching a topic.

        Tries an exact title match, then a plain-text match, then the top
        ranked search hit; otherwise returns a not-found message.
        """
        if topic is None or not topic.strip():
            return NOT_FOUND_TEMPLATE.format(topic=topic or "")

        section = self._corpus.by_title.get(topic.lower().strip())
        if section is not None:
            return format_section(section)

        found = self.find_sections(topic, 1)
        if found:
            return format_section(found[0])

        matches = self._index.search(topic, 1)
        if matches:
            return format_section(matches[0].document.section)

        return NOT_FOUND_TEMPLATE.format(topic=topic)

    def get_statistics(self) -> IndexStatistics:
        return self._index.get_statistics()
