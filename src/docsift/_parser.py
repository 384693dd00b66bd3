"""Heading blocks -> sections with breadcrumbs, code examples and a topic index."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ._text import build_automaton
from ._types import CodeExample, ContentBlock, HeadingBlock, ParsedCorpus, Section

logger = logging.getLogger(__name__)

BREADCRUMB_SEPARATOR = " > "
BULLET = "• "

TOPICS: tuple[str, ...] = (
    "select", "insert", "update", "delete", "join", "where", "group",
    "order", "having", "union", "subquery", "transaction", "batch",
    "stored", "procedure",
)

_CODE_TAGS = frozenset({"pre", "code"})
_LIST_TAGS = frozenset({"ul", "ol"})

_TOPIC_AC = build_automaton(TOPICS)


def detect_language(code: str) -> str:
    """Guess the language of a code block from telltale substrings."""
    if "DSL.select" in code or "create." in code or "import org.jooq" in code:
        return "java"
    if any(kw in code for kw in ("SELECT", "INSERT", "UPDATE", "DELETE")):
        return "sql"
    if "<" in code and ">" in code:
        return "xml"
    return "text"


def extract_section_content(blocks: Iterable[ContentBlock]) -> str:
    """Flatten body blocks to text; lists become bullet lines, code is skipped."""
    parts: list[str] = []
    for block in blocks:
        tag = block.tag.lower()
        if tag == "p":
            parts.append(f"{block.text}\n\n")
        elif tag in _LIST_TAGS:
            parts.extend(f"{BULLET}{item}\n" for item in block.items)
            parts.append("\n")
        elif tag not in _CODE_TAGS:
            text = block.text.strip()
            if text:
                parts.append(f"{text}\n\n")
    return "".join(parts).strip()


def _code_context(blocks: tuple[ContentBlock, ...], i: int) -> str:
    """Text of the paragraph right before block i, else right after it."""
    if i > 0 and blocks[i - 1].tag.lower() == "p":
        return blocks[i - 1].text
    if i + 1 < len(blocks) and blocks[i + 1].tag.lower() == "p":
        return blocks[i + 1].text
    return ""


def extract_code_examples(blocks: tuple[ContentBlock, ...]) -> list[CodeExample]:
    examples: list[CodeExample] = []
    for i, block in enumerate(blocks):
        if block.tag.lower() != "pre":
            continue
        examples.append(CodeExample(
            code=block.text,
            context=_code_context(blocks, i),
            language=detect_language(block.text),
        ))
    return examples


def topics_for(example: CodeExample, section_title: str) -> list[str]:
    """Topic keywords occurring anywhere in the example's code or section title."""
    haystack = f"{example.code} {section_title}".lower()
    found = {topic for _, topic in _TOPIC_AC.iter(haystack)}
    return [t for t in TOPICS if t in found]


def parse_sections(headings: Iterable[HeadingBlock]) -> ParsedCorpus:
    """Build sections from headings in document order.

    The breadcrumb stack is truncated to ``level - 1`` entries before each
    title is pushed, so skipped or out-of-order levels still yield one
    deterministic path. Headings with blank text are skipped entirely.
    Title and id collisions keep the last section seen.
    """
    corpus = ParsedCorpus()
    stack: list[str] = []

    for heading in headings:
        title = (heading.text or "").strip()
        if not title:
            continue
        level = min(6, max(1, heading.level))

        del stack[level - 1:]
        stack.append(title)

        blocks = tuple(heading.blocks)
        examples = extract_code_examples(blocks)
        section = Section(
            id=heading.id or None,
            title=title,
            content=extract_section_content(blocks),
            level=level,
            breadcrumb=BREADCRUMB_SEPARATOR.join(stack),
            code_examples=tuple(examples),
        )

        corpus.sections.append(section)
        corpus.by_title[title.lower()] = section
        if section.id:
            corpus.by_id[section.id] = section
        for example in examples:
            for topic in topics_for(example, title):
                corpus.examples_by_topic.setdefault(topic, []).append(example)

    logger.debug(
        "Parsed %d sections (%d distinct titles, %d ids, %d topics)",
        len(corpus.sections), len(corpus.by_title), len(corpus.by_id),
        len(corpus.examples_by_topic),
    )
    return corpus
