"""Tokenize/normalize pipeline, synonym expansion, fuzzy matching and highlighting."""

from __future__ import annotations

import re
from collections.abc import Iterable

import ahocorasick

from ._stop_words import STOP_WORDS

_WORD_RE = re.compile(r"\b\w+\b")
# Split "selectFrom" -> "select From" and "DSLContext" -> "DSL Context".
_CAMEL_CASE_RE = re.compile(r"(?<!^)(?=[A-Z][a-z])")

HIGHLIGHT_MARKER = "**"

# Canonical term -> domain synonyms. Expansion is symmetric: hitting the
# key or any member pulls in the whole group.
SYNONYMS: dict[str, frozenset[str]] = {
    "select": frozenset({"query", "find", "search", "retrieve", "get"}),
    "insert": frozenset({"add", "create", "save", "store"}),
    "update": frozenset({"modify", "change", "edit", "alter"}),
    "delete": frozenset({"remove", "drop", "destroy"}),
    "join": frozenset({"combine", "merge", "link", "connect"}),
    "where": frozenset({"filter", "condition", "criteria"}),
    "table": frozenset({"relation", "entity"}),
    "record": frozenset({"row", "tuple", "entry"}),
    "field": frozenset({"column", "attribute", "property"}),
    "dsl": frozenset({"api", "builder", "fluent"}),
}

# (suffix, minimum length the word must exceed, replacement)
_SUFFIX_RULES: tuple[tuple[str, int, str], ...] = (
    ("ing", 4, ""),
    ("ed", 3, ""),
    ("er", 3, ""),
    ("est", 4, ""),
    ("ly", 3, ""),
    ("tion", 5, ""),
    ("ness", 5, ""),
    ("ment", 5, ""),
    ("able", 5, ""),
    ("ible", 5, ""),
    ("ies", 4, "y"),
)


def tokenize(text: str | None) -> list[str]:
    """Split text into lower-cased word tokens longer than one character.

    camelCase boundaries are split before lower-casing. Order and
    duplicates are preserved.
    """
    if text is None or not text.strip():
        return []
    expanded = _CAMEL_CASE_RE.sub(" ", text)
    return [w for w in _WORD_RE.findall(expanded.lower()) if len(w) > 1]


def remove_stop_words(tokens: Iterable[str]) -> list[str]:
    return [t for t in tokens if t.lower() not in STOP_WORDS]


def stem(word: str) -> str:
    """Strip at most one common English suffix.

    Rules are tried in a fixed order and the first match wins, e.g.
    ``stem("selecting") == "select"`` and ``stem("queries") == "query"``.
    Words of three characters or fewer are returned unchanged.
    """
    if word is None or len(word) <= 3:
        return word

    stemmed = word.lower()
    n = len(stemmed)
    for suffix, min_len, replacement in _SUFFIX_RULES:
        if stemmed.endswith(suffix) and n > min_len:
            return stemmed[: n - len(suffix)] + replacement
    if stemmed.endswith("s") and n > 2 and not stemmed.endswith("ss"):
        return stemmed[:-1]
    return stemmed


def process_text(text: str | None) -> list[str]:
    """Tokenize, drop stop words, stem, and deduplicate (first occurrence wins)."""
    seen: set[str] = set()
    terms: list[str] = []
    for token in remove_stop_words(tokenize(text)):
        term = stem(token)
        if term not in seen:
            seen.add(term)
            terms.append(term)
    return terms


def expand_with_synonyms(term: str) -> set[str]:
    """Return the term, its stem, and every synonym group either form belongs to."""
    stemmed = stem(term)
    expanded = {term, stemmed}
    for canonical, synonyms in SYNONYMS.items():
        if (
            canonical in (term, stemmed)
            or term in synonyms
            or stemmed in synonyms
        ):
            expanded.add(canonical)
            expanded.update(synonyms)
    return expanded


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance (unit insert/delete/substitute costs)."""
    rows, cols = len(a) + 1, len(b) + 1
    dp = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        dp[i][0] = i
    for j in range(cols):
        dp[0][j] = j
    for i in range(1, rows):
        ca = a[i - 1]
        for j in range(1, cols):
            cost = 0 if ca == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j - 1] + cost,
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
            )
    return dp[-1][-1]


def fuzzy_match_score(a: str | None, b: str | None) -> float:
    """Similarity in [0, 1]: 1 - edit_distance / longer_length, case-insensitive."""
    if a is None or b is None:
        return 0.0
    if a == b:
        return 1.0
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein(a.lower(), b.lower()) / max_len


def extract_phrases(text: str | None) -> list[str]:
    """All contiguous 2-token windows followed by all 3-token windows."""
    tokens = tokenize(text)
    phrases = [f"{tokens[i]} {tokens[i + 1]}" for i in range(len(tokens) - 1)]
    phrases.extend(
        f"{tokens[i]} {tokens[i + 1]} {tokens[i + 2]}"
        for i in range(len(tokens) - 2)
    )
    return phrases


def build_automaton(words: Iterable[str]) -> ahocorasick.Automaton:
    """Aho-Corasick automaton keyed and valued by each (lower-cased) word."""
    ac = ahocorasick.Automaton()
    for word in words:
        ac.add_word(word, word)
    ac.make_automaton()
    return ac


def _fold_case(text: str) -> str:
    """Lower-case text keeping offsets aligned with the original."""
    folded = text.lower()
    if len(folded) == len(text):
        return folded
    return "".join(ch.lower() if len(ch.lower()) == 1 else ch for ch in text)


def _leftmost_longest(
    ac: ahocorasick.Automaton, haystack: str
) -> list[tuple[int, int]]:
    """Greedy leftmost-longest non-overlapping match spans."""
    raw: list[tuple[int, int]] = []
    for end_inclusive, word in ac.iter(haystack):
        end = end_inclusive + 1
        raw.append((end - len(word), end))
    raw.sort(key=lambda m: (m[0], -(m[1] - m[0])))

    spans: list[tuple[int, int]] = []
    last_end = -1
    for start, end in raw:
        if start >= last_end:
            spans.append((start, end))
            last_end = end
    return spans


def highlight_terms(text: str | None, terms: Iterable[str] | None) -> str | None:
    """Wrap every case-insensitive occurrence of each term in bold markers.

    Terms are matched literally (not stemmed); single-character terms are
    ignored. Overlapping terms resolve leftmost-longest.
    """
    if not text or not terms:
        return text
    needles = {t.lower() for t in terms if len(t) > 1}
    if not needles:
        return text

    ac = build_automaton(needles)
    parts: list[str] = []
    last = 0
    for start, end in _leftmost_longest(ac, _fold_case(text)):
        parts.append(text[last:start])
        parts.append(f"{HIGHLIGHT_MARKER}{text[start:end]}{HIGHLIGHT_MARKER}")
        last = end
    parts.append(text[last:])
    return "".join(parts)
