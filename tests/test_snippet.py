"""Tests for snippet selection."""

from docsift._config import SearchConfig
from docsift._snippet import create_snippet, find_best_snippet_position

FILLER = "lorem ipsum dolor sit amet " * 20   # 540 chars


def test_short_content_returned_whole():
    content = "The SELECT statement retrieves rows."
    assert create_snippet(content, "select", {"select"}) == (
        "The **SELECT** statement retrieves rows."
    )


def test_best_window_center():
    content = "a" * 100 + "select" + "a" * 400
    assert find_best_snippet_position(content, "", ["select"]) == 100


def test_densest_window_wins():
    content = "join" + "x" * 400 + "join where" + "x" * 400
    # the second window holding both terms beats the first holding one
    position = find_best_snippet_position(content, "", ["join", "where"])
    assert 300 <= position <= 500


def test_falls_back_to_query_position():
    content = FILLER + "needle" + FILLER
    assert find_best_snippet_position(content, "needle", []) == len(FILLER)


def test_falls_back_to_start():
    assert find_best_snippet_position(FILLER, "absent", ["missing"]) == 0


def test_long_content_snippet_clipped_both_sides():
    content = FILLER + "the select statement" + FILLER
    snippet = create_snippet(content, "select", {"select"})
    assert snippet.startswith("...")
    assert snippet.endswith("...")
    assert "**select**" in snippet
    assert len(snippet) <= 300 + 2 * len("...") + 4


def test_snippet_at_start_has_no_leading_ellipsis():
    content = "select rows " + FILLER
    snippet = create_snippet(content, "nothing", {"absent"})
    assert not snippet.startswith("...")
    assert snippet.endswith("...")


def test_config_threshold():
    config = SearchConfig(snippet_threshold=10_000)
    content = FILLER + "select" + FILLER
    assert create_snippet(content, "select", {"select"}, config) == (
        FILLER + "**select**" + FILLER
    )
