"""Shared fixtures for docsift tests."""

import pytest

from docsift import ContentBlock, DocumentationLibrary, HeadingBlock

SAMPLE_HEADINGS = [
    HeadingBlock(1, "Manual", "manual", (
        ContentBlock("p", "Reference documentation for the query DSL."),
    )),
    HeadingBlock(2, "SQL building", "sql-building", (
        ContentBlock("p", "How to build SQL statements with the fluent API."),
    )),
    HeadingBlock(3, "SELECT Statement", "select-statement", (
        ContentBlock("p", "The SELECT statement retrieves rows from one or more tables."),
        ContentBlock("pre", "create.select().from(BOOK).fetch();"),
        ContentBlock("p", "Fetch every book in the library."),
    )),
    HeadingBlock(3, "GROUP BY clause", "group-by", (
        ContentBlock(
            "p",
            "Use group by to aggregate rows. Combine it with order by to sort the groups.",
        ),
        ContentBlock(
            "pre",
            "SELECT AUTHOR_ID, COUNT(*) FROM BOOK GROUP BY AUTHOR_ID ORDER BY AUTHOR_ID",
        ),
    )),
    HeadingBlock(3, "ORDER BY clause", "order-by", (
        ContentBlock("p", "Sort results with order by."),
    )),
    HeadingBlock(3, "INSERT Statement", "insert-statement", (
        ContentBlock("ul", items=("Insert a single row", "Insert multiple rows")),
        ContentBlock("pre", '<insert table="BOOK"/>'),
    )),
    HeadingBlock(2, "Transactions", "transactions", (
        ContentBlock("p", "Run work inside a transaction."),
        ContentBlock("pre", "ctx.transaction(configuration -> doWork());"),
    )),
    HeadingBlock(2, "   ", None, (
        ContentBlock("p", "Orphan text under a blank heading."),
    )),
    HeadingBlock(1, "Appendix", None, (
        ContentBlock("div", "Release notes and licensing."),
    )),
]


@pytest.fixture(scope="session")
def headings():
    return list(SAMPLE_HEADINGS)


@pytest.fixture(scope="session")
def library(headings):
    """Build the sample library once for all tests."""
    return DocumentationLibrary(headings)
