"""Docsift error types."""


class DocsiftError(Exception):
    """Base error for all docsift failures."""


class DocsiftVersionError(DocsiftError):
    """Corpus manifest version mismatch."""


class DocsiftChecksumError(DocsiftError):
    """Corpus file checksum verification failed."""
