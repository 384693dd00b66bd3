"""Search tunables that sit outside the scoring contract."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class SearchConfig:
    max_results: int = 10
    fuzzy_threshold: float = 0.80   # vocabulary terms scoring above this are candidates
    snippet_threshold: int = 300    # content at or below this length is returned whole
    snippet_window: int = 200
    snippet_step: int = 50
    snippet_before: int = 100
    snippet_after: int = 200

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Defaults overridden by DOCSIFT_MAX_RESULTS / DOCSIFT_FUZZY_THRESHOLD."""
        return cls(
            max_results=int(os.getenv("DOCSIFT_MAX_RESULTS", "10")),
            fuzzy_threshold=float(os.getenv("DOCSIFT_FUZZY_THRESHOLD", "0.80")),
        )
