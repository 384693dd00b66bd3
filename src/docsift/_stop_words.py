"""English stop words dropped before stemming and indexing."""

STOP_WORDS: frozenset[str] = frozenset({
    # Articles and conjunctions
    "a", "an", "and", "but", "if", "so",
    # Prepositions
    "as", "at", "by", "for", "from", "in", "into", "of", "on", "to",
    "with", "about", "after", "up", "out",
    # Pronouns and determiners
    "he", "him", "her", "it", "its", "they", "them", "their",
    "this", "that", "these", "what", "which", "each", "some", "many",
    # Be/have forms and modals
    "are", "be", "been", "is", "was", "has", "have", "had", "will",
    "would",
    # Frequent filler in prose
    "the", "then", "more", "very", "said", "time", "make", "like",
    "two", "words",
})
