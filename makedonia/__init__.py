"""Ancient Greek dictionary search (exact, phrase, partial, extended) and word-usage counters."""

__version__ = "0.1.0"
__all__ = ["counter", "exact", "extended", "lemma", "partial", "phrase", "search"]