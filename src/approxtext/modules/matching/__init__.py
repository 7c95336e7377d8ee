"""Fuzzy name lookup built on the Q-gram filter and Levenshtein distance."""

from approxtext.modules.matching.finder import (
    MatchCandidate,
    find_similar_names,
    rank_candidates,
)

__all__ = [
    "MatchCandidate",
    "find_similar_names",
    "rank_candidates",
]
