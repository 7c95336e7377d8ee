"""Levenshtein edit distance."""

from approxtext.modules.levenshtein.edit_distance import distance

__all__ = [
    "distance",
]
