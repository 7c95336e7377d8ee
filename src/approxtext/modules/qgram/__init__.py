"""Q-gram distance, similarity and candidate filtering.

The module-level functions build a fresh engine per call, so nothing is
cached between them. Hold a ``QgramEngine`` to reuse decompositions.
"""

from __future__ import annotations

from collections import Counter

from approxtext.modules.qgram.cache import DecompositionCache
from approxtext.modules.qgram.engine import (
    END_SENTINEL,
    START_SENTINEL,
    QgramEngine,
    qgram_count,
)

__all__ = [
    "END_SENTINEL",
    "START_SENTINEL",
    "DecompositionCache",
    "QgramEngine",
    "decompose",
    "distance",
    "is_candidate",
    "normalize",
    "qgram_count",
    "similarity",
]


def distance(
    str1: str,
    str2: str,
    threshold: int | None = None,
    q_size: int = 2,
    padded: bool = True,
) -> int:
    """Q-gram distance between two strings. See ``QgramEngine.distance``."""
    return QgramEngine().distance(str1, str2, threshold, q_size, padded)


def similarity(
    str1: str,
    str2: str,
    threshold: int | None = None,
    q_size: int = 2,
    padded: bool = True,
) -> int:
    """Q-gram similarity between two strings. See ``QgramEngine.similarity``."""
    return QgramEngine().similarity(str1, str2, threshold, q_size, padded)


def is_candidate(str1: str, str2: str, max_distance: int) -> bool:
    """Whether two strings may be within max_distance edits (bigrams, padded)."""
    return QgramEngine().is_candidate(str1, str2, max_distance)


def decompose(text: str, q_size: int = 2, padded: bool = True) -> Counter[str]:
    """N-gram counts of a string. See ``QgramEngine.decompose``."""
    return QgramEngine(cache=False).decompose(text, q_size, padded)


def normalize(
    str1: str,
    str2: str,
    value: float,
    q_size: int = 2,
    padded: bool = True,
) -> float:
    """Value as a fraction of the n-grams of both strings."""
    return QgramEngine(cache=False).normalize(str1, str2, value, q_size, padded)
