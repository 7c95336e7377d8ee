"""Filter-then-verify fuzzy name lookup.

Each candidate first goes through the Q-gram filter, and only the
survivors pay for an exact (bounded) Levenshtein distance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from approxtext.infrastructure.validation import (
    InvalidArgumentError,
    is_integer,
    validate_max_distance,
)
from approxtext.modules import levenshtein
from approxtext.modules.qgram import QgramEngine

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "MatchCandidate",
    "find_similar_names",
    "rank_candidates",
]

logger = structlog.get_logger()


@dataclass(frozen=True)
class MatchCandidate:
    """A candidate that lies within the requested edit distance."""

    name: str
    distance: int


def rank_candidates(
    target: str,
    candidates: Iterable[str],
    *,
    max_distance: int = 3,
    engine: QgramEngine | None = None,
    case_sensitive: bool = False,
) -> list[MatchCandidate]:
    """Score candidates against a target by edit distance.

    Args:
        target: The string to match against.
        candidates: Possible matches.
        max_distance: Maximum edit distance to consider a match.
        engine: Q-gram engine used as the filter. A cached bigram engine is
            created when omitted; pass one in to reuse its cache across calls.
        case_sensitive: Compare strings as given instead of lowercased.

    Returns:
        Matches ordered by distance, then alphabetically (case-insensitive).

    Raises:
        InvalidArgumentError: If max_distance is not a non-negative integer.
    """
    validate_max_distance(max_distance)
    if engine is None:
        engine = QgramEngine()

    probe = target if case_sensitive else target.lower()
    scored: list[MatchCandidate] = []
    filtered = 0

    for name in candidates:
        key = name if case_sensitive else name.lower()
        if not engine.is_candidate(probe, key, max_distance):
            filtered += 1
            continue
        # One above the bound so "too far" stays distinguishable from "at the bound"
        dist = levenshtein.distance(probe, key, max_distance + 1)
        if dist <= max_distance:
            scored.append(MatchCandidate(name=name, distance=dist))

    scored.sort(key=lambda match: (match.distance, match.name.lower()))

    logger.debug(
        "similar_names_found",
        target=target,
        matches=len(scored),
        filtered=filtered,
    )
    return scored


def find_similar_names(
    target: str,
    candidates: Iterable[str],
    *,
    max_distance: int = 3,
    max_suggestions: int = 3,
    engine: QgramEngine | None = None,
    case_sensitive: bool = False,
) -> list[str]:
    """Find similar names from a list of candidates.

    Args:
        target: The string to match against.
        candidates: Possible matches.
        max_distance: Maximum edit distance to consider a match.
        max_suggestions: Maximum number of suggestions to return.
        engine: Q-gram engine used as the filter.
        case_sensitive: Compare strings as given instead of lowercased.

    Returns:
        List of similar names, ordered by distance (closest first).

    Raises:
        InvalidArgumentError: If max_distance or max_suggestions is negative.
    """
    if not is_integer(max_suggestions) or max_suggestions < 0:
        msg = f"max_suggestions must be a non-negative integer, got {max_suggestions!r}"
        raise InvalidArgumentError(msg)

    ranked = rank_candidates(
        target,
        candidates,
        max_distance=max_distance,
        engine=engine,
        case_sensitive=case_sensitive,
    )
    return [match.name for match in ranked[:max_suggestions]]
