"""Q-gram distance and similarity.

A string is cut into overlapping n-grams of ``q_size`` codepoints and each
string becomes a frequency vector over those n-grams. Distance is the L1
norm of the difference of two vectors (Ukkonen, "Approximate
string-matching with q-grams and maximal matches"). For example, with
``q_size=2`` and padding (shown as ``#`` and ``$``)::

              #a ab bc cd de dc bd e$
    abcde      1  1  1  1  1  0  0  1
    abdcde     1  1  0  1  1  1  1  1
               ----------------------
               0  0  1  0  0  1  1  0  = 3

Similarity counts the n-grams two strings share. It is cheap and gives a
lower bound on shared n-grams for any pair within a given edit distance
(Gravano et al., "Approximate String Joins in a Database (Almost) for
Free"), which ``is_candidate`` turns into a filter that never rejects a
pair a slower edit distance would accept::

    engine = QgramEngine()
    if engine.is_candidate(s, t, 2):
        d = levenshtein.distance(s, t, 2)

All counting is per codepoint. No Unicode normalisation is performed.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from approxtext.infrastructure.config import DEFAULT_Q_SIZE, QgramConfig
from approxtext.infrastructure.validation import (
    validate_max_distance,
    validate_q_size,
    validate_threshold,
)
from approxtext.modules.qgram.cache import DecompositionCache

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "END_SENTINEL",
    "START_SENTINEL",
    "QgramEngine",
    "qgram_count",
]

# Unicode noncharacters reserved for internal use. Input containing them
# would match padding n-grams and skew counts.
START_SENTINEL = "\ufdd0"
END_SENTINEL = "\ufdd1"


def qgram_count(text: str, q_size: int, padded: bool) -> int:
    """Number of n-grams (with repeats) a string decomposes into.

    Args:
        text: String to measure.
        q_size: N-gram size.
        padded: Whether boundary sentinels are added.

    Returns:
        len(text) + q_size - 1 when padded, else len(text) - q_size + 1
        floored at zero.
    """
    if padded:
        return len(text) + q_size - 1
    return max(len(text) - q_size + 1, 0)


def _pad(text: str, q_size: int, padded: bool) -> str:
    if not padded or q_size == 1:
        return text
    return START_SENTINEL * (q_size - 1) + text + END_SENTINEL * (q_size - 1)


def _windows(text: str, q_size: int) -> Iterable[str]:
    return (text[i : i + q_size] for i in range(len(text) - q_size + 1))


class QgramEngine:
    """Q-gram distance, similarity and candidate filtering.

    The engine owns a decomposition cache, so comparing one string against
    many others only decomposes it once. Per-call ``q_size`` and ``padded``
    override the construction settings for that call only.
    """

    def __init__(
        self,
        q_size: int = DEFAULT_Q_SIZE,
        padded: bool = True,
        *,
        cache: bool = True,
    ) -> None:
        """Initialize the engine.

        Args:
            q_size: Default n-gram size. Values below 1 fall back to 2.
            padded: Default padding mode.
            cache: Keep decompositions between calls.
        """
        self._config = QgramConfig(q_size=q_size, padded=padded, cache=cache)
        self._cache = DecompositionCache(enabled=self._config.cache)

    @classmethod
    def from_config(cls, config: QgramConfig) -> QgramEngine:
        return cls(config.q_size, config.padded, cache=config.cache)

    @property
    def config(self) -> QgramConfig:
        return self._config

    @property
    def q_size(self) -> int:
        return self._config.q_size

    @property
    def padded(self) -> bool:
        return self._config.padded

    @property
    def cache_size(self) -> int:
        """Number of cached decompositions."""
        return len(self._cache)

    def clear_cache(self) -> None:
        """Drop every cached decomposition."""
        self._cache.clear()

    def _resolve(self, q_size: int | None, padded: bool | None) -> tuple[int, bool]:
        resolved_q = self.q_size if q_size is None else validate_q_size(q_size)
        resolved_padded = self.padded if padded is None else bool(padded)
        return resolved_q, resolved_padded

    def _grams(self, text: str, q_size: int, padded: bool) -> Counter[str]:
        """Shared (cached) decomposition. Callers must not mutate it."""
        padded_text = _pad(text, q_size, padded)
        key = (q_size, padded_text)
        grams = self._cache.get(key)
        if grams is None:
            grams = self._cache.put(key, Counter(_windows(padded_text, q_size)))
        return grams

    def decompose(
        self,
        text: str,
        q_size: int | None = None,
        padded: bool | None = None,
    ) -> Counter[str]:
        """Count the n-grams of a string.

        Padding is skipped for unigrams, where it carries no information.

        Args:
            text: String to decompose.
            q_size: N-gram size (engine default when None).
            padded: Padding mode (engine default when None).

        Returns:
            Mapping of n-gram to occurrence count. The caller owns the
            returned object.

        Raises:
            InvalidArgumentError: If q_size is below 1.
        """
        q_size, padded = self._resolve(q_size, padded)
        return Counter(self._grams(text, q_size, padded))

    def distance(
        self,
        str1: str,
        str2: str,
        threshold: int | None = None,
        q_size: int | None = None,
        padded: bool | None = None,
    ) -> int:
        """Calculate the Q-gram distance between two strings.

        The sum of absolute differences between the n-gram vectors of both
        strings.

        Args:
            str1: First string.
            str2: Second string.
            threshold: Stop counting once the distance reaches this value
                and return it instead.
            q_size: N-gram size (engine default when None).
            padded: Padding mode (engine default when None).

        Returns:
            The distance, capped at threshold when one is given. Strings
            with at most one n-gram to compare give 1 unless equal.

        Raises:
            InvalidArgumentError: If q_size is below 1 or threshold is not
                a positive integer.
        """
        q_size, padded = self._resolve(q_size, padded)
        threshold = validate_threshold(threshold)

        if str1 == str2:
            return 0
        max_common = min(
            qgram_count(str1, q_size, padded),
            qgram_count(str2, q_size, padded),
        )
        if max_common <= 1:
            return 1

        grams1 = self._grams(str1, q_size, padded)
        grams2 = self._grams(str2, q_size, padded)

        total = 0
        for gram in grams1.keys() | grams2.keys():
            total += abs(grams1[gram] - grams2[gram])
            if threshold is not None and total >= threshold:
                return threshold
        return total

    def similarity(
        self,
        str1: str,
        str2: str,
        threshold: int | None = None,
        q_size: int | None = None,
        padded: bool | None = None,
    ) -> int:
        """Calculate the Q-gram similarity between two strings.

        Counts the n-grams both strings have in common, each shared n-gram
        contributing the smaller of its two counts.

        Args:
            str1: First string.
            str2: Second string.
            threshold: Stop counting once the similarity reaches this value
                and return it instead. A threshold above the largest
                attainable similarity returns 0 without counting.
            q_size: N-gram size (engine default when None).
            padded: Padding mode (engine default when None).

        Returns:
            The number of shared n-grams.

        Raises:
            InvalidArgumentError: If q_size is below 1 or threshold is not
                a positive integer.
        """
        q_size, padded = self._resolve(q_size, padded)
        threshold = validate_threshold(threshold)

        count1 = qgram_count(str1, q_size, padded)
        count2 = qgram_count(str2, q_size, padded)
        max_common = min(count1, count2)

        if str1 == str2:
            return max_common if threshold is None else min(max_common, threshold)
        if max_common <= 1:
            return 0
        if threshold is not None and threshold > max_common:
            return 0

        grams1 = self._grams(str1, q_size, padded)
        grams2 = self._grams(str2, q_size, padded)
        if count1 < count2:
            short_grams, long_grams = grams1, grams2
        else:
            short_grams, long_grams = grams2, grams1

        total = 0
        for gram, count in short_grams.items():
            other = long_grams.get(gram)
            if other:
                total += min(count, other)
                if threshold is not None and total >= threshold:
                    return threshold
        return total

    def is_candidate(self, str1: str, str2: str, max_distance: int) -> bool:
        """Check if two strings may be within max_distance edits.

        False is only returned when the shared n-gram count proves the edit
        distance exceeds max_distance, so the filter has no false
        negatives. False positives are expected.

        Args:
            str1: First string.
            str2: Second string.
            max_distance: Largest tolerated edit distance.

        Returns:
            True if the pair survives the filter.

        Raises:
            InvalidArgumentError: If max_distance is not a non-negative integer.
        """
        validate_max_distance(max_distance)

        q_size = self.q_size
        longest = max(len(str1), len(str2))
        # Each edit destroys at most q_size n-grams
        if self.padded:
            threshold = longest - 1 - (max_distance - 1) * q_size
        else:
            threshold = longest + 1 - q_size - max_distance * q_size

        if threshold <= 0:
            return True
        # similarity() reports 0 for pairs with a single n-gram to compare,
        # which would reject e.g. unigrams "a" and "ab" at max_distance 1
        if min(
            qgram_count(str1, q_size, self.padded),
            qgram_count(str2, q_size, self.padded),
        ) <= 1:
            return True
        return self.similarity(str1, str2, threshold) >= threshold

    def normalize(
        self,
        str1: str,
        str2: str,
        value: float,
        q_size: int | None = None,
        padded: bool | None = None,
    ) -> float:
        """Express a distance or similarity as a fraction of all n-grams.

        Args:
            str1: First string.
            str2: Second string.
            value: Raw distance or similarity.
            q_size: N-gram size (engine default when None).
            padded: Padding mode (engine default when None).

        Returns:
            value divided by the n-gram count of both strings, or 0.0 when
            neither string has any n-gram.

        Raises:
            InvalidArgumentError: If q_size is below 1.
        """
        q_size, padded = self._resolve(q_size, padded)
        total = qgram_count(str1, q_size, padded) + qgram_count(str2, q_size, padded)
        if total == 0:
            return 0.0
        return value / total
