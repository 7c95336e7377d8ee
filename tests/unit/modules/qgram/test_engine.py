"""Tests for the Q-gram engine."""

from __future__ import annotations

import pytest

from approxtext.infrastructure.config import QgramConfig
from approxtext.infrastructure.validation import InvalidArgumentError
from approxtext.modules.qgram import (
    END_SENTINEL,
    START_SENTINEL,
    QgramEngine,
    qgram_count,
)

HEALED_DISTANCES = [
    ("Sealed", 4),
    ("Healthy", 7),
    ("Heard", 5),
    ("Herded", 6),
    ("Help", 8),
    ("Solded", 10),
    ("Sold", 10),
    ("Solder", 14),
]

HEALED_SIMILARITIES = [
    ("Sealed", 5),
    ("Healthy", 4),
    ("Heard", 4),
    ("Herded", 4),
    ("Help", 2),
    ("Solded", 2),
    ("Sold", 1),
    ("Solder", 0),
]


class TestConstruction:
    """Tests for QgramEngine settings."""

    def test_defaults(self) -> None:
        """Default engine uses padded bigrams with a cache."""
        engine = QgramEngine()

        assert engine.q_size == 2
        assert engine.padded is True
        assert engine.config.cache is True

    @pytest.mark.parametrize("q_size", [0, -1, -100])
    def test_q_size_below_one_falls_back_to_two(self, q_size: int) -> None:
        """Construction never fails on q_size; it coerces to the default."""
        assert QgramEngine(q_size).q_size == 2

    def test_fractional_q_size_is_rounded(self) -> None:
        """Fractional q_size rounds to the nearest integer."""
        assert QgramEngine(3.6).q_size == 4  # type: ignore[arg-type]

    def test_from_config(self) -> None:
        """Engine can be built from a QgramConfig."""
        engine = QgramEngine.from_config(QgramConfig(q_size=3, padded=False))

        assert engine.q_size == 3
        assert engine.padded is False


class TestQgramCount:
    """Tests for qgram_count helper."""

    def test_padded_count(self) -> None:
        assert qgram_count("abc", 2, True) == 4
        assert qgram_count("abc", 3, True) == 5
        assert qgram_count("", 2, True) == 1

    def test_unpadded_count_floors_at_zero(self) -> None:
        assert qgram_count("abc", 2, False) == 2
        assert qgram_count("ab", 3, False) == 0
        assert qgram_count("", 1, False) == 0


class TestDecompose:
    """Tests for QgramEngine.decompose."""

    @pytest.mark.parametrize(("q_size", "expected"), [(1, 10), (2, 11), (3, 12), (4, 13)])
    def test_vocabulary_size(self, engine: QgramEngine, q_size: int, expected: int) -> None:
        """Padding adds q_size - 1 boundary n-grams."""
        assert len(engine.decompose("1234567890", q_size)) == expected

    def test_padded_bigrams(self, engine: QgramEngine) -> None:
        """Bigrams include the start and end sentinels."""
        grams = engine.decompose("abc")

        assert grams == {
            START_SENTINEL + "a": 1,
            "ab": 1,
            "bc": 1,
            "c" + END_SENTINEL: 1,
        }

    def test_unigrams_are_never_padded(self, engine: QgramEngine) -> None:
        """Padding is skipped for q_size 1."""
        grams = engine.decompose("aab", q_size=1, padded=True)

        assert grams == {"a": 2, "b": 1}

    def test_unpadded_repeated_grams_are_counted(self, engine: QgramEngine) -> None:
        """Repeated n-grams accumulate counts."""
        grams = engine.decompose("aaaa", q_size=2, padded=False)

        assert grams == {"aa": 3}

    def test_counts_sum_to_qgram_count(self, engine: QgramEngine) -> None:
        """Total count matches the padded and unpadded formulas."""
        text = "mississippi"
        for q_size in range(1, 5):
            for padded in (True, False):
                grams = engine.decompose(text, q_size, padded)
                assert sum(grams.values()) == qgram_count(text, q_size, padded)

    def test_string_shorter_than_q_has_no_unpadded_grams(self, engine: QgramEngine) -> None:
        assert engine.decompose("ab", q_size=3, padded=False) == {}

    def test_codepoints_are_single_units(self, engine: QgramEngine) -> None:
        """A non-ASCII character is one element of an n-gram."""
        grams = engine.decompose("föo", padded=False)

        assert grams == {"fö": 1, "öo": 1}

    def test_returned_counter_is_a_copy(self, engine: QgramEngine) -> None:
        """Mutating a result must not corrupt the cache."""
        first = engine.decompose("hello")
        first["he"] = 99

        assert engine.decompose("hello")["he"] == 1

    def test_rejects_invalid_q_size(self, engine: QgramEngine) -> None:
        with pytest.raises(InvalidArgumentError):
            engine.decompose("hello", q_size=0)


class TestDistance:
    """Tests for QgramEngine.distance."""

    @pytest.mark.parametrize(("other", "expected"), HEALED_DISTANCES)
    def test_reference_values(self, engine: QgramEngine, other: str, expected: int) -> None:
        assert engine.distance("Healed", other) == expected

    def test_identical_strings(self, engine: QgramEngine) -> None:
        assert engine.distance("Healed", "Healed") == 0
        assert engine.distance("", "") == 0

    def test_utf8_codepoints(self, engine: QgramEngine) -> None:
        """Multi-byte characters count as one codepoint."""
        assert engine.distance("föo", "foo") == 4
        assert engine.distance("français", "francais") == 4
        assert engine.distance("français", "franæais") == 4
        assert engine.distance("私の名前はポールです", "ぼくの名前はポールです") == 5

    def test_unpadded(self, unpadded_engine: QgramEngine) -> None:
        """Without padding only inner n-grams are compared."""
        assert unpadded_engine.distance("abcde", "abdcde") == 3

    def test_per_call_override(self, engine: QgramEngine) -> None:
        """Per-call padding overrides the engine default."""
        assert engine.distance("abcde", "abdcde", padded=False) == 3
        assert engine.distance("abcde", "abdcde") == 3

    def test_degenerate_single_gram_returns_one(self, engine: QgramEngine) -> None:
        """At most one n-gram to compare collapses to 1."""
        assert engine.distance("", "Healed") == 1
        assert engine.distance("a", "b", padded=False) == 1

    def test_threshold_caps_result(self, engine: QgramEngine) -> None:
        assert engine.distance("Healed", "Solder", 5) == 5
        assert engine.distance("Healed", "Solder", 14) == 14
        assert engine.distance("Healed", "Sealed", 10) == 4

    def test_symmetric(self, engine: QgramEngine) -> None:
        assert engine.distance("Healed", "Herded") == engine.distance("Herded", "Healed")

    @pytest.mark.parametrize("threshold", [0, -1, 1.5, True, "3"])
    def test_rejects_invalid_threshold(self, engine: QgramEngine, threshold: object) -> None:
        with pytest.raises(InvalidArgumentError):
            engine.distance("a", "b", threshold)  # type: ignore[arg-type]

    def test_rejects_invalid_q_size(self, engine: QgramEngine) -> None:
        with pytest.raises(InvalidArgumentError):
            engine.distance("a", "b", q_size=0)


class TestSimilarity:
    """Tests for QgramEngine.similarity."""

    @pytest.mark.parametrize(("other", "expected"), HEALED_SIMILARITIES)
    def test_reference_values(self, engine: QgramEngine, other: str, expected: int) -> None:
        assert engine.similarity("Healed", other) == expected

    def test_utf8_codepoints(self, engine: QgramEngine) -> None:
        assert engine.similarity("föo", "foo") == 2
        assert engine.similarity("français", "francais") == 7
        assert engine.similarity("français", "franæais") == 7
        assert engine.similarity("私の名前はポールです", "ぼくの名前はポールです") == 9

    def test_identical_strings_share_every_gram(self, engine: QgramEngine) -> None:
        assert engine.similarity("français", "français") == 9
        assert engine.similarity("Healed", "Healed", 3) == 3

    def test_degenerate_single_gram_returns_zero(self, engine: QgramEngine) -> None:
        assert engine.similarity("", "Healed") == 0
        assert engine.similarity("ab", "abc", padded=False) == 0

    def test_threshold_caps_result(self, engine: QgramEngine) -> None:
        assert engine.similarity("Healed", "Sealed", 3) == 3
        assert engine.similarity("Healed", "Sealed", 7) == 5

    def test_unreachable_threshold_returns_zero(self, engine: QgramEngine) -> None:
        """A threshold above min(n-gram counts) can never be met."""
        assert engine.similarity("Healed", "Sealed", 8) == 0

    def test_unpadded(self, unpadded_engine: QgramEngine) -> None:
        assert unpadded_engine.similarity("abcde", "abdcde") == 3

    def test_rejects_invalid_threshold(self, engine: QgramEngine) -> None:
        with pytest.raises(InvalidArgumentError):
            engine.similarity("a", "b", 0)


class TestIsCandidate:
    """Tests for QgramEngine.is_candidate."""

    @pytest.mark.parametrize(
        ("str1", "str2", "max_distance", "expected"),
        [
            ("test", "test", 0, True),
            ("test", "test", 1, True),
            ("test", "tent", 0, False),
            ("test", "tent", 1, True),
            ("test", "tent", 2, True),
            ("gumbo", "gambol", 0, False),
            ("gumbo", "gambol", 1, False),
            ("gumbo", "gambol", 2, True),
            ("gumbo", "gambol", 3, True),
            ("kitten", "sitting", 0, False),
            ("kitten", "sitting", 1, False),
            ("kitten", "sitting", 2, False),
            ("kitten", "sitting", 3, True),
            ("kitten", "sitting", 4, True),
        ],
    )
    def test_reference_table(
        self,
        engine: QgramEngine,
        str1: str,
        str2: str,
        max_distance: int,
        expected: bool,
    ) -> None:
        assert engine.is_candidate(str1, str2, max_distance) is expected

    def test_unpadded(self, unpadded_engine: QgramEngine) -> None:
        assert unpadded_engine.is_candidate("test", "tent", 1) is True
        assert unpadded_engine.is_candidate("test", "tent", 0) is False

    def test_short_strings_always_pass(self, engine: QgramEngine) -> None:
        """A non-positive similarity threshold admits everything."""
        assert engine.is_candidate("a", "zzz", 2) is True

    def test_single_unigram_is_not_rejected(self) -> None:
        """"a" -> "ab" is one edit even though "a" has a single unigram."""
        engine = QgramEngine(1)

        assert engine.is_candidate("a", "ab", 1) is True

    @pytest.mark.parametrize("max_distance", [-1, None, 1.5, False])
    def test_rejects_invalid_max_distance(
        self, engine: QgramEngine, max_distance: object
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            engine.is_candidate("a", "b", max_distance)  # type: ignore[arg-type]


class TestNormalize:
    """Tests for QgramEngine.normalize."""

    def test_divides_by_total_grams(self, engine: QgramEngine) -> None:
        assert engine.normalize("Healed", "Sealed", 4) == pytest.approx(4 / 14)

    def test_identical_similarity_is_one_half(self, engine: QgramEngine) -> None:
        """Shared grams of identical strings make up half the total."""
        value = engine.similarity("Healed", "Healed")

        assert engine.normalize("Healed", "Healed", value) == pytest.approx(0.5)

    def test_zero_total_returns_zero(self, engine: QgramEngine) -> None:
        """No n-grams at all gives 0.0 instead of dividing by zero."""
        assert engine.normalize("", "", 3, padded=False) == 0.0

    def test_does_not_populate_cache(self, engine: QgramEngine) -> None:
        engine.normalize("Healed", "Sealed", 4)

        assert engine.cache_size == 0


class TestCaching:
    """Tests for decomposition caching."""

    def test_distance_populates_cache(self, engine: QgramEngine) -> None:
        engine.distance("Healed", "Sealed")

        assert engine.cache_size == 2

    def test_repeated_strings_are_decomposed_once(self, engine: QgramEngine) -> None:
        for word, _ in HEALED_DISTANCES:
            engine.distance("Healed", word)

        assert engine.cache_size == len(HEALED_DISTANCES) + 1

    def test_results_stable_with_cache(self, engine: QgramEngine) -> None:
        """Cached decompositions give the same answers as fresh ones."""
        first = [engine.distance("Healed", word) for word, _ in HEALED_DISTANCES]
        second = [engine.distance("Healed", word) for word, _ in HEALED_DISTANCES]

        assert first == second == [expected for _, expected in HEALED_DISTANCES]

    def test_different_q_sizes_are_cached_separately(self, engine: QgramEngine) -> None:
        engine.decompose("Healed", 2)
        engine.decompose("Healed", 3)

        assert engine.cache_size == 2

    def test_failed_call_does_not_write_cache(self, engine: QgramEngine) -> None:
        with pytest.raises(InvalidArgumentError):
            engine.distance("Healed", "Sealed", 0)

        assert engine.cache_size == 0

    def test_clear_cache(self, engine: QgramEngine) -> None:
        engine.distance("Healed", "Sealed")
        engine.clear_cache()

        assert engine.cache_size == 0

    def test_disabled_cache_stays_empty(self) -> None:
        engine = QgramEngine(cache=False)

        assert engine.distance("Healed", "Sealed") == 4
        assert engine.cache_size == 0
