"""approxtext: Q-gram filtering and bounded Levenshtein distance."""

from approxtext.infrastructure.config import ConfigError, QgramConfig
from approxtext.infrastructure.validation import (
    ApproxTextError,
    InvalidArgumentError,
)
from approxtext.modules import levenshtein, qgram
from approxtext.modules.matching import (
    MatchCandidate,
    find_similar_names,
    rank_candidates,
)
from approxtext.modules.qgram import QgramEngine

__version__ = "0.1.0"

__all__ = [
    "ApproxTextError",
    "ConfigError",
    "InvalidArgumentError",
    "MatchCandidate",
    "QgramConfig",
    "QgramEngine",
    "__version__",
    "find_similar_names",
    "levenshtein",
    "qgram",
    "rank_candidates",
]
