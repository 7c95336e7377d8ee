"""Shared test fixtures for approxtext tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

from approxtext.modules.qgram import QgramEngine

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def engine() -> QgramEngine:
    """Default engine: bigrams, padded, cached."""
    return QgramEngine()


@pytest.fixture
def unpadded_engine() -> QgramEngine:
    """Bigram engine without boundary padding."""
    return QgramEngine(2, padded=False)


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None]:
    """Undo any structlog configuration a test applies."""
    yield
    structlog.reset_defaults()
