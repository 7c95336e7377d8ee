"""Q-gram engine configuration.

Holds the construction-time settings of a ``QgramEngine`` and reads or
writes them as a versioned JSON file.
"""

from __future__ import annotations

import json
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import structlog

from approxtext.infrastructure.validation import ApproxTextError

__all__ = [
    "DEFAULT_Q_SIZE",
    "ConfigError",
    "QgramConfig",
    "load_config",
    "save_config",
]

logger = structlog.get_logger()

# v1: q_size, padded, cache
SCHEMA_VERSION = "1"

MAX_CONFIG_SIZE = 1 * 1024 * 1024

DEFAULT_Q_SIZE = 2


class ConfigError(ApproxTextError):
    """Raised when configuration operations fail."""


@dataclass(frozen=True)
class QgramConfig:
    """Immutable settings for a Q-gram engine.

    Attributes:
        q_size: N-gram size. Values below 1 fall back to 2, fractional
            values are rounded.
        padded: Add boundary sentinels before decomposing, which makes
            prefix and suffix differences count.
        cache: Keep decompositions for the lifetime of the engine.
    """

    q_size: int = DEFAULT_Q_SIZE
    padded: bool = True
    cache: bool = True

    def __post_init__(self) -> None:
        q_size = self.q_size
        if isinstance(q_size, bool) or not isinstance(q_size, (int, float)):
            msg = f"q_size must be a number, got {type(q_size).__name__}"
            raise TypeError(msg)
        coerced = DEFAULT_Q_SIZE if q_size < 1 else int(round(q_size))
        object.__setattr__(self, "q_size", coerced)
        object.__setattr__(self, "padded", bool(self.padded))
        object.__setattr__(self, "cache", bool(self.cache))


def save_config(config: QgramConfig, path: Path) -> None:
    """Save configuration to a JSON file.

    Uses atomic write (temp file + rename) to prevent corruption.

    Args:
        config: Configuration to save.
        path: Destination file.

    Raises:
        ConfigError: If saving fails.
    """
    data = asdict(config)
    data["version"] = SCHEMA_VERSION

    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as tmp:
            json.dump(data, tmp, indent=2)
            tmp_path = Path(tmp.name)

        tmp_path.replace(path)
        logger.debug("config_saved", path=str(path))

    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ConfigError(f"Failed to save config: {e}") from e


def load_config(path: Path) -> QgramConfig:
    """Load configuration from a JSON file.

    Missing, oversized or unreadable files are not errors: a warning is
    logged and the defaults are returned.

    Args:
        path: Config file location.

    Returns:
        QgramConfig instance (defaults if the file is missing or invalid).
    """
    if not path.exists():
        logger.debug("config_not_found", path=str(path))
        return QgramConfig()

    try:
        file_size = path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            logger.warning(
                "config_too_large",
                path=str(path),
                size=file_size,
                max_size=MAX_CONFIG_SIZE,
            )
            return QgramConfig()

        data = json.loads(path.read_text(encoding="utf-8"))

        version = data.get("version")
        if version and version != SCHEMA_VERSION:
            logger.warning(
                "config_version_mismatch",
                path=str(path),
                expected=SCHEMA_VERSION,
                found=version,
            )

        config = _dict_to_config(data)
        logger.debug("config_loaded", path=str(path), q_size=config.q_size)
        return config

    except json.JSONDecodeError as e:
        logger.warning("config_invalid_json", path=str(path), error=str(e))
        return QgramConfig()
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning("config_parse_error", path=str(path), error=str(e))
        return QgramConfig()
    except OSError as e:
        logger.warning("config_read_error", path=str(path), error=str(e))
        return QgramConfig()


def _dict_to_config(data: dict[str, Any]) -> QgramConfig:
    """Convert dict to QgramConfig.

    Raises:
        AttributeError: If data is not a mapping.
        TypeError: If a field has an invalid type.
    """
    return QgramConfig(
        q_size=data.get("q_size", DEFAULT_Q_SIZE),
        padded=data.get("padded", True),
        cache=data.get("cache", True),
    )
