"""
Settings - Environment configuration.

    PARTYCARDS_ENV         development | production
    PARTYCARDS_DATA_DIR    directory for JSON game files (unset: in-memory)
    PARTYCARDS_CATALOG     catalog JSON file (unset: bundled starter catalog)
    PARTYCARDS_HAND_SIZE   cards dealt per hand
    PARTYCARDS_LOG_LEVEL   logging level name
    PORT                   HTTP port for `partycards serve`
    ALLOWED_ORIGINS        comma-separated CORS origins
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field

from .errors import ConfigError


def _int_env(name: str, default: int, low: int, high: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(name, raw, "not an integer") from None
    if value < low or (high is not None and value > high):
        bound = f"between {low} and {high}" if high is not None else f"at least {low}"
        raise ConfigError(name, raw, f"must be {bound}")
    return value


@dataclass
class Settings:
    env: str = "development"
    data_dir: str | None = None
    catalog_path: str | None = None
    hand_size: int = 7
    log_level: str = "INFO"
    port: int = 3100
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from the environment. Raises ConfigError on bad numbers."""
        return cls(
            env=os.getenv("PARTYCARDS_ENV", "development"),
            data_dir=os.getenv("PARTYCARDS_DATA_DIR") or None,
            catalog_path=os.getenv("PARTYCARDS_CATALOG") or None,
            hand_size=_int_env("PARTYCARDS_HAND_SIZE", 7, low=1),
            log_level=os.getenv("PARTYCARDS_LOG_LEVEL", "INFO").upper(),
            port=_int_env("PORT", 3100, low=1, high=65535),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )
