"""Configuration management for feed ingestion."""

import os
from dataclasses import dataclass, field

VERSION = "0.1.0"
PRODUCT = "feedcore"


def default_user_agent() -> str:
    """Client signature sent with every request."""
    return f"{PRODUCT}/{VERSION}"


@dataclass
class FetchConfig:
    """Configuration for retrieving feeds and following discovery links."""

    timeout: int = 30
    user_agent: str = field(default_factory=default_user_agent)
    max_discovery_candidates: int = 3
    max_discovery_depth: int = 1


class Config:
    """Main configuration manager."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.timeout = self._int_env("FEEDCORE_TIMEOUT", 30)
        self.user_agent = os.getenv("FEEDCORE_USER_AGENT", default_user_agent())
        self.max_discovery_candidates = self._int_env(
            "FEEDCORE_MAX_DISCOVERY_CANDIDATES", 3
        )
        self.max_discovery_depth = self._int_env("FEEDCORE_MAX_DISCOVERY_DEPTH", 1)
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def _int_env(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as e:
            raise ValueError(f"Invalid integer for {name}: {raw!r}") from e
        if value < 0:
            raise ValueError(f"{name} must not be negative: {value}")
        return value

    def get_fetch_config(self) -> FetchConfig:
        """Get fetch configuration."""
        return FetchConfig(
            timeout=self.timeout,
            user_agent=self.user_agent,
            max_discovery_candidates=self.max_discovery_candidates,
            max_discovery_depth=self.max_discovery_depth,
        )
