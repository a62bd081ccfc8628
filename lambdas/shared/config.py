"""Environment configuration for the dice engine."""
import os
from dataclasses import dataclass

from .exceptions import ConfigurationError

DEFAULT_CACHE_MAX_SIZE = 100
DEFAULT_SIMULATION_THRESHOLD = 10_000
DEFAULT_SIMULATION_RUNS = 100_000


def _positive_int(key: str, default: int) -> int:
    """Read a positive integer from the environment.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        Parsed integer value

    Raises:
        ConfigurationError: If the value is not a positive integer
    """
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{key} must be an integer, got '{raw}'",
            config_key=key,
        ) from None

    if value < 1:
        raise ConfigurationError(
            f"{key} must be a positive integer, got {value}",
            config_key=key,
        )
    return value


@dataclass
class Config:
    """Engine configuration loaded from environment variables."""

    cache_max_size: int
    simulation_threshold: int
    simulation_runs: int
    environment: str
    allowed_origin: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config instance with values from environment

        Raises:
            ConfigurationError: If a numeric setting is malformed
        """
        return cls(
            cache_max_size=_positive_int("CACHE_MAX_SIZE", DEFAULT_CACHE_MAX_SIZE),
            simulation_threshold=_positive_int(
                "SIMULATION_THRESHOLD", DEFAULT_SIMULATION_THRESHOLD
            ),
            simulation_runs=_positive_int("SIMULATION_RUNS", DEFAULT_SIMULATION_RUNS),
            environment=os.environ.get("ENVIRONMENT", "dev"),
            allowed_origin=os.environ.get("ALLOWED_ORIGIN", "*"),
        )


def get_config() -> Config:
    """Get cached configuration instance.

    Returns:
        Config instance (cached after first call)
    """
    if not hasattr(get_config, "_config"):
        get_config._config = Config.from_env()
    return get_config._config


def reset_config() -> None:
    """Drop the cached configuration (for testing)."""
    if hasattr(get_config, "_config"):
        del get_config._config
