"""Configuration exceptions: invalid values and missing settings."""

from typing import Any, Sequence

from .base import DesignDriftError


class ConfigurationError(DesignDriftError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class MissingSettingError(ConfigurationError):
    """Raised at startup when settings required for a run are absent."""

    def __init__(self, names: Sequence[str]):
        joined = "/".join(names)
        super().__init__(f"{joined} required", details={"missing": ", ".join(names)})
        self.names = list(names)
