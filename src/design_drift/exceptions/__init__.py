"""Exception hierarchy for Design Drift."""

from .base import DesignDriftError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    MissingSettingError,
)
from .runtime import BaselineError, NotificationError, RemoteAPIError

__all__ = [
    "DesignDriftError",
    "ConfigurationError",
    "InvalidConfigError",
    "MissingSettingError",
    "RemoteAPIError",
    "BaselineError",
    "NotificationError",
]
