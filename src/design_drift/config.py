"""Configuration loading and management for Design Drift.

Configuration sources are merged in priority order:
    1. Defaults (defined in WatcherConfig)
    2. Project config (./design-drift.toml)
    3. Explicit config file (--config)
    4. Environment variables
    5. CLI overrides (passed as kwargs)

Environment variables use the names of the original watcher script
(``FIGMA_TOKEN``, ``SMTP_HOST``, ``MAIL_TO`` ...) so existing CI secrets keep
working; every field can also be set as ``DESIGN_DRIFT_<FIELD>``, which wins
over the short name.

Example:
    >>> config = load_config(snapshot_path="/tmp/snap.json")
    >>> config.snapshot_path
    '/tmp/snap.json'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, get_type_hints
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import InvalidConfigError, MissingSettingError

PROJECT_CONFIG_NAME = "design-drift.toml"
ENV_PREFIX = "DESIGN_DRIFT_"

# field name -> short environment variable name
_LEGACY_ENV_NAMES = {
    "figma_token": "FIGMA_TOKEN",
    "figma_file_key": "FIGMA_FILE_KEY",
    "smtp_host": "SMTP_HOST",
    "smtp_port": "SMTP_PORT",
    "smtp_secure": "SMTP_SECURE",
    "smtp_user": "SMTP_USER",
    "smtp_pass": "SMTP_PASS",
    "mail_from": "MAIL_FROM",
    "mail_to": "MAIL_TO",
    "mail_subject_prefix": "MAIL_SUBJECT_PREFIX",
}

# Never echoed back in error messages.
_SECRET_FIELDS = frozenset({"figma_token", "smtp_pass"})


@dataclass(frozen=True)
class WatcherConfig:
    """Settings for one watcher run.

    Attributes:
        Figma API:
            figma_token: Personal access token sent as X-Figma-Token
            figma_file_key: Key of the watched design file
            figma_api_base: REST API root
            request_timeout: Per-request timeout in seconds

        Mail delivery:
            smtp_host / smtp_port: SMTP server
            smtp_secure: Use implicit TLS (port 465 style) instead of STARTTLS
            smtp_user / smtp_pass: SMTP credentials
            mail_from: Sender address
            mail_to: Comma-separated recipient list
            mail_subject_prefix: Prepended to every subject

        Baseline:
            snapshot_path: JSON file holding the last snapshot

        Report rendering:
            display_timezone: IANA zone used for timestamps in messages
            max_listed_entities: Entities listed per category and change kind
            max_timeline_entries: Revisions listed in a change report
            initial_timeline_entries: Revisions listed in the first-run summary
    """

    # Figma API
    figma_token: Optional[str] = None
    figma_file_key: Optional[str] = None
    figma_api_base: str = "https://api.figma.com/v1"
    request_timeout: int = 30

    # Mail delivery
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_secure: bool = False
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None
    mail_from: Optional[str] = None
    mail_to: Optional[str] = None
    mail_subject_prefix: str = "[DS]"

    # Baseline
    snapshot_path: str = "./.figma-ds-snapshot.json"

    # Report rendering
    display_timezone: str = "Asia/Seoul"
    max_listed_entities: int = 10
    max_timeline_entries: int = 25
    initial_timeline_entries: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 1 <= self.smtp_port <= 65535:
            raise InvalidConfigError("smtp_port", self.smtp_port, "must be between 1 and 65535")
        for name in (
            "request_timeout",
            "max_listed_entities",
            "max_timeline_entries",
            "initial_timeline_entries",
        ):
            if getattr(self, name) < 1:
                raise InvalidConfigError(name, getattr(self, name), "must be at least 1")
        if not self.snapshot_path:
            raise InvalidConfigError("snapshot_path", self.snapshot_path, "must not be empty")
        try:
            ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidConfigError(
                "display_timezone", self.display_timezone, "unknown IANA time zone"
            ) from e

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.display_timezone)

    @property
    def recipients(self) -> list[str]:
        """``mail_to`` split on commas, blanks dropped."""
        if not self.mail_to:
            return []
        return [addr.strip() for addr in self.mail_to.split(",") if addr.strip()]

    def require_remote(self) -> None:
        """Raise MissingSettingError unless the Figma settings are present."""
        _require(self, ["figma_token", "figma_file_key"])

    def require_mail(self) -> None:
        """Raise MissingSettingError unless the SMTP settings are present."""
        _require(self, ["smtp_host", "smtp_user", "smtp_pass", "mail_from", "mail_to"])


def _require(config: WatcherConfig, fields: list[str]) -> None:
    missing = [name for name in fields if not getattr(config, name)]
    if missing:
        raise MissingSettingError([_LEGACY_ENV_NAMES.get(n, n.upper()) for n in missing])


def load_config(config_file: Optional[Path] = None, **overrides) -> WatcherConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset CLI options do not mask other sources

    Returns:
        Validated WatcherConfig instance

    Raises:
        InvalidConfigError: If a config file is invalid or missing, a key is
            unknown, or a value fails validation
    """
    merged: dict = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise InvalidConfigError("config_file", str(project_config), str(e)) from e

    if config_file is not None:
        if not config_file.exists():
            raise InvalidConfigError("config_file", str(config_file), "file not found")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise InvalidConfigError("config_file", str(config_file), str(e)) from e

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(merged) - set(WatcherConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown setting")

    try:
        return WatcherConfig(**merged)
    except TypeError as e:
        raise InvalidConfigError("configuration", "-", str(e)) from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from environment variables.

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(WatcherConfig)

    result: dict[str, Any] = {}

    for field_name in WatcherConfig.__dataclass_fields__:
        candidates = [f"{ENV_PREFIX}{field_name.upper()}"]
        if field_name in _LEGACY_ENV_NAMES:
            candidates.append(_LEGACY_ENV_NAMES[field_name])

        for env_key in candidates:
            env_value = os.environ.get(env_key)
            if env_value is None or env_value == "":
                continue
            try:
                result[field_name] = _parse_env_value(env_value, type_hints[field_name])
            except ValueError as e:
                shown = "<hidden>" if field_name in _SECRET_FIELDS else repr(env_value)
                raise InvalidConfigError(env_key, shown, str(e)) from e
            break

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    A ``[design_drift]`` table is used when present, otherwise the top level.
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data.get("design_drift", data)
