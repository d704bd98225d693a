"""icsevent.config_loader

Settings for event conversion.

- Exposes a typed dataclass `ConversionSettings` and a `load_settings()` helper
  that reads a YAML mapping (JSON documents are valid YAML too).
- Missing files fall back to defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class ConversionSettings:
    """Typed settings for the event builder.

    Fields:
        default_timezone: IANA zone applied to floating date-times (None keeps them floating)
        reject_unknown_properties: fail on properties that are neither known nor X- extensions
        skip_malformed_attendees: skip bad ATTENDEE entries with a warning instead of failing
        log_level: logging level name
    """

    default_timezone: str | None = None
    reject_unknown_properties: bool = False
    skip_malformed_attendees: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Reject values the builder could not use.

        Raises:
            ValueError: unknown ``default_timezone`` or ``log_level``
        """
        if self.default_timezone is not None:
            try:
                ZoneInfo(self.default_timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(
                    f"default_timezone {self.default_timezone!r} is not a known IANA zone"
                ) from e
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level {self.log_level!r} is not one of {', '.join(_LOG_LEVELS)}")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ConversionSettings:
        """Create settings from a plain mapping, applying defaults and validation.

        Unknown zones and non-boolean flags are replaced by their defaults with a
        warning rather than rejected. Direct construction is strict instead.
        """
        if data is None:
            data = {}

        default_timezone = data.get("default_timezone")
        if default_timezone is not None:
            default_timezone = str(default_timezone)
            try:
                ZoneInfo(default_timezone)
            except (ZoneInfoNotFoundError, ValueError):
                logger.warning(
                    "default_timezone %r is not a known IANA zone; ignoring", default_timezone
                )
                default_timezone = None

        def _coerce_bool(key: str, default: bool) -> bool:
            raw = data.get(key, default)
            if isinstance(raw, bool):
                return raw
            if isinstance(raw, str) and raw.strip().lower() in ("1", "true", "yes"):
                return True
            if isinstance(raw, str) and raw.strip().lower() in ("0", "false", "no"):
                return False
            logger.warning("Setting %s=%r is not a boolean; using default %s", key, raw, default)
            return default

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"
        if log_level not in _LOG_LEVELS:
            logger.warning("log_level %r not recognized; using INFO", log_level)
            log_level = "INFO"

        return cls(
            default_timezone=default_timezone,
            reject_unknown_properties=_coerce_bool("reject_unknown_properties", False),
            skip_malformed_attendees=_coerce_bool("skip_malformed_attendees", False),
            log_level=log_level,
        )


def load_settings(path: str | Path | None = None) -> ConversionSettings:
    """Load settings from a YAML file.

    Args:
        path: Optional path to the settings file. Defaults to ./icsevent.yaml
              in the current working directory.

    Returns:
        ConversionSettings with values from the file, or defaults when the file
        does not exist.

    Raises:
        ValueError: If the file's top level is not a mapping.
    """
    p = Path(path) if path else Path.cwd() / "icsevent.yaml"
    logger.debug("Attempting to load settings from %s", p)
    if not p.exists():
        logger.info("Settings file %s not found; using defaults", p)
        return ConversionSettings()

    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    # safe_load returns None for empty files
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        logger.warning("Settings file %s parsed but top-level is not a mapping: %r", p, raw)
        raise ValueError("Settings file must contain a mapping at top level")  # noqa: TRY004
    settings = ConversionSettings.from_dict(raw)
    logger.info("Loaded settings from %s", p)
    logger.debug("Settings values: %s", settings)
    return settings
