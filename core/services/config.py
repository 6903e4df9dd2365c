"""
Core configuration service for the report service.

This module provides a centralized configuration layer that:
- Reads export settings from Django settings with sensible defaults
- Validates values once per call so services fail fast on bad configuration

All export services should use this module instead of reading
django.conf.settings directly.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from django.conf import settings

from .exceptions import ServiceNotConfigured


DEFAULT_BATCH_SIZE = 10
SETTINGS_PREFIX = "REPORT_EXPORT"


@dataclass(frozen=True)
class ExportSettings:
    """Resolved export configuration."""

    max_concurrency: int
    default_batch_size: int
    archive_dir: Optional[Path] = None


def _setting_name(name: str) -> str:
    """Build the full Django setting name for an export option."""
    return f"{SETTINGS_PREFIX}_{name}"


def _positive_int(name: str, default: int) -> int:
    """
    Read an integer setting that must be at least 1.

    Args:
        name: Option name without the REPORT_EXPORT prefix
        default: Value used when the setting is absent or None

    Returns:
        The configured integer

    Raises:
        ServiceNotConfigured: If the value is not an integer >= 1
    """
    setting_name = _setting_name(name)
    value = getattr(settings, setting_name, None)
    if value is None:
        return default

    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ServiceNotConfigured(f"{setting_name} must be an integer, got {value!r}")

    if value < 1:
        raise ServiceNotConfigured(f"{setting_name} must be at least 1, got {value}")
    return value


def get_export_settings() -> ExportSettings:
    """
    Load the export configuration.

    Returns:
        ExportSettings instance

    Raises:
        ServiceNotConfigured: If a configured value is invalid

    Example:
        >>> config = get_export_settings()
        >>> config.max_concurrency
        8
    """
    archive_dir = getattr(settings, _setting_name("ARCHIVE_DIR"), None)

    return ExportSettings(
        max_concurrency=_positive_int("MAX_CONCURRENCY", os.cpu_count() or 1),
        default_batch_size=_positive_int("DEFAULT_BATCH_SIZE", DEFAULT_BATCH_SIZE),
        archive_dir=Path(archive_dir) if archive_dir else None,
    )
