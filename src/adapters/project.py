"""Hardhat project discovery."""

from __future__ import annotations

import logging
from pathlib import Path

from core.config import AppSettings
from core.domain.errors import ConfigNotFoundError

logger = logging.getLogger(__name__)


def find_hardhat_config(root: Path, settings: AppSettings) -> Path | None:
    for name in settings.hardhat_config_files:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def locate_project(root: Path, settings: AppSettings | None = None) -> Path:
    """Resolve and validate a project root.

    The root must exist and, unless disabled in settings, contain one of the
    Hardhat config files.
    """

    settings = settings or AppSettings()
    resolved = root.expanduser().resolve()
    if not resolved.is_dir():
        raise ConfigNotFoundError(f"Project root {resolved} does not exist or is not a directory")

    if settings.require_hardhat_config:
        config = find_hardhat_config(resolved, settings)
        if config is None:
            expected = ", ".join(settings.hardhat_config_files)
            raise ConfigNotFoundError(f"No Hardhat config ({expected}) found in {resolved}")
        logger.debug("Using Hardhat config %s", config)

    return resolved
