"""Network catalog loader.

This module lives in `core/` because:
- it centralizes *which* classification data is used (bundled default or a
  user-supplied JSON) without coupling that choice to the CLI
- the normalizer and classifier only ever receive a validated `NetworkCatalog`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.config import AppSettings
from core.domain.catalog import DEFAULT_CATALOG, NetworkCatalog
from core.domain.errors import ConfigNotFoundError, ConfigParseError
from core.services.normalizer import NetworkNormalizer

logger = logging.getLogger(__name__)


def load_network_catalog(path: Path | None = None) -> NetworkCatalog:
    """Load the mainnet/testnet catalog.

    Logic:
    - Without `path`, return the bundled `DEFAULT_CATALOG`.
    - Otherwise read the JSON file and validate it as a `NetworkCatalog`;
      the file replaces the default entirely.
    - Alias targets must be fixed points of the normalizer.
    """

    if path is None:
        return DEFAULT_CATALOG

    if not path.is_file():
        raise ConfigNotFoundError(f"Network catalog not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        catalog = NetworkCatalog.model_validate(data)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(f"Network catalog {path} is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise ConfigParseError(f"Network catalog {path} is invalid: {exc}") from exc

    try:
        NetworkNormalizer(catalog)
    except ValueError as exc:
        raise ConfigParseError(f"Network catalog {path} is inconsistent: {exc}") from exc

    logger.debug("Loaded network catalog from %s (%d suffix rules)", path, len(catalog.suffixes))
    return catalog


def catalog_from_settings(settings: AppSettings) -> NetworkCatalog:
    return load_network_catalog(settings.networks_catalog_path)
