"""Declared deployments: the project's address book.

Supported formats:
- JSON (`deployments.json`, `addresses.json`, ...)
- TOML (`deployment.toml`), read with `tomllib`

Supported shapes (optionally wrapped in a `deployments` / `deployment` /
`networks` table):
- {"<network>": "0x..."}
- {"<network>": ["0x...", "0x..."]}
- {"<network>": {"<Contract>": "0x..." | {"address": "0x..."}}}

`null`/empty values mean "not deployed yet" and are skipped.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.config import AppSettings
from core.domain.errors import ConfigNotFoundError, ConfigParseError
from core.domain.models import DeploymentRecord, DeploymentSet
from core.interfaces.source import InspectionHooks

logger = logging.getLogger(__name__)

_WRAPPER_KEYS = ("deployments", "deployment", "networks")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class AddressBookReader:
    """Reads the declared (network -> address) mapping."""

    def __init__(
        self,
        root: Path,
        settings: AppSettings | None = None,
        *,
        path: Path | None = None,
    ) -> None:
        self._root = root
        self._settings = settings or AppSettings()
        self._explicit_path = path

    def locate(self) -> Path:
        if self._explicit_path is not None:
            path = self._explicit_path
            if not path.is_absolute():
                path = self._root / path
            if not path.is_file():
                raise ConfigNotFoundError(f"Address book {path} not found")
            return path

        for name in self._settings.address_book_files:
            candidate = self._root / name
            if candidate.is_file():
                return candidate

        expected = ", ".join(self._settings.address_book_files)
        raise ConfigNotFoundError(f"No address book ({expected}) found in {self._root}")

    def read(self, hooks: InspectionHooks | None = None) -> DeploymentSet:
        path = self.locate()
        logger.debug("Reading declared deployments from %s", path)

        data = _unwrap(_load(path))
        if not isinstance(data, dict):
            raise ConfigParseError(f"{path}: expected a mapping of network -> addresses")

        records: list[DeploymentRecord] = []
        for network, value in data.items():
            records.extend(_network_records(str(network), value, path))

        return DeploymentSet.from_records(
            records,
            origin="declared",
            networks=[str(network) for network in data],
            source_path=str(path),
        )


def _load(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigParseError(f"Could not read {path}: {exc}") from exc

    if path.suffix.lower() == ".toml":
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigParseError(f"{path} is not valid TOML: {exc}") from exc
        except RecursionError as exc:
            raise ConfigParseError(f"{path} is nested too deeply to parse") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(f"{path} is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise ConfigParseError(f"{path} is nested too deeply to parse") from exc


def _unwrap(data: Any) -> Any:
    if isinstance(data, dict):
        for key in _WRAPPER_KEYS:
            if isinstance(data.get(key), dict):
                return data[key]
    return data


def _record(network: str, address: Any, contract: str | None, path: Path) -> DeploymentRecord:
    try:
        return DeploymentRecord(
            network=network,
            address=address,
            contract=contract,
            source=str(path),
        )
    except ValidationError as exc:
        label = f"{network}.{contract}" if contract else network
        raise ConfigParseError(f"{path}: invalid address for {label!r}: {address!r}") from exc


def _network_records(network: str, value: Any, path: Path) -> list[DeploymentRecord]:
    if _is_blank(value):
        return []

    if isinstance(value, str):
        return [_record(network, value, None, path)]

    if isinstance(value, list):
        return [_record(network, item, None, path) for item in value if not _is_blank(item)]

    if isinstance(value, dict):
        records: list[DeploymentRecord] = []
        for contract, item in value.items():
            if isinstance(item, dict):
                if not isinstance(item.get("address"), str):
                    raise ConfigParseError(
                        f"{path}: entry {network}.{contract!s} has no string 'address' field"
                    )
                item = item["address"]
            if _is_blank(item):
                continue
            records.append(_record(network, item, str(contract), path))
        return records

    raise ConfigParseError(
        f"{path}: unsupported value for network {network!r} ({type(value).__name__})"
    )
