"""Deployed artifacts: the hardhat-deploy `deployments/` tree.

Layout:
    deployments/
      <network>/
        .chainId
        <Contract>.json      # {"address": "0x...", "abi": [...], ...}
        solcInputs/...

Each top-level directory is a network and each JSON file directly inside it
is one deployment record. Unreadable artifacts are skipped with a warning.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.config import AppSettings
from core.domain.errors import (
    ArtifactParseWarning,
    DeploymentsDirNotFoundError,
    DeploymentsReadError,
)
from core.domain.models import DeploymentRecord, DeploymentSet
from core.interfaces.source import InspectionHooks

logger = logging.getLogger(__name__)


class HardhatDeploymentsReader:
    """Reads the deployed (network -> addresses) mapping from disk."""

    def __init__(self, root: Path, settings: AppSettings | None = None) -> None:
        self._root = root
        self._settings = settings or AppSettings()

    @property
    def deployments_dir(self) -> Path:
        return self._root / self._settings.deployments_dir_name

    def network_dirs(self) -> list[Path]:
        directory = self.deployments_dir
        if not directory.is_dir():
            raise DeploymentsDirNotFoundError(f"Deployments directory {directory} not found")

        ignored = set(self._settings.ignored_network_dirs)
        return sorted(
            entry
            for entry in _list_dir(directory)
            if entry.is_dir() and not entry.name.startswith(".") and entry.name not in ignored
        )

    def read(self, hooks: InspectionHooks | None = None) -> DeploymentSet:
        hooks = hooks or InspectionHooks()
        network_dirs = self.network_dirs()
        logger.debug("Reading %d network(s) under %s", len(network_dirs), self.deployments_dir)

        records: list[DeploymentRecord] = []
        warnings: list[ArtifactParseWarning] = []
        for network_dir in network_dirs:
            for artifact in self._artifacts(network_dir):
                try:
                    records.append(self._parse_artifact(network_dir.name, artifact))
                except ValueError as exc:
                    warning = ArtifactParseWarning(
                        network=network_dir.name,
                        path=artifact,
                        reason=str(exc),
                    )
                    warnings.append(warning)
                    logger.debug(warning.message)
                    hooks.warn(warning.message)

        return DeploymentSet.from_records(
            records,
            origin="deployed",
            networks=[d.name for d in network_dirs],
            warnings=warnings,
            source_path=str(self.deployments_dir),
        )

    def _artifacts(self, network_dir: Path) -> list[Path]:
        suffix = self._settings.artifact_suffix
        return sorted(
            entry
            for entry in _list_dir(network_dir)
            if entry.is_file() and not entry.name.startswith(".") and entry.name.endswith(suffix)
        )

    def _parse_artifact(self, network: str, path: Path) -> DeploymentRecord:
        """Parse one artifact; any problem surfaces as `ValueError`."""

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise ValueError(f"unreadable file ({exc})") from exc
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
        except RecursionError as exc:
            raise ValueError("JSON nested too deeply to parse") from exc

        if not isinstance(data, dict):
            raise ValueError("artifact is not a JSON object")
        address = data.get("address")
        if address is None:
            raise ValueError("missing 'address' field")

        contract = path.name[: -len(self._settings.artifact_suffix)]
        try:
            return DeploymentRecord(
                network=network,
                address=address,
                contract=contract,
                source=str(path),
            )
        except ValidationError as exc:
            raise ValueError(f"invalid address {address!r}") from exc


def _list_dir(directory: Path) -> list[Path]:
    try:
        return list(directory.iterdir())
    except OSError as exc:
        raise DeploymentsReadError(f"Could not list {directory}: {exc}") from exc
