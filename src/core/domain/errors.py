"""Error taxonomy for deployment inspection.

Fatal errors derive from `DeploymentInfoError` so the CLI can catch them in a
single place and exit non-zero with a readable message. Artifact-level
problems are not exceptions: they are recorded as `ArtifactParseWarning`
values and surfaced next to successful output.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class DeploymentInfoError(Exception):
    """Base class for fatal errors raised while inspecting a project."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigNotFoundError(DeploymentInfoError):
    """No Hardhat config or address book at the project root."""


class ConfigParseError(DeploymentInfoError):
    """The address book exists but is malformed or has invalid entries."""


class DeploymentsDirNotFoundError(DeploymentInfoError):
    """The deployments directory is missing."""


class DeploymentsReadError(DeploymentInfoError):
    """The deployments directory (or one of its network directories) cannot be listed."""


class InvalidFlagCombinationError(DeploymentInfoError):
    """Raised by the CLI layer only (e.g. `--outfile` without `--json`/`--csv`)."""


class ArtifactParseWarning(BaseModel):
    """A deployment artifact that was skipped because it could not be parsed."""

    model_config = ConfigDict(frozen=True)

    network: str = Field(..., description="Network directory the artifact lives in.")
    path: Path = Field(..., description="Path of the offending artifact file.")
    reason: str = Field(..., description="Why the artifact was rejected.")

    @property
    def message(self) -> str:
        return f"Skipped {self.network}/{self.path.name}: {self.reason}"
