"""Deployment source contract.

Why Protocol:
- A structural contract (duck typing) with no rigid inheritance.
- The address book and the deployments directory are two symmetric providers;
  both can be swapped for in-memory fakes in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

from core.domain.models import DeploymentSet


@dataclass
class InspectionHooks:
    """Optional callbacks for UI layers (warnings)."""

    warning: Callable[[str], None] | None = None

    def warn(self, message: str) -> None:
        if self.warning:
            self.warning(message)


@runtime_checkable
class DeploymentSource(Protocol):
    """Minimal contract for a deployment provider.

    Design rules:
    - `read` is synchronous; all sources are local files.
    - It never mutates the filesystem.
    - Fatal problems raise a `DeploymentInfoError`; per-record problems are
      reported through `hooks.warning` and `DeploymentSet.warnings`.
    """

    def read(self, hooks: InspectionHooks | None = None) -> DeploymentSet:
        """Read the source and return the normalized `DeploymentSet`."""

        ...
