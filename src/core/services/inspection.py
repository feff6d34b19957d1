"""Project inspection orchestration.

This module wires project discovery, the two deployment sources and the
catalog-driven services together, so the CLI only deals with options and
presentation. Side-effects (printing) stay out: warnings travel through
`InspectionHooks`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from adapters.address_book import AddressBookReader
from adapters.deployments_dir import HardhatDeploymentsReader
from adapters.project import locate_project
from core.config import AppSettings
from core.domain.catalog import NetworkCatalog
from core.domain.models import AuditResult, CoverageReport, DeploymentSet, ListingGroup
from core.interfaces.source import DeploymentSource, InspectionHooks
from core.resources_loader import catalog_from_settings
from core.services import reconciliation
from core.services.coverage import NetworkClassifier, coverage
from core.services.normalizer import NetworkNormalizer

SOURCES = ("declared", "deployed")


@dataclass
class CountSummary:
    deployments: int
    networks: int


class ProjectInspector:
    """Entry point for every command over one Hardhat project."""

    def __init__(
        self,
        root: Path,
        settings: AppSettings | None = None,
        *,
        config_path: Path | None = None,
        hooks: InspectionHooks | None = None,
        declared_source: DeploymentSource | None = None,
        deployed_source: DeploymentSource | None = None,
    ) -> None:
        self.settings = settings or AppSettings()
        self.hooks = hooks or InspectionHooks()
        self.root = locate_project(root, self.settings)
        self._declared_source = declared_source or AddressBookReader(
            self.root, self.settings, path=config_path
        )
        self._deployed_source = deployed_source or HardhatDeploymentsReader(self.root, self.settings)

    @cached_property
    def catalog(self) -> NetworkCatalog:
        return catalog_from_settings(self.settings)

    @cached_property
    def normalizer(self) -> NetworkNormalizer:
        return NetworkNormalizer(self.catalog)

    @cached_property
    def classifier(self) -> NetworkClassifier:
        return NetworkClassifier(self.catalog, self.normalizer)

    def declared(self) -> DeploymentSet:
        return self._declared_source.read(self.hooks)

    def deployed(self) -> DeploymentSet:
        return self._deployed_source.read(self.hooks)

    def source(self, name: str) -> DeploymentSet:
        if name == "declared":
            return self.declared()
        if name == "deployed":
            return self.deployed()
        raise ValueError(f"Unknown source {name!r} (expected one of {', '.join(SOURCES)})")

    def count(self) -> CountSummary:
        deployed = self.deployed()
        return CountSummary(
            deployments=reconciliation.count(deployed),
            networks=reconciliation.count_networks(deployed),
        )

    def listing(self, *, aggregate: bool = False, source: str = "declared") -> list[ListingGroup]:
        return reconciliation.list_deployments(
            self.source(source),
            aggregate=aggregate,
            normalizer=self.normalizer,
        )

    def audit(self) -> AuditResult:
        declared = self.declared()
        deployed = self.deployed()
        return reconciliation.audit(declared, deployed)

    def coverage(self) -> CoverageReport:
        return coverage(self.deployed(), self.classifier)
