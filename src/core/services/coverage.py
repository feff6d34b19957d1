"""Coverage classifier.

Labels each raw network as mainnet/testnet/unknown using the catalog and
reports, per family, whether both sides have at least one deployment.
"""

from __future__ import annotations

from core.domain.catalog import DEFAULT_CATALOG, NetworkCatalog, NetworkKind, network_key
from core.domain.models import CoverageReport, DeploymentSet, FamilyCoverage
from core.services.normalizer import NetworkNormalizer


class NetworkClassifier:
    """Classify network identifiers from catalog data.

    Order:
    1) `network_key` hit in `mainnets` / `testnets` ("Arbitrum One" == "arbitrum-one")
    2) kind of the winning suffix rule ("Ethereum Sepolia" -> testnet)
    3) unknown
    """

    def __init__(
        self,
        catalog: NetworkCatalog | None = None,
        normalizer: NetworkNormalizer | None = None,
    ) -> None:
        catalog = catalog or DEFAULT_CATALOG
        self.normalizer = normalizer or NetworkNormalizer(catalog)
        self._mainnets = {network_key(name) for name in catalog.mainnets}
        self._testnets = {network_key(name) for name in catalog.testnets}

    def classify(self, name: str) -> NetworkKind:
        key = network_key(name)
        if key in self._mainnets:
            return NetworkKind.MAINNET
        if key in self._testnets:
            return NetworkKind.TESTNET

        rule = self.normalizer.match_suffix(name)
        if rule is not None:
            return rule.kind
        return NetworkKind.UNKNOWN


def coverage(
    deployed: DeploymentSet,
    classifier: NetworkClassifier | None = None,
) -> CoverageReport:
    """Per-family mainnet/testnet presence over networks with deployments."""

    classifier = classifier or NetworkClassifier()
    populated = [network for network, addresses in deployed.networks.items() if addresses]

    report = CoverageReport()
    for family, networks in classifier.normalizer.group(populated).items():
        item = FamilyCoverage(family=family)
        for network in networks:
            item.add(network, classifier.classify(network))
        report.families[family] = item
    return report
