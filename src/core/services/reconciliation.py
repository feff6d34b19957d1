"""Reconciliation engine: counts, listings and the declared/deployed audit.

Every function here is a pure, single-pass transformation over sets that
have already been loaded; nothing touches the filesystem.
"""

from __future__ import annotations

from core.domain.models import (
    AuditEntry,
    AuditResult,
    DeploymentSet,
    ListingEntry,
    ListingGroup,
)
from core.services.normalizer import NetworkNormalizer


def count(deployed: DeploymentSet) -> int:
    """Total number of deployment records (sum of per-network set sizes)."""

    return sum(len(set(addresses)) for addresses in deployed.networks.values())


def count_networks(deployed: DeploymentSet) -> int:
    """Number of networks with at least one record."""

    return sum(1 for addresses in deployed.networks.values() if addresses)


def list_deployments(
    declared: DeploymentSet,
    *,
    aggregate: bool = False,
    normalizer: NetworkNormalizer | None = None,
) -> list[ListingGroup]:
    """Group records by network, or by network family when `aggregate` is set.

    Groups come out in first-seen order. Aggregated entries keep their
    originating network so no address is lost when families merge.
    """

    if aggregate:
        normalizer = normalizer or NetworkNormalizer()
        grouping = normalizer.group(declared.networks.keys())
    else:
        grouping = {network: [network] for network in declared.networks}

    groups: list[ListingGroup] = []
    for key, networks in grouping.items():
        entries = [
            ListingEntry(
                network=network,
                address=address,
                contract=declared.contract_for(network, address),
            )
            for network in networks
            for address in declared.networks.get(network, [])
        ]
        groups.append(ListingGroup(key=key, networks=list(networks), entries=entries))
    return groups


def _difference(left: DeploymentSet, right: DeploymentSet) -> list[AuditEntry]:
    other = {network: set(right.addresses(network)) for network in left.networks}
    missing = {
        (network, address) for network, address in left.pairs() if address not in other[network]
    }
    return [AuditEntry(network=n, address=a) for n, a in sorted(missing)]


def audit(declared: DeploymentSet, deployed: DeploymentSet) -> AuditResult:
    """Full two-way diff, network by network.

    A network present in only one source contributes all of its addresses to
    that side. Both lists are sorted so swapping the arguments swaps the
    lists exactly.
    """

    return AuditResult(
        only_in_declared=_difference(declared, deployed),
        only_in_deployed=_difference(deployed, declared),
    )
