"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Addresses are validated and checksummed once, at the edge where records are
  built, so the rest of the core can compare plain strings.
- Results (listings, audits, coverage) serialize straight to JSON for the
  presentation layer.

Note:
- These models describe *what* a deployment is, not *where* it was read from.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from eth_utils import is_hex_address, to_checksum_address
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.catalog import NetworkKind
from core.domain.errors import ArtifactParseWarning

# Canonical grouping key produced by the normalizer.
NetworkFamily = str


def checksum_address(value: object) -> str:
    """Return the EIP-55 form of `value` or raise `ValueError`."""

    if not isinstance(value, str) or not is_hex_address(value.strip()):
        raise ValueError(f"not a valid 20-byte hex address: {value!r}")
    return to_checksum_address(value.strip())


class DeploymentRecord(BaseModel):
    """A single (network, address) pair read from one of the sources."""

    model_config = ConfigDict(frozen=True)

    network: str = Field(
        ...,
        min_length=1,
        description="Raw network identifier as written in the source.",
    )
    address: str = Field(
        ...,
        description="Contract address, stored in checksum casing.",
    )
    contract: str | None = Field(
        default=None,
        description="Contract label (artifact file stem or address-book key).",
    )
    source: str | None = Field(
        default=None,
        description="File the record was read from.",
    )

    @field_validator("address", mode="before")
    @classmethod
    def _checksum(cls, value: object) -> str:
        return checksum_address(value)


class DeploymentSet(BaseModel):
    """Network -> addresses mapping, built from one source.

    Both the declared set (address book) and the deployed set (artifacts
    directory) use this model. Networks keep first-seen order and addresses
    within a network are de-duplicated.
    """

    origin: str = Field(..., description="'declared' or 'deployed'.")
    networks: dict[str, list[str]] = Field(default_factory=dict)
    contracts: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Per network: address -> contract label, when known.",
    )
    warnings: list[ArtifactParseWarning] = Field(default_factory=list)
    source_path: str | None = None

    @classmethod
    def from_records(
        cls,
        records: Iterable[DeploymentRecord],
        *,
        origin: str,
        networks: Iterable[str] = (),
        warnings: Iterable[ArtifactParseWarning] = (),
        source_path: str | None = None,
    ) -> "DeploymentSet":
        """Build a set from records; `networks` pre-registers (possibly empty) networks."""

        mapping: dict[str, list[str]] = {name: [] for name in networks}
        labels: dict[str, dict[str, str]] = {}
        for record in records:
            addresses = mapping.setdefault(record.network, [])
            if record.address not in addresses:
                addresses.append(record.address)
            if record.contract:
                labels.setdefault(record.network, {}).setdefault(record.address, record.contract)
        return cls(
            origin=origin,
            networks=mapping,
            contracts=labels,
            warnings=list(warnings),
            source_path=source_path,
        )

    def addresses(self, network: str) -> list[str]:
        return list(self.networks.get(network, []))

    def contract_for(self, network: str, address: str) -> str | None:
        return self.contracts.get(network, {}).get(address)

    def pairs(self) -> Iterator[tuple[str, str]]:
        for network, addresses in self.networks.items():
            for address in addresses:
                yield network, address


class ListingEntry(BaseModel):
    network: str
    address: str
    contract: str | None = None


class ListingGroup(BaseModel):
    """One group of the `list` view (a raw network or a whole family)."""

    key: str = Field(..., description="Raw network identifier or NetworkFamily.")
    networks: list[str] = Field(default_factory=list)
    entries: list[ListingEntry] = Field(default_factory=list)


class AuditEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    network: str
    address: str

    def as_pair(self) -> tuple[str, str]:
        return (self.network, self.address)


class AuditResult(BaseModel):
    """Two-way diff between declared and deployed records."""

    only_in_declared: list[AuditEntry] = Field(default_factory=list)
    only_in_deployed: list[AuditEntry] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.only_in_declared and not self.only_in_deployed


class FamilyCoverage(BaseModel):
    """Mainnet/testnet presence for one network family."""

    family: NetworkFamily
    networks: list[str] = Field(default_factory=list)
    mainnets: list[str] = Field(default_factory=list)
    testnets: list[str] = Field(default_factory=list)
    unknown: list[str] = Field(default_factory=list)
    has_mainnet: bool = False
    has_testnet: bool = False

    @property
    def complete(self) -> bool:
        return self.has_mainnet and self.has_testnet

    def add(self, network: str, kind: NetworkKind) -> None:
        self.networks.append(network)
        if kind is NetworkKind.MAINNET:
            self.mainnets.append(network)
            self.has_mainnet = True
        elif kind is NetworkKind.TESTNET:
            self.testnets.append(network)
            self.has_testnet = True
        else:
            self.unknown.append(network)


class CoverageReport(BaseModel):
    families: dict[NetworkFamily, FamilyCoverage] = Field(default_factory=dict)

    def incomplete(self) -> list[FamilyCoverage]:
        return [item for item in self.families.values() if not item.complete]
