import pytest

from conftest import ADDR_A, ADDR_B, ADDR_C

from core.domain.catalog import NetworkCatalog, NetworkKind, SuffixRule
from core.domain.models import DeploymentRecord, DeploymentSet
from core.services.coverage import NetworkClassifier, coverage


def deployed_set(mapping: dict[str, list[str]]) -> DeploymentSet:
    records = [
        DeploymentRecord(network=network, address=address)
        for network, addresses in mapping.items()
        for address in addresses
    ]
    return DeploymentSet.from_records(records, origin="deployed", networks=mapping.keys())


@pytest.mark.parametrize(
    "name, kind",
    [
        ("Ethereum", NetworkKind.MAINNET),
        ("mainnet", NetworkKind.MAINNET),
        ("BASE", NetworkKind.MAINNET),
        ("optimism-mainnet", NetworkKind.MAINNET),
        ("Ethereum Sepolia", NetworkKind.TESTNET),
        ("sepolia", NetworkKind.TESTNET),
        ("bscTestnet", NetworkKind.TESTNET),
        ("polygon-amoy", NetworkKind.TESTNET),
        ("Arbitrum One", NetworkKind.MAINNET),
        ("Polygon zkEVM", NetworkKind.MAINNET),
        ("ethsepolia", NetworkKind.UNKNOWN),
        ("hardhat", NetworkKind.UNKNOWN),
        ("my-private-chain", NetworkKind.UNKNOWN),
    ],
)
def test_classify(name, kind):
    assert NetworkClassifier().classify(name) is kind


def test_classifier_uses_injected_catalog():
    catalog = NetworkCatalog(
        suffixes=[SuffixRule(suffix="-dev", kind=NetworkKind.TESTNET)],
        mainnets=["acme"],
    )
    classifier = NetworkClassifier(catalog)

    assert classifier.classify("acme") is NetworkKind.MAINNET
    assert classifier.classify("acme-dev") is NetworkKind.TESTNET
    assert classifier.classify("Ethereum") is NetworkKind.UNKNOWN
    assert classifier.normalizer.normalize("acme-dev") == "acme"


def test_coverage_family_with_both_sides():
    report = coverage(deployed_set({"Ethereum": [ADDR_A], "Ethereum Sepolia": [ADDR_B]}))

    item = report.families["Ethereum"]
    assert item.has_mainnet is True
    assert item.has_testnet is True
    assert item.complete
    assert report.incomplete() == []


def test_coverage_merges_display_names_with_catalog_keys():
    report = coverage(deployed_set({"Arbitrum One": [ADDR_A], "Arbitrum Sepolia": [ADDR_B]}))

    assert list(report.families) == ["arbitrum"]
    item = report.families["arbitrum"]
    assert (item.has_mainnet, item.has_testnet) == (True, True)
    assert item.mainnets == ["Arbitrum One"]
    assert item.testnets == ["Arbitrum Sepolia"]


def test_coverage_flags_incomplete_families():
    report = coverage(
        deployed_set(
            {
                "mainnet": [ADDR_A],
                "sepolia": [ADDR_B],
                "base-sepolia": [ADDR_C],
                "hardhat": [ADDR_C],
            }
        )
    )

    assert list(report.families) == ["ethereum", "base", "hardhat"]
    assert report.families["ethereum"].complete
    base = report.families["base"]
    assert (base.has_mainnet, base.has_testnet) == (False, True)
    assert report.families["hardhat"].unknown == ["hardhat"]
    assert [item.family for item in report.incomplete()] == ["base", "hardhat"]


def test_coverage_ignores_networks_without_records():
    report = coverage(deployed_set({"base": [ADDR_A], "base-sepolia": []}))

    base = report.families["base"]
    assert base.networks == ["base"]
    assert not base.has_testnet
