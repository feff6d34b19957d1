"""Tests for the two deployment sources (address book + deployments dir)."""

import json
from pathlib import Path

import pytest

from conftest import ADDR_A, ADDR_B, ADDR_C, write_artifact

from adapters.address_book import AddressBookReader
from adapters.deployments_dir import HardhatDeploymentsReader
from adapters.project import locate_project
from core.config import AppSettings
from core.domain.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    DeploymentsDirNotFoundError,
    DeploymentsReadError,
)
from core.interfaces.source import DeploymentSource, InspectionHooks


# =============================================================
# Project discovery
# =============================================================

def test_locate_project_requires_hardhat_config(make_project):
    root = make_project(hardhat_config=False)

    with pytest.raises(ConfigNotFoundError):
        locate_project(root, AppSettings())

    relaxed = AppSettings(require_hardhat_config=False)
    assert locate_project(root, relaxed) == root.resolve()


def test_locate_project_missing_root(tmp_path):
    with pytest.raises(ConfigNotFoundError):
        locate_project(tmp_path / "nope")


# =============================================================
# Address book (declared)
# =============================================================

def test_readers_satisfy_protocol(tmp_path):
    assert isinstance(AddressBookReader(tmp_path), DeploymentSource)
    assert isinstance(HardhatDeploymentsReader(tmp_path), DeploymentSource)


def test_address_book_shapes(make_project):
    root = make_project(
        declared={
            "Ethereum": ADDR_A.lower(),
            "Polygon": [ADDR_A, ADDR_B],
            "Base": {"Vault": ADDR_C, "Router": {"address": ADDR_B}, "Pending": None},
            "Scroll": None,
        }
    )

    declared = AddressBookReader(root).read()

    assert declared.origin == "declared"
    assert declared.networks == {
        "Ethereum": [ADDR_A],
        "Polygon": [ADDR_A, ADDR_B],
        "Base": [ADDR_C, ADDR_B],
        "Scroll": [],
    }
    assert declared.contract_for("Base", ADDR_B) == "Router"
    assert declared.source_path.endswith("deployments.json")


def test_address_book_wrapped_table(make_project):
    root = make_project(declared={"deployments": {"mainnet": ADDR_A}})

    assert AddressBookReader(root).read().networks == {"mainnet": [ADDR_A]}


def test_address_book_toml(make_project):
    root = make_project()
    (root / "deployment.toml").write_text(
        "[deployment.base-mainnet]\n"
        f'vault = "{ADDR_A}"\n'
        "\n"
        "[deployment.base-sepolia]\n"
        f'vault = "{ADDR_B.lower()}"\n',
        encoding="utf-8",
    )

    declared = AddressBookReader(root).read()

    assert declared.networks == {"base-mainnet": [ADDR_A], "base-sepolia": [ADDR_B]}
    assert declared.contract_for("base-sepolia", ADDR_B) == "vault"


def test_address_book_explicit_path(make_project):
    root = make_project(declared={"mainnet": ADDR_A})
    (root / "book.json").write_text(json.dumps({"base": ADDR_B}), encoding="utf-8")

    declared = AddressBookReader(root, path=root / "book.json").read()

    assert declared.networks == {"base": [ADDR_B]}


def test_address_book_missing(make_project):
    root = make_project()

    with pytest.raises(ConfigNotFoundError):
        AddressBookReader(root).read()


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps(["0x00"]),
        json.dumps({"mainnet": "0x1234"}),
        json.dumps({"mainnet": 42}),
        json.dumps({"mainnet": [ADDR_A, 7]}),
        json.dumps({"Base": {"Vault": {"abi": []}}}),
        json.dumps({"Base": {"Vault": {"address": 7}}}),
        json.dumps({"Base": {"Vault": {"address": None}}}),
        "[" * 200000,
    ],
)
def test_address_book_malformed(make_project, content):
    root = make_project()
    (root / "deployments.json").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigParseError):
        AddressBookReader(root).read()


def test_address_book_blank_contract_entries_are_not_deployed(make_project):
    root = make_project(
        declared={"Base": {"Vault": None, "Router": "", "Token": {"address": ADDR_A}}}
    )

    declared = AddressBookReader(root).read()

    assert declared.networks == {"Base": [ADDR_A]}
    assert declared.contract_for("Base", ADDR_A) == "Token"


def test_address_book_deeply_nested_toml(make_project):
    root = make_project()
    (root / "deployments.toml").write_text("base = " + "[" * 200000, encoding="utf-8")

    with pytest.raises(ConfigParseError):
        AddressBookReader(root).read()


# =============================================================
# Deployments directory (deployed)
# =============================================================

def test_deployments_dir_reads_networks_and_artifacts(make_project):
    root = make_project(
        deployed={
            "sepolia": {"Vault": ADDR_A, "Router": ADDR_B},
            "mainnet": {"Vault": ADDR_C},
            "localhost": {},
        }
    )
    (root / "deployments" / "sepolia" / ".chainId").write_text("11155111", encoding="utf-8")
    solc = root / "deployments" / "sepolia" / "solcInputs"
    solc.mkdir()
    (solc / "abc123.json").write_text("{}", encoding="utf-8")

    deployed = HardhatDeploymentsReader(root).read()

    assert list(deployed.networks) == ["localhost", "mainnet", "sepolia"]
    assert deployed.networks["sepolia"] == [ADDR_B, ADDR_A]
    assert deployed.networks["localhost"] == []
    assert deployed.contract_for("mainnet", ADDR_C) == "Vault"
    assert deployed.warnings == []


def test_deployments_dir_skips_bad_artifacts_with_warning(make_project):
    root = make_project(deployed={"base": {"Good": ADDR_A}})
    write_artifact(root, "base", "Broken", "{oops")
    write_artifact(root, "base", "NoAddress", {"abi": []})
    write_artifact(root, "base", "BadAddress", {"address": "0xnothex"})
    write_artifact(root, "base", "List", [ADDR_B])

    seen: list[str] = []
    deployed = HardhatDeploymentsReader(root).read(InspectionHooks(warning=seen.append))

    assert deployed.networks == {"base": [ADDR_A]}
    assert sorted(w.path.name for w in deployed.warnings) == [
        "BadAddress.json",
        "Broken.json",
        "List.json",
        "NoAddress.json",
    ]
    assert all(w.network == "base" for w in deployed.warnings)
    assert len(seen) == 4
    assert any("missing 'address'" in message for message in seen)


def test_deployments_dir_missing(make_project):
    root = make_project(declared={"mainnet": ADDR_A})

    with pytest.raises(DeploymentsDirNotFoundError):
        HardhatDeploymentsReader(root).read()


def test_deployments_dir_name_from_settings(make_project):
    root = make_project()
    write_artifact(root, "base", "Vault", {"address": ADDR_A})
    (root / "deployments").rename(root / "hh-deployments")

    settings = AppSettings(deployments_dir_name="hh-deployments")
    deployed = HardhatDeploymentsReader(root, settings).read()

    assert deployed.networks == {"base": [ADDR_A]}


def test_deployments_dir_skips_deeply_nested_artifact(make_project):
    root = make_project(deployed={"base": {"Good": ADDR_A}})
    write_artifact(root, "base", "Deep", "[" * 200000)

    seen: list[str] = []
    deployed = HardhatDeploymentsReader(root).read(InspectionHooks(warning=seen.append))

    assert deployed.networks == {"base": [ADDR_A]}
    assert [w.path.name for w in deployed.warnings] == ["Deep.json"]
    assert len(seen) == 1


@pytest.mark.parametrize("unreadable", ["deployments", "base"])
def test_deployments_dir_unlistable(make_project, monkeypatch, unreadable):
    root = make_project(deployed={"base": {"Vault": ADDR_A}})
    original = Path.iterdir

    def iterdir(self):
        if self.name == unreadable:
            raise PermissionError(13, "Permission denied", str(self))
        return original(self)

    monkeypatch.setattr(Path, "iterdir", iterdir)

    with pytest.raises(DeploymentsReadError, match="Permission denied"):
        HardhatDeploymentsReader(root).read()
