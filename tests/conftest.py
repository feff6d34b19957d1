"""Shared fixtures: throwaway Hardhat projects on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

# EIP-55 reference vectors (already in checksum casing).
ADDR_A = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ADDR_B = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
ADDR_C = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"
ADDR_D = "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user env vars and stray `.env` files out of AppSettings."""

    import os

    for key in list(os.environ):
        if key.upper().startswith("EVM_DEPLOYMENT_INFO_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


def write_artifact(root: Path, network: str, contract: str, payload: Any) -> Path:
    path = root / "deployments" / network / f"{contract}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    text = payload if isinstance(payload, str) else json.dumps(payload)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Build a Hardhat project.

    `declared`: address book content (written to deployments.json) or None.
    `deployed`: {network: {contract: address}} artifacts, or None for no
    deployments directory at all.
    """

    def _make(
        declared: dict[str, Any] | None = None,
        deployed: dict[str, dict[str, str]] | None = None,
        *,
        name: str = "project",
        hardhat_config: bool = True,
    ) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        if hardhat_config:
            (root / "hardhat.config.ts").write_text("export default {};\n", encoding="utf-8")
        if declared is not None:
            (root / "deployments.json").write_text(json.dumps(declared), encoding="utf-8")
        if deployed is not None:
            (root / "deployments").mkdir(exist_ok=True)
            for network, contracts in deployed.items():
                (root / "deployments" / network).mkdir(parents=True, exist_ok=True)
                for contract, address in contracts.items():
                    write_artifact(root, network, contract, {"address": address, "abi": []})
        return root

    return _make
