"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into
  the CLI.
- Adapters (project discovery, readers) read the same typed settings.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "evm-deployment-info"
APP_VERSION = "0.1.0"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Application settings.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) keeps the core free of
      parsing logic.
    - One configuration contract shared by the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="EVM_DEPLOYMENT_INFO_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first, then the per-user config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    deployments_dir_name: str = Field(
        default="deployments",
        min_length=1,
        description="Directory (relative to the project root) holding hardhat-deploy artifacts.",
    )
    artifact_suffix: str = Field(
        default=".json",
        min_length=1,
        description="File suffix of deployment artifacts inside each network directory.",
    )
    ignored_network_dirs: list[str] = Field(
        default_factory=lambda: ["solcInputs"],
        description="Top-level directories under deployments/ that are not networks.",
    )
    address_book_files: list[str] = Field(
        default_factory=lambda: [
            "deployments.json",
            "addresses.json",
            "deployment.toml",
            "deployments.toml",
        ],
        description="Candidate address-book files searched at the project root, in order.",
    )
    hardhat_config_files: list[str] = Field(
        default_factory=lambda: [
            "hardhat.config.ts",
            "hardhat.config.js",
            "hardhat.config.cjs",
            "hardhat.config.mjs",
        ],
        description="Files that mark a directory as a Hardhat project root.",
    )
    require_hardhat_config: bool = Field(
        default=True,
        description="Fail when the project root has no Hardhat config.",
    )
    networks_catalog_path: Path | None = Field(
        default=None,
        description="JSON file replacing the bundled mainnet/testnet catalog.",
    )
