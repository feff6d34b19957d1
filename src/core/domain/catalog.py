"""Network catalog: the data tables behind normalization and classification.

This module keeps the mainnet/testnet knowledge as plain data so new
networks can be added (or the whole table replaced with a JSON file) without
touching the normalizer or classifier code.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field

_KEY_SEPARATORS = re.compile(r"[\s_-]+")


def network_key(name: str) -> str:
    """Catalog lookup key: case-folded, runs of spaces, `-` and `_` collapsed to `-`.

    "Arbitrum One", "arbitrum_one" and "arbitrum-one" share one key.
    """

    return _KEY_SEPARATORS.sub("-", name.casefold()).strip("-")


class NetworkKind(str, Enum):
    """Classification of a network identifier."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    UNKNOWN = "unknown"

    def label(self) -> str:
        return self.value.capitalize()


class SuffixRule(BaseModel):
    """A trailing token that marks a variant of a network family."""

    suffix: str = Field(..., min_length=1, description="Token matched case-insensitively at the end.")
    kind: NetworkKind = Field(default=NetworkKind.TESTNET)


class NetworkCatalog(BaseModel):
    """Lookup tables for network families.

    - `suffixes`: tokens stripped by the normalizer (longest match wins).
    - `aliases`: bare chain names mapped to their family key.
    - `mainnets` / `testnets`: exact identifiers with a known kind.
    """

    suffixes: list[SuffixRule] = Field(default_factory=list)
    aliases: dict[str, str] = Field(default_factory=dict)
    mainnets: list[str] = Field(default_factory=list)
    testnets: list[str] = Field(default_factory=list)


_TESTNET_SUFFIXES = (
    "sepolia",
    "goerli",
    "holesky",
    "hoodi",
    "rinkeby",
    "ropsten",
    "kovan",
    "amoy",
    "mumbai",
    "fuji",
    "chiado",
    "alfajores",
    "cardona",
    "testnet",
    "devnet",
    "staging",
    "-test",
    "_test",
)

DEFAULT_CATALOG = NetworkCatalog(
    suffixes=[
        *(SuffixRule(suffix=s, kind=NetworkKind.TESTNET) for s in _TESTNET_SUFFIXES),
        SuffixRule(suffix="mainnet", kind=NetworkKind.MAINNET),
    ],
    aliases={
        "mainnet": "ethereum",
        "homestead": "ethereum",
        "eth": "ethereum",
        "sepolia": "ethereum",
        "goerli": "ethereum",
        "holesky": "ethereum",
        "hoodi": "ethereum",
        "rinkeby": "ethereum",
        "ropsten": "ethereum",
        "kovan": "ethereum",
        "matic": "polygon",
        "amoy": "polygon",
        "mumbai": "polygon",
        "avax": "avalanche",
        "fuji": "avalanche",
        "xdai": "gnosis",
        "chiado": "gnosis",
        "alfajores": "celo",
        "bnb": "bsc",
        "arbitrum-one": "arbitrum",
        "arbitrumone": "arbitrum",
        "optimistic-ethereum": "optimism",
    },
    mainnets=[
        "ethereum",
        "mainnet",
        "homestead",
        "polygon",
        "matic",
        "arbitrum",
        "arbitrum-one",
        "arbitrumone",
        "arbitrum-nova",
        "optimism",
        "base",
        "bsc",
        "bnb",
        "avalanche",
        "avax",
        "gnosis",
        "xdai",
        "celo",
        "fantom",
        "linea",
        "scroll",
        "zksync",
        "blast",
        "mantle",
        "mode",
        "zora",
        "moonbeam",
        "metis",
        "aurora",
        "polygon-zkevm",
        "plume",
    ],
    testnets=[
        "sepolia",
        "goerli",
        "holesky",
        "hoodi",
        "rinkeby",
        "ropsten",
        "kovan",
        "amoy",
        "mumbai",
        "fuji",
        "chiado",
        "alfajores",
    ],
)
