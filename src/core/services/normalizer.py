"""Network name normalization.

Maps raw network identifiers ("Ethereum Sepolia", "base-sepolia",
"bscTestnet", "mainnet") to a family key ("Ethereum", "base", "bsc",
"ethereum") by stripping variant suffixes and resolving aliases, both taken
from a `NetworkCatalog`.
"""

from __future__ import annotations

from typing import Iterable

from core.domain.catalog import DEFAULT_CATALOG, NetworkCatalog, SuffixRule, network_key
from core.domain.models import NetworkFamily

_SEPARATORS = " \t-_/:."


def _on_boundary(name: str, start: int, suffix: str) -> bool:
    if start <= 0 or suffix[0] in _SEPARATORS:
        return True
    previous, first = name[start - 1], name[start]
    return previous in _SEPARATORS or (previous.islower() and first.isupper())


class NetworkNormalizer:
    """Suffix-stripping normalizer driven by catalog data.

    Rules:
    - Suffixes match case-insensitively at the end of the name, on a token
      boundary: a separator, a camelCase hump ("bscTestnet") or a suffix that
      starts with a separator ("-test"). The longest matching suffix wins.
    - Stripping repeats until nothing matches, so the result is a fixed point.
    - Aliases are looked up by `network_key` (case and separators ignored)
      before every stripping step.
    - A strip that would leave nothing keeps the current name.
    """

    def __init__(self, catalog: NetworkCatalog | None = None) -> None:
        catalog = catalog or DEFAULT_CATALOG
        # Longest first: the first match is the winning rule.
        self._rules: list[SuffixRule] = sorted(
            catalog.suffixes,
            key=lambda rule: len(rule.suffix),
            reverse=True,
        )
        self._aliases = {network_key(k): v.strip() for k, v in catalog.aliases.items()}
        self._check_aliases()

    def _check_aliases(self) -> None:
        for source, target in self._aliases.items():
            if not target:
                raise ValueError(f"Alias {source!r} maps to an empty family")
            if self._aliases.get(network_key(target), target) != target:
                raise ValueError(f"Alias target {target!r} is itself aliased")
            if self.match_suffix(target) is not None:
                raise ValueError(f"Alias target {target!r} ends with a known suffix")

    def match_suffix(self, raw: str) -> SuffixRule | None:
        """Return the longest suffix rule matching `raw`, if any."""

        name = raw.strip(_SEPARATORS)
        lowered = name.lower()
        for rule in self._rules:
            suffix = rule.suffix.lower()
            if lowered.endswith(suffix) and _on_boundary(name, len(name) - len(suffix), suffix):
                return rule
        return None

    def normalize(self, raw: str) -> NetworkFamily:
        name = raw.strip(_SEPARATORS)
        while True:
            alias = self._aliases.get(network_key(name))
            if alias is not None:
                return alias

            rule = self.match_suffix(name)
            if rule is None:
                return name

            rest = name[: len(name) - len(rule.suffix)].rstrip(_SEPARATORS)
            if not rest:
                return name
            name = rest

    def group(self, names: Iterable[str]) -> dict[NetworkFamily, list[str]]:
        """Group raw names by family (by `network_key`), in first-seen order.

        Each group is keyed by the first spelling of its family that was seen.
        """

        groups: dict[NetworkFamily, list[str]] = {}
        display: dict[str, NetworkFamily] = {}
        for name in names:
            family = self.normalize(name)
            key = display.setdefault(network_key(family), family)
            groups.setdefault(key, []).append(name)
        return groups


_DEFAULT = NetworkNormalizer()


def normalize(raw: str) -> NetworkFamily:
    """Normalize with the bundled catalog."""

    return _DEFAULT.normalize(raw)
