"""Food name normalization.

Turns the recognizer's raw comma separated answer into food names
ready for nutrient lookup:

* split on commas, trim, lowercase, drop empty tokens
* keep order of first appearance (duplicates are kept)
* drop components already accounted for by a composite dish present in
  the same answer ("fried rice" already contains the "egg")

The module is domain-pure: no infrastructure dependency.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


# ---- Subsumption table ----

# composite dish -> component names it already includes
DEFAULT_SUBSUMPTIONS: Dict[str, FrozenSet[str]] = {
    "fried rice": frozenset({"egg"}),
}


# ---- Domain Models ----


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Normalized names plus the merges applied to get them."""

    names: Tuple[str, ...]
    merged: Tuple[Tuple[str, str], ...] = ()  # (composite, removed component)

    def is_empty(self) -> bool:
        return not self.names


# ---- Pipeline Operations ----


def split_food_names(raw: str) -> list[str]:
    """Split, trim and lowercase; empty tokens are dropped."""
    tokens = (token.strip().lower() for token in raw.split(","))
    return [token for token in tokens if token]


class FoodNameNormalizer:
    """
    Normalize recognized food names and merge composite dishes.

    Example:
        >>> FoodNameNormalizer().normalize("Fried Rice, egg").names
        ('fried rice',)
        >>> FoodNameNormalizer().normalize(" rice, Chicken ,soup").names
        ('rice', 'chicken', 'soup')
    """

    def __init__(self, subsumptions: Optional[Mapping[str, FrozenSet[str] | set[str]]] = None):
        """
        Args:
            subsumptions: composite dish -> components it subsumes.
                Keys and values are matched lowercase. Defaults to
                ``DEFAULT_SUBSUMPTIONS``.
        """
        table = DEFAULT_SUBSUMPTIONS if subsumptions is None else subsumptions
        self._subsumptions: Dict[str, FrozenSet[str]] = {
            composite.strip().lower(): frozenset(c.strip().lower() for c in components)
            for composite, components in table.items()
        }

    def normalize(self, raw: str) -> NormalizationResult:
        names = split_food_names(raw)
        present = set(names)

        removed: list[Tuple[str, str]] = []
        for composite, components in self._subsumptions.items():
            if composite not in present:
                continue
            for component in sorted(components & present):
                if component != composite:
                    removed.append((composite, component))

        if removed:
            dropped = {component for _, component in removed}
            names = [name for name in names if name not in dropped]
            logger.info(
                "Merged composite dish components",
                extra={"merged": [f"{c} <- {p}" for c, p in removed]},
            )

        return NormalizationResult(names=tuple(names), merged=tuple(removed))
