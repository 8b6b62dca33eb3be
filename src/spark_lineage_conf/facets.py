from dataclasses import dataclass
from typing import List, Mapping, Tuple

from .sources import optional, parse_bool, parse_list

# Facets the Spark integration disables unless told otherwise.
DEFAULT_DISABLED_FACETS: Tuple[str, ...] = ("spark_unknown", "spark.logicalPlan")

DISABLED_KEY = "facets.disabled"


@dataclass(frozen=True)
class FacetsConfig:
    """
    Facet filtering. `disabled` keeps the order in which facets were listed.
    """
    disabled: Tuple[str, ...] = DEFAULT_DISABLED_FACETS

    def is_disabled(self, facet_name: str) -> bool:
        return facet_name in self.disabled


def _facet_toggles(flat: Mapping[str, str]) -> List[Tuple[str, str, str]]:
    """
    Finds per-facet switches of the form `facets.<name>.disabled`.
    Returns (key, facet name, raw value) sorted by key.
    """
    toggles = []
    for key in sorted(flat):
        if key == DISABLED_KEY or not key.startswith("facets.") or not key.endswith(".disabled"):
            continue
        name = key[len("facets."):-len(".disabled")]
        if name:
            toggles.append((key, name, flat[key]))
    return toggles


def build_facets(flat: Mapping[str, str]) -> FacetsConfig:
    """
    Reads `facets.disabled` as a bracketed list (`[a;b]`), falling back to
    DEFAULT_DISABLED_FACETS, then applies `facets.<name>.disabled=true|false`
    switches on top of it.
    """
    raw = optional(flat, DISABLED_KEY)
    if raw is None:
        disabled = list(DEFAULT_DISABLED_FACETS)
    else:
        disabled = parse_list(DISABLED_KEY, raw)

    for key, name, value in _facet_toggles(flat):
        if parse_bool(key, value):
            if name not in disabled:
                disabled.append(name)
        elif name in disabled:
            disabled.remove(name)

    return FacetsConfig(disabled=tuple(disabled))
