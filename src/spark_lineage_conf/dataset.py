"""
Dataset naming rules: path sanitization, include/exclude filters and
namespace resolvers (`spark.openlineage.dataset.*`).
"""
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple, Union

from .dispatch import dispatch_scope
from .errors import ConfigurationError
from .sources import extract_group, frozen_map, optional, parse_csv, parse_list, require


@dataclass(frozen=True)
class HostListResolverConfig:
    """
    Maps any of `hosts` (e.g. all brokers of one Kafka cluster) to `resolved_name`.
    """
    resolved_name: str
    hosts: Tuple[str, ...]


@dataclass(frozen=True)
class PatternResolverConfig:
    """
    Maps hosts matching `regex` to `resolved_name`.
    """
    resolved_name: str
    regex: str


NamespaceResolverConfig = Union[HostListResolverConfig, PatternResolverConfig]


@dataclass(frozen=True)
class DatasetConfig:
    remove_path_pattern: Optional[str] = None
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    namespace_resolvers: Mapping[str, NamespaceResolverConfig] = field(default_factory=frozen_map)

    def __post_init__(self):
        object.__setattr__(self, "namespace_resolvers", frozen_map(self.namespace_resolvers))


def _resolver_builders(name: str):
    def build_host_list(flat: Mapping[str, str]) -> HostListResolverConfig:
        return HostListResolverConfig(
            resolved_name=optional(flat, "resolvedName", name),
            hosts=tuple(parse_list("hosts", require(flat, "hosts", "hostList"))),
        )

    def build_pattern(flat: Mapping[str, str]) -> PatternResolverConfig:
        return PatternResolverConfig(
            resolved_name=optional(flat, "resolvedName", name),
            regex=require(flat, "regex", "pattern"),
        )

    return {
        "hostList": build_host_list,
        "pattern": build_pattern,
    }


def _build_namespace_resolvers(flat: Mapping[str, str]) -> Dict[str, NamespaceResolverConfig]:
    resolvers_flat = extract_group(flat, "namespaceResolvers")
    names = sorted({key.split(".", 1)[0] for key in resolvers_flat if "." in key})

    resolvers: Dict[str, NamespaceResolverConfig] = {}
    for name in names:
        try:
            resolvers[name] = dispatch_scope(resolvers_flat, name, _resolver_builders(name))
        except ConfigurationError as e:
            raise e.with_prefix("namespaceResolvers.") from e
    return resolvers


def build_dataset(flat: Mapping[str, str]) -> DatasetConfig:
    dataset_flat = extract_group(flat, "dataset")
    try:
        remove_path_pattern = optional(dataset_flat, "removePath.pattern")
        include = optional(dataset_flat, "include")
        exclude = optional(dataset_flat, "exclude")
        return DatasetConfig(
            remove_path_pattern=remove_path_pattern,
            include=tuple(parse_csv(include)) if include else (),
            exclude=tuple(parse_csv(exclude)) if exclude else (),
            namespace_resolvers=_build_namespace_resolvers(dataset_flat),
        )
    except ConfigurationError as e:
        raise e.with_prefix("dataset.") from e
