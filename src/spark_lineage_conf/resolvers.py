from typing import Dict, List

from .sources import DEFAULT_PREFIX


def format_list(items: List[str]) -> str:
    """
    Formats items as the bracketed, semicolon separated list the resolver reads: [a;b]
    """
    for item in items:
        if ";" in item or "[" in item or "]" in item:
            raise ValueError(f"List entries cannot contain ';', '[' or ']': {item}")
    return "[" + ";".join(items) + "]"


class NamespaceResolverConfig:
    """
    Builds namespace resolver properties (hostList and pattern resolvers),
    which map physical hosts to one logical dataset namespace.
    """
    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self._prefix = prefix
        self._resolvers: Dict[str, dict] = {}

    def add_host_list_resolver(self, name: str, hosts: List[str], resolved_name: str) -> 'NamespaceResolverConfig':
        """
        Useful for clusters (Kafka, Cassandra) where multiple hosts map to one logical cluster.
        """
        self._resolvers[name] = {
            "type": "hostList",
            "hosts": list(hosts),
            "resolvedName": resolved_name
        }
        return self

    def add_pattern_resolver(self, name: str, regex: str, resolved_name: str) -> 'NamespaceResolverConfig':
        """
        Useful for naming conventions (e.g., db-prod-01.company.com -> production-db).
        """
        self._resolvers[name] = {
            "type": "pattern",
            "regex": regex,
            "resolvedName": resolved_name
        }
        return self

    def get_spark_properties(self) -> dict:
        props = {}
        for name, config in self._resolvers.items():
            prefix = f"{self._prefix}dataset.namespaceResolvers.{name}"
            props[f"{prefix}.type"] = config["type"]
            props[f"{prefix}.resolvedName"] = config["resolvedName"]

            if config["type"] == "hostList":
                props[f"{prefix}.hosts"] = format_list(config["hosts"])
            elif config["type"] == "pattern":
                props[f"{prefix}.regex"] = config["regex"]

        return props
