"""
Resolves `spark.openlineage.*` properties into an OpenLineageConfig.

Resolution is a pure function of the properties: the source is only read,
nothing is cached between calls, and every call builds fresh objects.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .circuit_breaker import CircuitBreakerConfig, build_circuit_breaker
from .dataset import DatasetConfig, build_dataset
from .errors import ConfigurationError
from .facets import DEFAULT_DISABLED_FACETS, FacetsConfig, build_facets
from .logging import get_logger
from .sources import DEFAULT_PREFIX, extract_namespace, first_present
from .transports import ConsoleConfig, TransportConfig, build_transport

logger = get_logger(__name__)

SPARK_CONF_NAMESPACE = DEFAULT_PREFIX + "namespace"
SPARK_CONF_PARENT_JOB_NAMESPACE = DEFAULT_PREFIX + "parentJobNamespace"
SPARK_CONF_PARENT_JOB_NAME = DEFAULT_PREFIX + "parentJobName"
SPARK_CONF_PARENT_RUN_ID = DEFAULT_PREFIX + "parentRunId"
SPARK_CONF_APP_NAME = DEFAULT_PREFIX + "appName"
SPARK_CONF_TRANSPORT_TYPE = DEFAULT_PREFIX + "transport.type"
SPARK_CONF_DISABLED_FACETS = DEFAULT_PREFIX + "facets.disabled"

# Job identity keys, relative to the namespace. Later entries are legacy spellings.
IDENTITY_KEYS: Dict[str, Tuple[str, ...]] = {
    "namespace": ("namespace",),
    "parent_job_namespace": ("parentJobNamespace", "parent.namespace"),
    "parent_job_name": ("parentJobName", "parent.name"),
    "parent_run_id": ("parentRunId", "parent.runId"),
    "app_name": ("appName",),
}


@dataclass(frozen=True)
class OpenLineageConfig:
    transport: TransportConfig = field(default_factory=ConsoleConfig)
    facets: FacetsConfig = field(default_factory=FacetsConfig)
    circuit_breaker: CircuitBreakerConfig = None
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    namespace: Optional[str] = None
    parent_job_namespace: Optional[str] = None
    parent_job_name: Optional[str] = None
    parent_run_id: Optional[str] = None
    app_name: Optional[str] = None


def resolve(source, prefix: str = DEFAULT_PREFIX) -> OpenLineageConfig:
    """
    Builds an OpenLineageConfig from every property of `source` under `prefix`.

    `source` may be a mapping, a pyspark SparkConf or any PropertySource.
    Raises a ConfigurationError subclass naming the fully qualified key when a
    discriminator is unknown, a required key is missing or a value is malformed.
    """
    flat = extract_namespace(source, prefix)
    try:
        transport = build_transport(flat)
        circuit_breaker = build_circuit_breaker(flat)
        facets = build_facets(flat)
        dataset = build_dataset(flat)
        identity = {
            name: first_present(flat, keys)
            for name, keys in IDENTITY_KEYS.items()
        }
    except ConfigurationError as e:
        error = e.with_prefix(prefix)
        logger.debug("openlineage_config_invalid", key=error.key, error=error.message)
        raise error from e

    config = OpenLineageConfig(
        transport=transport,
        facets=facets,
        circuit_breaker=circuit_breaker,
        dataset=dataset,
        **identity,
    )
    logger.debug(
        "openlineage_config_resolved",
        prefix=prefix,
        keys=len(flat),
        transport=type(transport).__name__,
        circuit_breaker=type(circuit_breaker).__name__ if circuit_breaker else None,
        disabled_facets=list(facets.disabled),
    )
    return config


def resolve_spark_conf(conf, prefix: str = DEFAULT_PREFIX) -> OpenLineageConfig:
    """
    Resolves the OpenLineage settings of a SparkConf, e.g.
    `resolve_spark_conf(spark.sparkContext.getConf())`.
    """
    return resolve(conf, prefix=prefix)


class ArgumentParser:
    """
    Entry point used by the listener integration: resolves the properties
    once and exposes the job identity next to the resolved configuration.
    """
    DEFAULT_DISABLED_FACETS = DEFAULT_DISABLED_FACETS

    def __init__(self, openlineage_config: OpenLineageConfig):
        self.openlineage_config = openlineage_config

    @classmethod
    def parse(cls, source, prefix: str = DEFAULT_PREFIX) -> 'ArgumentParser':
        return cls(resolve(source, prefix=prefix))

    @property
    def namespace(self) -> Optional[str]:
        return self.openlineage_config.namespace

    @property
    def parent_job_namespace(self) -> Optional[str]:
        return self.openlineage_config.parent_job_namespace

    @property
    def parent_job_name(self) -> Optional[str]:
        return self.openlineage_config.parent_job_name

    @property
    def parent_run_id(self) -> Optional[str]:
        return self.openlineage_config.parent_run_id

    @property
    def overridden_app_name(self) -> Optional[str]:
        return self.openlineage_config.app_name
