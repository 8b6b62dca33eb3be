from typing import Dict, List, Optional

from .parser import OpenLineageConfig, resolve
from .resolvers import NamespaceResolverConfig, format_list
from .sanitization import SanitizationConfig
from .sources import DEFAULT_PREFIX


class LineageConfig:
    """
    Main entry point for configuring the OpenLineage Spark integration.
    Collects transport, facet, circuit breaker, job identity and dataset
    settings and renders them as `spark.openlineage.*` properties.
    """
    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self._prefix = prefix
        self.sanitization = SanitizationConfig(prefix)
        self.resolvers = NamespaceResolverConfig(prefix)
        self._extra_props: Dict[str, str] = {}
        self._disabled_facets: Optional[List[str]] = None

    def _set(self, key: str, value: str) -> 'LineageConfig':
        self._extra_props[self._prefix + key] = value
        return self

    def set_transport_type(self, type: str) -> 'LineageConfig':
        """
        Sets the transport type: 'console', 'http', 'kafka' or 'kinesis'.
        """
        return self._set("transport.type", type)

    def set_transport_url(self, url: str) -> 'LineageConfig':
        """
        Sets the transport URL (for http transport).
        """
        return self._set("transport.url", url)

    def set_transport_endpoint(self, endpoint: str) -> 'LineageConfig':
        return self._set("transport.endpoint", endpoint)

    def set_transport_timeout(self, timeout_ms: int) -> 'LineageConfig':
        """
        Sets the HTTP timeout in milliseconds.
        """
        return self._set("transport.timeout", str(int(timeout_ms)))

    def set_api_key(self, key: str) -> 'LineageConfig':
        """
        Sets the API key (for http transport). Sent as a Bearer token.
        """
        self._set("transport.auth.type", "api_key")
        return self._set("transport.auth.apiKey", key)

    def add_header(self, name: str, value: str) -> 'LineageConfig':
        return self._set(f"transport.headers.{name}", value)

    def add_url_param(self, name: str, value: str) -> 'LineageConfig':
        return self._set(f"transport.urlParams.{name}", value)

    def use_http(self, url: str, endpoint: Optional[str] = None) -> 'LineageConfig':
        self.set_transport_type("http").set_transport_url(url)
        if endpoint is not None:
            self.set_transport_endpoint(endpoint)
        return self

    def use_kafka(self, topic_name: str, message_key: Optional[str] = None) -> 'LineageConfig':
        self.set_transport_type("kafka")._set("transport.topicName", topic_name)
        if message_key is not None:
            self._set("transport.messageKey", message_key)
        return self

    def use_kinesis(self, stream_name: str, region: Optional[str] = None,
                    role_arn: Optional[str] = None) -> 'LineageConfig':
        self.set_transport_type("kinesis")._set("transport.streamName", stream_name)
        if region is not None:
            self._set("transport.region", region)
        if role_arn is not None:
            self._set("transport.roleArn", role_arn)
        return self

    def add_transport_property(self, name: str, value: str) -> 'LineageConfig':
        """
        Adds a producer/client property for kafka or kinesis transports.
        Example: add_transport_property("bootstrap.servers", "broker1:9092")
        """
        return self._set(f"transport.properties.{name}", value)

    def use_static_circuit_breaker(self, values_returned: str) -> 'LineageConfig':
        """
        Configures the static circuit breaker, e.g. "false,true".
        """
        self._set("circuitBreaker.type", "static")
        return self._set("circuitBreaker.valuesReturned", values_returned)

    def set_namespace(self, namespace: str) -> 'LineageConfig':
        return self._set("namespace", namespace)

    def set_app_name(self, app_name: str) -> 'LineageConfig':
        return self._set("appName", app_name)

    def set_parent_job(self, namespace: str, name: str, run_id: str) -> 'LineageConfig':
        """
        Links the Spark application's runs to a parent run (e.g. an Airflow task).
        """
        self._set("parentJobNamespace", namespace)
        self._set("parentJobName", name)
        return self._set("parentRunId", run_id)

    def set_disabled_facets(self, facet_names: List[str]) -> 'LineageConfig':
        """
        Replaces the default disabled facet list.
        """
        self._disabled_facets = list(facet_names)
        return self

    def disable_facet(self, facet_name: str) -> 'LineageConfig':
        """
        Disables a specific facet to reduce payload size.
        Example: spark.logicalPlan
        """
        return self._set(f"facets.{facet_name}.disabled", "true")

    def enable_facet(self, facet_name: str) -> 'LineageConfig':
        """
        Re-enables a facet disabled by default, e.g. spark_unknown.
        """
        return self._set(f"facets.{facet_name}.disabled", "false")

    def get_spark_config(self) -> Dict[str, str]:
        """
        Generates the full dictionary of Spark properties.
        """
        props = {}
        props.update(self.sanitization.get_spark_properties())
        props.update(self.resolvers.get_spark_properties())
        if self._disabled_facets is not None:
            props[self._prefix + "facets.disabled"] = format_list(self._disabled_facets)
        props.update(self._extra_props)
        return props

    def resolve(self) -> OpenLineageConfig:
        """
        Resolves the generated properties, surfacing configuration errors
        before they reach the Spark listener.
        """
        return resolve(self.get_spark_config(), prefix=self._prefix)

    def apply_to_spark_conf(self, conf) -> None:
        """
        Applies the configuration to a PySpark SparkConf or SparkSession.Builder object.
        """
        for k, v in self.get_spark_config().items():
            if hasattr(conf, "config"):
                conf.config(k, v)
            else:
                conf.set(k, v)
