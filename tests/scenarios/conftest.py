import pytest

from spark_lineage_conf.config import LineageConfig


@pytest.fixture(scope="session")
def lineage_config():
    """
    The configuration every scenario session is started with.
    """
    config = LineageConfig()
    config.use_http("http://localhost:5000", endpoint="api/v1/lineage")
    config.set_api_key("scenario-key")
    config.add_header("X-Team", "data-platform")
    config.use_static_circuit_breaker("false,true")
    config.set_namespace("scenarios")
    config.sanitization.use_common_date_partition_pattern()
    config.resolvers.add_host_list_resolver("kafka", ["broker1", "broker2"], "prod-kafka")
    return config


@pytest.fixture(scope="session")
def spark_session(lineage_config):
    """
    Local SparkSession with the lineage properties applied. No OpenLineage
    listener is registered; the scenarios only inspect the session's conf.
    """
    from pyspark.sql import SparkSession

    builder = SparkSession.builder \
        .appName("Lineage_Conf_Scenarios") \
        .master("local[1]") \
        .config("spark.ui.enabled", "false")

    lineage_config.apply_to_spark_conf(builder)

    spark = builder.getOrCreate()
    yield spark
    spark.stop()
