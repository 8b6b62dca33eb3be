import sys
import os

# Add src to path for demo purposes
sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from spark_lineage_conf.config import LineageConfig
from spark_lineage_conf.errors import ConfigurationError
from spark_lineage_conf.logging import configure_logging
from spark_lineage_conf.parser import resolve


def main():
    configure_logging(level="DEBUG")

    # 1. Initialize the configuration builder
    config = LineageConfig()

    # 2. Transport: send events to Marquez over HTTP
    config.use_http("http://localhost:5000", endpoint="api/v1/lineage")
    config.set_api_key("demo-api-key")
    config.set_transport_timeout(5000)

    # 3. Dataset sanitization and namespace normalization
    config.sanitization.use_common_date_partition_pattern()
    config.sanitization.add_exclude_pattern("hdfs://user/.*")
    config.resolvers.add_host_list_resolver(
        name="kafka_prod",
        hosts=["broker1.internal", "broker2.internal"],
        resolved_name="production-kafka"
    )

    # 4. Facets and failure handling
    config.disable_facet("spark.logicalPlan")
    config.use_static_circuit_breaker("false,true")

    # 5. Generate the Spark Configuration
    spark_conf = config.get_spark_config()

    print("--- Generated Spark Configuration ---")
    for k, v in spark_conf.items():
        print(f"{k} = {v}")

    # In a real Spark app, you would do:
    # from pyspark.sql import SparkSession
    # builder = SparkSession.builder
    # config.apply_to_spark_conf(builder)
    # spark = builder.getOrCreate()
    # resolved = resolve_spark_conf(spark.sparkContext.getConf())

    # 6. Resolve the properties the way the listener will see them
    print("\n--- Resolved OpenLineage Configuration ---")
    resolved = config.resolve()
    print(resolved.transport)
    print(resolved.facets)
    print(resolved.circuit_breaker)
    print(resolved.dataset)

    # 7. Configuration errors name the offending property
    print("\n--- Invalid Configuration ---")
    try:
        resolve({"spark.openlineage.transport.type": "kafka"})
    except ConfigurationError as e:
        print(f"Rejected: {e}")


if __name__ == "__main__":
    main()
