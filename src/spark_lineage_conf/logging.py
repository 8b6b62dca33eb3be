"""
Structured logging for the configuration engine.

Configures structlog and stdlib logging together so that records from
`get_logger(__name__)` and from plain `logging.getLogger` (py4j, pyspark)
render through the same processor chain.
"""
import logging
import sys
from typing import Any, Dict, List, Optional

import structlog
from structlog.stdlib import ProcessorFormatter

# py4j logs every JVM gateway call at DEBUG, which would bury the resolver's
# own records whenever a SparkContext is running in the same process.
_NOISY_LOGGERS = (
    "py4j",
    "py4j.clientserver",
    "py4j.java_gateway",
)


def _remove_internal_fields(
    logger: Optional[logging.Logger],
    method_name: str,
    event_dict: Dict[str, Any],
) -> Dict[str, Any]:
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """
    Configures structlog and the root stdlib logger.
    json_output selects JSON lines instead of the human-readable console renderer.
    """
    log_level = getattr(logging, level.upper())

    shared_processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        final_processors: List[Any] = [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _remove_internal_fields,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration in tests needs fresh loggers.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(log_level)

    noisy_level = max(log_level, logging.WARNING)
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
