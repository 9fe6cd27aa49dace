import atexit
import logging
import os
import sys

import structlog
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource


def _configure_opentelemetry(root_logger: logging.Logger, endpoint: str) -> None:
    service_name = os.getenv("SERVICE_NAME", "elevator-dispatch")
    resource = Resource.create(
        {
            "service.name": service_name,
            "service.namespace": "elevator-dispatch",
        }
    )
    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(
        BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, insecure=True))
    )
    set_logger_provider(logger_provider)

    root_logger.addHandler(
        LoggingHandler(level=logging.INFO, logger_provider=logger_provider)
    )
    atexit.register(logger_provider.shutdown)


def _shared_processors() -> list:
    """Steps applied to structlog events and plain logging records alike."""
    return [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
    ]


def configure_logging():
    """
    Set up structured JSON logging using structlog.

    Both structlog loggers and the ``logging.getLogger`` loggers used
    across the package go through one ``ProcessorFormatter``, so every
    line on stdout is a JSON object. When OTEL_EXPORTER_OTLP_ENDPOINT is
    set, records are also shipped to that collector over OTLP/gRPC.
    Safe to call more than once.
    """
    root_logger = logging.getLogger()

    if hasattr(configure_logging, "_configured"):
        return root_logger

    shared = _shared_processors()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint:
        try:
            _configure_opentelemetry(root_logger, otlp_endpoint)
        except Exception as e:
            root_logger.error("otel_logging_unavailable: endpoint=%s, error=%s", otlp_endpoint, e)
            root_logger.warning("otel_logging_fallback: using stdout only")

    configure_logging._configured = True
    return root_logger
