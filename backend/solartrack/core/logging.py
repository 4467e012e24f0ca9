import logging
import sys
import structlog

def configure_logging(env: str = "dev", level: str = "INFO") -> None:
    shared_processors = [
        # request-scoped fields (method, path) bound by the HTTP middleware
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if env == "prod":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    # form parsing of backup/table uploads is chatty below WARNING
    logging.getLogger("multipart").setLevel(logging.WARNING)

logger = structlog.get_logger()
