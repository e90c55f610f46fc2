"""Structlog configuration for the streamer client.

Consumers and retry tooling log through structlog. Retry context bound with
``bind_retry_context`` is merged into every event; production output is JSON,
development output is rendered for the console, and tests are silent.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("failed_message_stored", message_id="1700000000000-0")
"""

import inspect
import logging
import sys
from typing import TYPE_CHECKING, List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

# Above CRITICAL, so nothing is emitted
SILENT = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def _processors(prod_mode: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        settings: Optional Settings instance. Defaults to settings loaded
            from the environment.
        log_level: Optional override for settings.LOG_LEVEL.
        is_production: Optional override for settings.is_production, which
            selects JSON over console output.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=SILENT, force=True)
        logging.root.setLevel(SILENT)
        return structlog.stdlib.get_logger()

    if settings is None:
        from infrastructure.configuration import Settings

        settings = Settings()

    prod_mode = is_production if is_production is not None else settings.is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )

    return structlog.stdlib.get_logger()


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module.

    Binds ``component`` (last segment of the module name) and
    ``module_path``.

    Example:
        # In infrastructure/resilience/failed_messages/handler.py
        logger = get_module_logger()
        # context: {"component": "handler",
        #           "module_path": "infrastructure.resilience.failed_messages.handler"}
    """
    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame else None
    module = inspect.getmodule(frame) if frame else None
    if module is None:
        return logger.bind(component="unknown")

    module_name = module.__name__
    return logger.bind(
        component=module_name.rsplit(".", 1)[-1], module_path=module_name
    )
