"""
Shared module - Cross-cutting concerns

Constants, enums and logging helpers used by every layer of the engine.
It must not depend on Infrastructure or Frameworks beyond structlog.
"""

from .consts import EnumCalculator, EnumEnvironment, EnumLogFormat, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumCalculator",
    "EnumEnvironment",
    "EnumLogFormat",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
