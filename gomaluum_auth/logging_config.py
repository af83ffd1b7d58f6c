"""
Logging configuration for the authentication service.

The CAS flow logs every handshake step, and at DEBUG also a preview of each
portal page, so it gets its own level independent of the rest of the service.
"""

import logging
import logging.config
from typing import Any, Dict, Iterable, Optional

CAS_LOGGER = "gomaluum_auth.modules.auth.cas"

# Probe endpoints polled by orchestrators
QUIET_PATHS = ("/health",)


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access-log lines for GET requests on quiet paths."""

    def __init__(self, paths: Iterable[str] = QUIET_PATHS):
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True

        # uvicorn passes (client, method, path, http_version, status) as args
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2]).split("?", 1)[0]
            return not (args[1] == "GET" and path in self.paths)

        message = record.getMessage()
        return not any(
            f'"GET {path} ' in message or f'"GET {path}?' in message
            for path in self.paths
        )


def _logger(handler: str, level: str) -> Dict[str, Any]:
    return {"handlers": [handler], "level": level, "propagate": False}


def get_logging_config(level: str = "INFO", cas_level: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the dictConfig for the service.

    Args:
        level: Level for the service and uvicorn loggers
        cas_level: Level for the CAS flow logger; defaults to ``level``
    """
    level = level.upper()
    cas_level = (cas_level or level).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {
                "()": HealthCheckFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter"]
            }
        },
        "loggers": {
            "uvicorn": _logger("default", level),
            "uvicorn.error": _logger("default", level),
            "uvicorn.access": _logger("access", level),
            "gomaluum_auth": _logger("default", level),
            CAS_LOGGER: _logger("default", cas_level),
            # httpx logs every request URL at INFO, including the login POST
            "httpx": _logger("default", "WARNING"),
            "httpcore": _logger("default", "WARNING"),
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO", cas_level: Optional[str] = None) -> None:
    """Apply the logging configuration to the running process."""
    logging.config.dictConfig(get_logging_config(level, cas_level))
