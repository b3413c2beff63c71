"""
Structured logging utilities for cycletime.

Timers, reporters and the factory use these helpers so every line carries
the same context.

Log fields always present:
- timer      (timer name, when the line is about one timer)
- hostname   (machine the measurement was taken on)
- namespace  (CloudWatch namespace, Cycletime/<ns>)
- ct_code    (optional CT-XXX-NNNN error code)
"""

from __future__ import annotations

import logging
import logging.config
import logging.handlers
import socket
from pathlib import Path
from typing import Any, Dict, Optional

from cycletime.config import Settings, settings as default_settings

_LOGGER_INITIALIZED = False
_FILE_HANDLERS: Dict[str, logging.Handler] = {}

CONTEXT_ATTRS = ("timer", "hostname", "namespace", "ct_code")


# -----------------------------------------------------------------------------
# 1. LOAD LOGGING.YAML
# -----------------------------------------------------------------------------
def _load_logging_yaml(cfg: Settings) -> None:
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    if Path(cfg.LOGGING_YAML).exists():
        logging.config.dictConfig(cfg.load_yaml(cfg.LOGGING_YAML))
    else:
        logging.basicConfig(level=cfg.LOG_LEVEL.upper())

    _LOGGER_INITIALIZED = True


# -----------------------------------------------------------------------------
# 2. OPTIONAL ROTATING FILE HANDLER (LOG_DIR)
# -----------------------------------------------------------------------------
def _get_file_handler(log_dir: str) -> logging.Handler:
    """
    Get or create the rotating file handler for LOG_DIR/cycletime.log.
    """
    if log_dir in _FILE_HANDLERS:
        return _FILE_HANDLERS[log_dir]

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=str(path / "cycletime.log"),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    formatter = logging.Formatter(
        '{"ts": "%(asctime)s", "level": "%(levelname)s", '
        '"logger": "%(name)s", "message": "%(message)s", '
        '"timer": "%(timer)s", "hostname": "%(hostname)s", '
        '"namespace": "%(namespace)s", "ct_code": "%(ct_code)s"}'
    )
    handler.setFormatter(formatter)
    handler.addFilter(CycletimeContextFilter())
    handler.setLevel(logging.DEBUG)

    _FILE_HANDLERS[log_dir] = handler
    return handler


# -----------------------------------------------------------------------------
# 3. CONTEXT FILTER
# -----------------------------------------------------------------------------
class CycletimeContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for a in CONTEXT_ATTRS:
            if not hasattr(record, a):
                setattr(record, a, None)
        if record.hostname is None:
            record.hostname = hostname()
        return True


def hostname() -> str:
    return socket.gethostname()


# -----------------------------------------------------------------------------
# 4. GET LOGGER
# -----------------------------------------------------------------------------
def get_logger(name: str, cfg: Optional[Settings] = None) -> logging.Logger:
    """
    Get a logger with the cycletime context filter attached.

    Parameters
    ----------
    name : str
        Logger name (e.g., "cycletime.timer", "cycletime.cloudwatch").
    cfg : Settings, optional
        Settings to read LOGGING_YAML / LOG_LEVEL / LOG_DIR from. The
        module-level settings are used when omitted.

    Returns
    -------
    logging.Logger
    """
    cfg = cfg or default_settings
    _load_logging_yaml(cfg)
    logger = logging.getLogger(name)

    if not any(isinstance(f, CycletimeContextFilter) for f in logger.filters):
        logger.addFilter(CycletimeContextFilter())

    if cfg.LOG_DIR:
        file_handler = _get_file_handler(cfg.LOG_DIR)
        if file_handler not in logger.handlers:
            logger.addHandler(file_handler)

    return logger


# -----------------------------------------------------------------------------
# 5. bind_context() — extra dict for a single log call
# -----------------------------------------------------------------------------
def bind_context(
    timer: Optional[str] = None,
    namespace: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    base: Dict[str, Any] = {"timer": timer, "namespace": namespace}
    if extra:
        base.update(extra)
    return base
