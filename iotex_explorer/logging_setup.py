"""
IoTeX Explorer - Logging System
=================================
Log strutturati per le chiamate al gateway e le richieste HTTP.

File: JSON (o testo) con rotation, errori anche su file separato.
Console: testo colorato.
"""

import logging
import logging.handlers
import json
import sys
import time
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime, timezone


ROOT_LOGGER_NAME = "iotex_explorer"

LEVEL_COLORS = {
    'DEBUG': '\033[90m',
    'INFO': '\033[92m',
    'WARNING': '\033[93m',
    'ERROR': '\033[91m',
    'CRITICAL': '\033[1;91m',
}
RESET = '\033[0m'


def _utc(created: float) -> datetime:
    return datetime.fromtimestamp(created, tz=timezone.utc)


# ============================================================================
# FORMATTERS
# ============================================================================

class JSONFormatter(logging.Formatter):
    """Una riga JSON per record: timestamp UTC, level, logger, message, extra_data"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": _utc(record.created).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra_data = getattr(record, 'extra_data', None)
        if extra_data:
            entry["extra_data"] = extra_data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ColoredTextFormatter(logging.Formatter):
    """Testo per console, livello colorato (il record non viene modificato)"""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname)
        level = f"{color}{record.levelname}{RESET}" if color else record.levelname
        line = (
            f"{_utc(record.created):%Y-%m-%d %H:%M:%S} "
            f"[{level}] {record.name}: {record.getMessage()}"
        )
        extra_data = getattr(record, 'extra_data', None)
        if extra_data:
            line += f" | {extra_data}"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


# ============================================================================
# LOGGER CLASS
# ============================================================================

class ExplorerLogger:
    """
    Wrapper di logging.Logger che accetta `extra_data` come dict.

    Example:
        >>> logger = get_logger("gateway")
        >>> logger.info("Gateway ready", extra_data={"timeout": 10})
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, message: str, extra_data: Optional[Dict[str, Any]], exc_info: Any = None):
        extra = {'extra_data': extra_data} if extra_data else None
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, extra_data: Optional[Dict] = None):
        self._log(logging.DEBUG, message, extra_data)

    def info(self, message: str, extra_data: Optional[Dict] = None):
        self._log(logging.INFO, message, extra_data)

    def warning(self, message: str, extra_data: Optional[Dict] = None):
        self._log(logging.WARNING, message, extra_data)

    def error(self, message: str, extra_data: Optional[Dict] = None, exc_info: Any = None):
        self._log(logging.ERROR, message, extra_data, exc_info)


# ============================================================================
# SETUP FUNCTION
# ============================================================================

def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = True,
    log_dir: Path = Path("./logs"),
    log_format: str = "json",
    log_rotation_mb: int = 100,
    log_retention_days: int = 30,
    enable_console: bool = True,
) -> ExplorerLogger:
    """
    Setup logging system completo.

    Args:
        log_level: Level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Salva su file
        log_dir: Directory log files
        log_format: Formato file (json, text)
        log_rotation_mb: MB prima rotation
        log_retention_days: Numero file di backup conservati
        enable_console: Log anche su console

    Returns:
        ExplorerLogger: Logger root configurato
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, log_level.upper()))

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if log_to_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "iotex_explorer.log",
            maxBytes=log_rotation_mb * 1024 * 1024,
            backupCount=log_retention_days,
            encoding='utf-8'
        )
        file_handler.setFormatter(_file_formatter(log_format))
        root_logger.addHandler(file_handler)

        # Log errori separato
        error_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "iotex_explorer_errors.log",
            maxBytes=log_rotation_mb * 1024 * 1024,
            backupCount=log_retention_days,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(_file_formatter(log_format))
        root_logger.addHandler(error_handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredTextFormatter())
        root_logger.addHandler(console_handler)

    return ExplorerLogger(root_logger)


def setup_logging_from_settings(settings) -> ExplorerLogger:
    """Setup logging da ExplorerSettings"""
    return setup_logging(
        log_level=settings.log_level,
        log_to_file=settings.log_to_file,
        log_dir=settings.log_dir,
        log_format=settings.log_format,
        log_rotation_mb=settings.log_rotation_mb,
        log_retention_days=settings.log_retention_days,
        enable_console=settings.enable_console,
    )


def _file_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JSONFormatter()
    return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')


# ============================================================================
# CATEGORY LOGGERS
# ============================================================================

def get_logger(category: str) -> ExplorerLogger:
    """
    Ottieni logger per categoria specifica.

    Example:
        >>> api_logger = get_logger("api.address")
        >>> api_logger.info("Route registered")
    """
    return ExplorerLogger(logging.getLogger(f"{ROOT_LOGGER_NAME}.{category}"))


# ============================================================================
# PERFORMANCE TRACKING
# ============================================================================

class PerformanceLogger:
    """
    Context manager per tracking performance.

    Example:
        >>> logger = get_logger("gateway")
        >>> with PerformanceLogger(logger, "getAddressDetails", threshold_ms=500):
        ...     ...
        # Logs: "getAddressDetails completed in 12.30ms"
    """

    def __init__(
        self,
        logger: ExplorerLogger,
        operation: str,
        threshold_ms: Optional[int] = None,
        extra_data: Optional[Dict[str, Any]] = None
    ):
        self.logger = logger
        self.operation = operation
        self.threshold_ms = threshold_ms
        self.extra_data = extra_data or {}
        self.start_time: Optional[float] = None
        self.elapsed_ms: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000

        extra = {
            **self.extra_data,
            "operation": self.operation,
            "duration_ms": round(self.elapsed_ms, 2),
        }
        if exc_type is not None:
            extra["failed"] = True

        if self.threshold_ms and self.elapsed_ms > self.threshold_ms:
            self.logger.warning(
                f"{self.operation} took {self.elapsed_ms:.2f}ms (threshold: {self.threshold_ms}ms)",
                extra_data=extra
            )
        else:
            self.logger.debug(
                f"{self.operation} completed in {self.elapsed_ms:.2f}ms",
                extra_data=extra
            )

        return False


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "ROOT_LOGGER_NAME",
    "setup_logging",
    "setup_logging_from_settings",
    "get_logger",
    "ExplorerLogger",
    "PerformanceLogger",
    "JSONFormatter",
    "ColoredTextFormatter",
]
