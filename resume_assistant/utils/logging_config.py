"""
Logging setup for the Resume Assistant API.

Every module logs through get_logger(__name__), which places it under the
``resume_assistant`` namespace. The ENVIRONMENT variable picks one of the
profiles below; ``testing`` keeps output on the console only.
"""
import logging
import logging.config
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

ROOT_LOGGER = "resume_assistant"

LOG_FORMATS = {
    "simple": "%(levelname)s - %(name)s - %(message)s",
    "detailed": "%(asctime)s | %(levelname)-8s | %(name)-45s | %(message)s",
    "json": '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
}

PROFILES: Dict[str, Dict[str, Any]] = {
    "production": {"level": None, "console": True, "files": True, "style": "json"},
    "development": {"level": "DEBUG", "console": True, "files": True, "style": "detailed"},
    "testing": {"level": "WARNING", "console": True, "files": False, "style": "simple"},
}

# Third-party loggers that drown the application output at DEBUG
QUIET_LOGGERS = {
    "pdfminer": "ERROR",
    "urllib3": "WARNING",
    "multipart": "WARNING",
}

ROTATE_BYTES = 10 * 1024 * 1024


def _file_handler(path: Path, level: str, formatter: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": str(path),
        "maxBytes": ROTATE_BYTES,
        "backupCount": 5,
        "encoding": "utf8",
    }


def setup_logging(
    level: str = "INFO",
    log_dir: str = None,
    console: bool = True,
    files: bool = True,
    style: str = "detailed",
) -> None:
    """
    Configure the application and uvicorn loggers via dictConfig.

    With ``files`` enabled two rotating logs are written to ``log_dir``
    (LOG_DIR, default ``logs``): resume_assistant_<date>.log with everything
    at ``level`` and resume_assistant_errors_<date>.log with ERROR and above.
    """
    handlers: Dict[str, Any] = {}
    names: List[str] = []

    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": style,
            "stream": "ext://sys.stdout",
        }
        names.append("console")

    if files:
        directory = Path(log_dir or os.getenv("LOG_DIR", "logs"))
        directory.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d")
        handlers["file"] = _file_handler(directory / f"resume_assistant_{stamp}.log", level, "detailed")
        handlers["error_file"] = _file_handler(directory / f"resume_assistant_errors_{stamp}.log", "ERROR", "detailed")
        names += ["file", "error_file"]

    loggers: Dict[str, Any] = {
        ROOT_LOGGER: {"level": level, "handlers": names, "propagate": False},
        "uvicorn": {"level": "INFO", "handlers": names, "propagate": False},
        "uvicorn.access": {"level": "INFO", "handlers": [n for n in names if n != "error_file"], "propagate": False},
    }
    for name, quiet_level in QUIET_LOGGERS.items():
        loggers[name] = {"level": quiet_level}

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            name: {"format": fmt, "datefmt": "%Y-%m-%d %H:%M:%S"} for name, fmt in LOG_FORMATS.items()
        },
        "handlers": handlers,
        "loggers": loggers,
        "root": {"level": "WARNING", "handlers": names},
    })

    get_logger("logging").info(
        f"Logging configured: level={level} console={console} files={files} style={style}"
    )


def get_logger(name: str) -> logging.Logger:
    """Logger under the resume_assistant namespace. Accepts __name__ as-is."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_for_environment() -> str:
    """Apply the profile named by ENVIRONMENT and return that name."""
    environment = os.getenv("ENVIRONMENT", "development").lower()
    profile = dict(PROFILES.get(environment, {"level": None, "console": True, "files": True, "style": "detailed"}))
    profile["level"] = profile["level"] or os.getenv("LOG_LEVEL", "INFO").upper()
    setup_logging(**profile)
    return environment


class PerformanceMonitor:
    """Times a block such as a document extraction or a model call.

    Logs at INFO, or WARNING once ``threshold_ms`` is exceeded. A failing
    block is logged at ERROR and the exception propagates.
    """

    def __init__(self, operation_name: str, logger: logging.Logger = None, threshold_ms: float = 1000):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.threshold_ms = threshold_ms
        self.elapsed_ms = None
        self._started = None

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        extra = {"operation": self.operation_name, "elapsed_ms": round(self.elapsed_ms, 2)}

        if exc_type is not None:
            self.logger.error(f"{self.operation_name} failed after {self.elapsed_ms:.0f}ms: {exc_val}", extra=extra)
        elif self.elapsed_ms > self.threshold_ms:
            self.logger.warning(
                f"{self.operation_name} took {self.elapsed_ms:.0f}ms (threshold {self.threshold_ms:.0f}ms)",
                extra=extra,
            )
        else:
            self.logger.info(f"{self.operation_name} took {self.elapsed_ms:.0f}ms", extra=extra)
        return False
