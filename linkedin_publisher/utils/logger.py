import logging
import sys
import time
from contextlib import contextmanager, nullcontext
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional, Protocol, Union
from ..config import get_settings

def get_logger(name: Optional[str] = None, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Get or create logger with consistent configuration.

    Args:
        name: Logger name (usually __name__ of calling module)
        level: Overrides the configured LOG_LEVEL the first time the logger is set up

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name or __name__)

    # Only configure if no handlers are set
    if not logger.handlers:
        try:
            settings = get_settings()

            log_dir = Path(settings.LOG_DIR)
            log_dir.mkdir(parents=True, exist_ok=True)

            log_level = level if level is not None else getattr(logging, settings.LOG_LEVEL.upper())
            log_path = log_dir / settings.LOG_FILE

            formatter = logging.Formatter(settings.LOG_FORMAT)

            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            console_handler.setLevel(log_level)
            logger.addHandler(console_handler)

            file_handler = logging.FileHandler(str(log_path))
            file_handler.setFormatter(formatter)
            file_handler.setLevel(log_level)
            logger.addHandler(file_handler)

            logger.setLevel(log_level)

            logger.debug(f"Logger initialized for {name}")
            logger.debug(f"Log file path: {log_path.absolute()}")

        except Exception as e:
            # Fallback to basic console logging if file logging fails
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(console_handler)
            logger.setLevel(logging.DEBUG)
            logger.error(f"Error configuring file logger: {str(e)}")

    return logger


class LogLevel(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3

    @property
    def stdlib_level(self) -> int:
        return {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


class LoggerCapability(Protocol):
    """Leveled diagnostics sink handed to the publisher components."""

    def log(self, level: LogLevel, message: str, **context: Any) -> None: ...
    def debug(self, message: str, **context: Any) -> None: ...
    def info(self, message: str, **context: Any) -> None: ...
    def warn(self, message: str, **context: Any) -> None: ...
    def error(self, message: str, error: Optional[BaseException] = None, **context: Any) -> None: ...


class NoOpLogger:
    """Logger that drops everything. Used when dev mode is off."""

    dev_mode = False

    def set_dev_mode(self, dev_mode: bool) -> None:
        pass

    def set_log_level(self, log_level: LogLevel) -> None:
        pass

    def log(self, level: LogLevel, message: str, **context: Any) -> None:
        pass

    def debug(self, message: str, **context: Any) -> None:
        pass

    def info(self, message: str, **context: Any) -> None:
        pass

    def warn(self, message: str, **context: Any) -> None:
        pass

    def error(self, message: str, error: Optional[BaseException] = None, **context: Any) -> None:
        pass

    def timer(self, label: str):
        return nullcontext()

    def group(self, title: str):
        return nullcontext()

    def table(self, rows: Iterable[Dict[str, Any]], title: Optional[str] = None) -> None:
        pass

    def log_plugin_load(self) -> None:
        pass

    def log_plugin_unload(self) -> None:
        pass

    def log_command_execution(self, command_id: str) -> None:
        pass

    def log_settings_change(self, setting: str, old_value: Any, new_value: Any) -> None:
        pass


def _wants_traceback(error: Optional[BaseException]) -> bool:
    # Failures flagged as expected (rejected status, blank text, ...) carry no traceback
    return isinstance(error, BaseException) and not getattr(error, "expected", False)


class PluginLogger:
    """
    Leveled logger writing ``[HH:MM:SS.mmm] [name] [LEVEL] message`` lines.

    Messages below ``log_level`` are dropped. Timers, groups and tables are
    only emitted in dev mode.
    """

    def __init__(
        self,
        name: str,
        dev_mode: bool = False,
        log_level: LogLevel = LogLevel.INFO,
        sink: Optional[logging.Logger] = None
    ):
        self.name = name
        self.dev_mode = dev_mode
        self.log_level = LogLevel(log_level)
        # Level filtering happens here, the sink accepts everything
        self._sink = sink or get_logger("linkedin_publisher.plugin", level=logging.DEBUG)
        self._depth = 0

    def set_dev_mode(self, dev_mode: bool) -> None:
        self.dev_mode = dev_mode

    def set_log_level(self, log_level: LogLevel) -> None:
        self.log_level = LogLevel(log_level)

    def format_message(self, label: str, message: str, context: Optional[Dict[str, Any]] = None) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:12]
        indent = "  " * self._depth
        line = f"[{timestamp}] [{self.name}] [{label}] {indent}{message}"
        if context:
            line = f"{line} {context}"
        return line

    def should_log(self, level: LogLevel) -> bool:
        return level >= self.log_level

    def log(self, level: LogLevel, message: str, **context: Any) -> None:
        level = LogLevel(level)
        if self.should_log(level):
            self._sink.log(level.stdlib_level, self.format_message(level.name, message, context))

    def debug(self, message: str, **context: Any) -> None:
        self.log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log(LogLevel.INFO, message, **context)

    def warn(self, message: str, **context: Any) -> None:
        self.log(LogLevel.WARN, message, **context)

    def error(self, message: str, error: Optional[BaseException] = None, **context: Any) -> None:
        if not self.should_log(LogLevel.ERROR):
            return
        if error is not None:
            context = {**context, "error": str(error)}
        self._sink.log(
            logging.ERROR,
            self.format_message("ERROR", message, context),
            exc_info=error if _wants_traceback(error) else None
        )

    # Performance timing
    @contextmanager
    def timer(self, label: str) -> Iterator[None]:
        if not self.dev_mode:
            yield
            return
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._sink.debug(self.format_message("TIMER", f"{label}: {elapsed_ms:.3f}ms"))

    # Grouping of related lines
    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        if not self.dev_mode:
            yield
            return
        self._sink.debug(self.format_message("GROUP", title))
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def table(self, rows: Iterable[Dict[str, Any]], title: Optional[str] = None) -> None:
        if not self.dev_mode:
            return
        if title:
            self.debug(title)
        for index, row in enumerate(rows):
            self._sink.debug(self.format_message("TABLE", f"{index}: {row}"))

    # Lifecycle helpers
    def log_plugin_load(self) -> None:
        self.info("Plugin loaded successfully")

    def log_plugin_unload(self) -> None:
        self.info("Plugin unloaded")

    def log_command_execution(self, command_id: str) -> None:
        self.debug(f"Executing command: {command_id}")

    def log_settings_change(self, setting: str, old_value: Any, new_value: Any) -> None:
        self.debug(f"Setting changed: {setting}", **{"from": old_value, "to": new_value})


def create_logger(
    name: str,
    dev_mode: bool = False,
    log_level: LogLevel = LogLevel.ERROR
) -> Union[PluginLogger, NoOpLogger]:
    """Return a real logger in dev mode and a no-op logger otherwise."""
    return PluginLogger(name, dev_mode, log_level) if dev_mode else NoOpLogger()
