"""Structured logging: console and JSON-line event file."""

import json
import logging
import os
import sys
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from src.core.config import config


def _format_duration(ms: float) -> str:
    if ms < 0:
        return "0ms"
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    if ms >= 1:
        return f"{ms:.0f}ms"
    if ms > 0:
        return "<1ms"
    return "0ms"


def _short_reason(reason: str | None, max_len: int = 80) -> str:
    """One-line short reason for console (failed call)."""
    if not reason or not reason.strip():
        return ""
    s = reason.strip().replace("\n", " ").strip()
    return s[:max_len] + "..." if len(s) > max_len else s


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    # 38;5;N = foreground 256-color
    codes = {
        "domain": "\033[38;5;81m",
        "ok": "\033[38;5;78m",
        "fail": "\033[38;5;203m",
        "duration": "\033[38;5;221m",
        "shape": "\033[38;5;245m",
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class DashboardLogger:
    def __init__(self):
        config.logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = config.logs_dir / "dashboard.log"
        self._file_lock = threading.Lock()
        self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("dashboard")
        self.console.setLevel(logging.DEBUG)
        self._console_formatter = logging.Formatter(
            "%(asctime)s │ %(message)s", datefmt="%H:%M:%S"
        )
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.INFO)
            handler.setFormatter(self._console_formatter)
            self.console.addHandler(handler)
        self._setup_third_party_console_logging()

    def _setup_third_party_console_logging(self):
        handler = logging.StreamHandler()
        handler.setLevel(logging.WARNING)
        handler.setFormatter(self._console_formatter)
        for name in ("httpx", "src.normalization"):
            log = logging.getLogger(name)
            if log.handlers:
                continue
            log.setLevel(logging.INFO)
            log.propagate = False
            log.addHandler(handler)

    def log_event(self, event: LogEvent) -> None:
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def search_request(self, domain: str, query: str, payload: dict[str, Any]):
        event = LogEvent(
            event_type="SEARCH_REQUEST",
            timestamp=self._timestamp(),
            data={"domain": domain, "query": query[:500], "payload": payload},
        )
        self.log_event(event)
        self.console.debug(f"Search [{domain}]: {query[:100]}{'...' if len(query) > 100 else ''}")

    def search_response(
        self,
        domain: str,
        query: str,
        shape: str | None,
        total_found: int,
        execution_time_ms: float,
    ):
        event = LogEvent(
            event_type="SEARCH_RESPONSE",
            timestamp=self._timestamp(),
            data={
                "domain": domain,
                "query": query[:500],
                "shape": shape,
                "total_found": total_found,
                "execution_time_ms": execution_time_ms,
            },
        )
        self.log_event(event)
        dur = f"{_c('duration')}{_format_duration(execution_time_ms)}{_reset()}"
        shape_label = f"{_c('shape')}[{shape or 'no shape'}]{_reset()}"
        self.console.info(
            f"{_c('domain')}{domain}{_reset()} search  {total_found} results  {shape_label}  in {dur}"
        )

    def transport_failure(self, domain: str, operation: str, exception: Exception):
        event = LogEvent(
            event_type="TRANSPORT_FAILURE",
            timestamp=self._timestamp(),
            data={
                "domain": domain,
                "operation": operation,
                "exception_type": type(exception).__name__,
                "exception": str(exception)[:500],
            },
        )
        self.log_event(event)
        self.console.error(
            f"{_c('fail')}✗ {domain} {operation} failed{_reset()}: "
            f"{type(exception).__name__} {_short_reason(str(exception))}"
        )

    def warning(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="WARNING",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.warning(f"⚠️ {message}", *args, **log_kwargs)


logger = DashboardLogger()
