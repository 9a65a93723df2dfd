"""Colored gateway logger — ANSI-colored console tracing of remote API calls.

Provides a GatewayLogger with color-coded output per HTTP verb, making it
easy to follow what a dashboard page asked of the CMS API.

Color scheme:
    🔵 Blue    — List / Get (reads)
    🟢 Green   — Create
    🟡 Yellow  — Update
    🟣 Magenta — Delete
    🔴 Red     — Errors / non-2xx
    ⚪ Gray    — Timing
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Call Kinds ───────────────────────────────────────────────────────

class GatewayCall:
    """Predefined call kinds with colors and icons."""

    LIST = ("LIST", _Colors.BLUE, "📋")
    GET = ("GET", _Colors.BLUE, "🔎")
    CREATE = ("CREATE", _Colors.GREEN, "➕")
    UPDATE = ("UPDATE", _Colors.YELLOW, "✏️")
    DELETE = ("DELETE", _Colors.MAGENTA, "🗑️")
    FETCH = ("FETCH", _Colors.CYAN, "📊")


@dataclass
class CallTrace:
    """Filled in by the caller inside ``timed_call``."""

    status_code: int | None = None


# ── GatewayLogger ────────────────────────────────────────────────────

class GatewayLogger:
    """Color-coded logger for remote API calls.

    Usage:
        log = GatewayLogger("cms_admin.infrastructure.http")
        with log.timed_call(GatewayCall.LIST, "blog-posts", org="1000") as trace:
            response = await client.get(url)
            trace.status_code = response.status_code
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def call_start(self, call: tuple[str, str, str], resource: str, **kwargs: Any) -> None:
        label, color, icon = call
        formatted = f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} {color}{resource}{_Colors.RESET}"
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.debug(formatted)

    def call_complete(
        self,
        call: tuple[str, str, str],
        resource: str,
        status_code: int | None,
        elapsed: float,
    ) -> None:
        label, color, icon = call
        ok = status_code is not None and 200 <= status_code < 300
        status_color = _Colors.GREEN if ok else _Colors.RED
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} {resource} "
            f"{status_color}{status_code if status_code is not None else '-'}{_Colors.RESET} "
            f"{_Colors.GRAY}{elapsed * 1000:.0f}ms{_Colors.RESET}"
        )
        if ok:
            self._logger.info(formatted)
        else:
            self._logger.warning(formatted)

    def call_error(self, call: tuple[str, str, str], resource: str, error: Exception) -> None:
        label, _, icon = call
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{resource}{_Colors.RESET} "
            f"{_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        )
        self._logger.error(formatted)

    @contextmanager
    def timed_call(self, call: tuple[str, str, str], resource: str, **kwargs: Any) -> Iterator[CallTrace]:
        """Context manager that logs start/end of one call with elapsed time."""
        self.call_start(call, resource, **kwargs)
        trace = CallTrace()
        start = time.perf_counter()
        try:
            yield trace
        except Exception as e:
            self.call_error(call, resource, e)
            raise
        else:
            self.call_complete(call, resource, trace.status_code, time.perf_counter() - start)
