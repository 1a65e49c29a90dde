"""backend.py - The logging backend lagerlog hands admitted lines to.

lagerlog decides *whether* a line is logged; everything after that (record
building, handler dispatch, formatting, output) belongs to a backend. This
module defines the Backend interface and StdlibBackend, which maps it onto
the standard ``logging`` package.

The interface has two methods the core actually calls:

    dispatch_log:      ingest one admitted line with its metadata envelope.
    get_runtime_mask:  report the live set of enabled levels as a bitmask.

The remaining methods are administrative pass-throughs (traces, handler
levels, status, errno text) that the facade forwards without adding logic.

Typical usage::

    import logging
    import lagerlog
    from lagerlog.backend import StdlibBackend

    logging.basicConfig(level=logging.DEBUG)
    lagerlog.set_backend(StdlibBackend(logging.getLogger("myapp")))
    lagerlog.info("ready")
"""

import errno
import logging
import os
import sys
import threading
from abc import ABC, abstractmethod
from typing import List, Optional

from .levels import LEVELS, from_stdlib_level, to_stdlib_level

_log = logging.getLogger(__name__)

DEFAULT_LOGGER_NAME = "lagerlog"
WILDCARD = "*"


class Backend(ABC):
    """Abstract base class for lagerlog backends.

    Only ``dispatch_log`` and ``get_runtime_mask`` are required. The
    administrative calls (traces, ``status``, handler levels) raise
    NotImplementedError unless a subclass overrides them; ``posix_error``
    works for every backend.

    Example:
        >>> class ListBackend(Backend):
        ...     def __init__(self):
        ...         self.lines = []
        ...     def dispatch_log(self, level, envelope, fmt, args, truncation_size):
        ...         self.lines.append((level, fmt % args if args else fmt))
        ...     def get_runtime_mask(self):
        ...         return 0xFF
    """

    @abstractmethod
    def dispatch_log(self, level, envelope: dict, fmt, args, truncation_size: int) -> None:
        """Ingest one admitted log line.

        Args:
            level: Level name of the call.
            envelope: ``{"module", "function", "line", "pid"}`` of the call site.
            fmt: The resolved message, a ``%``-style format string.
            args: Positional format arguments; empty means ``fmt`` is literal.
            truncation_size: Maximum message length requested by the caller.
        """

    @abstractmethod
    def get_runtime_mask(self) -> int:
        """Return the bitmask of level numbers currently enabled for output."""

    # ---------------------------------------------------------------------- #
    # Administrative pass-throughs. Unsupported ones raise NotImplementedError.
    # ---------------------------------------------------------------------- #

    def trace_console(self, filter, level: str = "debug"):
        raise NotImplementedError(f"{type(self).__name__} does not support traces")

    def trace_file(self, path: str, filter, level: str = "debug"):
        raise NotImplementedError(f"{type(self).__name__} does not support traces")

    def stop_trace(self, trace) -> bool:
        raise NotImplementedError(f"{type(self).__name__} does not support traces")

    def clear_all_traces(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not support traces")

    def status(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} does not report status")

    def get_loglevel(self, handler: str) -> str:
        raise NotImplementedError(f"{type(self).__name__} does not expose handlers")

    def set_loglevel(self, handler: str, ident_or_level, level=None) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not expose handlers")

    def posix_error(self, error) -> str:
        """Translate an errno code or symbolic name (``"enoent"``) to text."""
        if isinstance(error, int) and not isinstance(error, bool):
            return os.strerror(error)
        if isinstance(error, str):
            code = getattr(errno, error.upper(), None)
            if isinstance(code, int):
                return os.strerror(code)
        return str(error)


class TraceFilter(logging.Filter):
    """Admit records whose envelope matches every key/value of ``criteria``.

    ``"*"`` as a value matches anything, as long as the key is present.
    Records that did not come through lagerlog carry no envelope and are
    rejected.

    Example:
        >>> f = TraceFilter({"module": "billing", "function": "*"})
    """

    def __init__(self, criteria) -> None:
        super().__init__()
        self.criteria = dict(criteria or {})

    def filter(self, record: logging.LogRecord) -> bool:
        envelope = getattr(record, "envelope", None)
        if envelope is None:
            return False
        for key, expected in self.criteria.items():
            if key not in envelope:
                return False
            if expected != WILDCARD and envelope[key] != expected:
                return False
        return True


def _stdlib_level_or_raise(level) -> int:
    levelno = to_stdlib_level(level)
    if levelno is None:
        raise ValueError(f"bad log level {level!r}")
    return levelno


class StdlibBackend(Backend):
    """Backend that hands lines to a ``logging.Logger``.

    Each admitted line becomes a LogRecord named ``<logger name>.<module>``
    after the calling module, carrying the call site's function and line,
    plus two extras formatters can use: ``envelope`` (the full metadata dict)
    and ``pid``. The record is handled by the backend's own logger, so its
    handlers and level apply; the name only serves ``%(name)s`` and
    ``logging.Filter``.

    A positive truncation size cuts the formatted message to that many
    characters (not encoded bytes). Zero or negative means no truncation.

    Traces are extra handlers on the same logger, each guarded by a
    TraceFilter. They receive whatever the logger admits, so lower the
    logger level (``set_loglevel(<logger name>, "debug")``) to trace below it.

    Attributes:
        _logger (logging.Logger): Destination logger.
        _traces (list): Handlers installed by ``trace_console``/``trace_file``.
        _lock (threading.Lock): Guards ``_traces``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._traces: List[logging.Handler] = []
        self._lock = threading.Lock()

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def dispatch_log(self, level, envelope: dict, fmt, args, truncation_size: int) -> None:
        levelno = to_stdlib_level(level)
        if levelno is None or not self._logger.isEnabledFor(levelno):
            return

        module = envelope.get("module", "unknown")
        record = self._logger.makeRecord(
            f"{self._logger.name}.{module}",
            levelno,
            module,
            envelope.get("line", 0),
            fmt,
            tuple(args),
            None,
            func=envelope.get("function"),
            extra={"envelope": envelope, "pid": envelope.get("pid")},
        )
        record.module = module

        if truncation_size > 0:
            try:
                message = record.getMessage()
            except (TypeError, ValueError):
                # Left as is; the handlers report the bad format via handleError.
                message = None
            if message is not None and len(message) > truncation_size:
                record.msg, record.args = message[:truncation_size], ()

        self._logger.handle(record)

    def get_runtime_mask(self) -> int:
        mask = 0
        for name, num in LEVELS:
            levelno = to_stdlib_level(name)
            if levelno is not None and self._logger.isEnabledFor(levelno):
                mask |= num
        return mask

    # ---------------------------------------------------------------------- #
    # Traces
    # ---------------------------------------------------------------------- #

    def trace_console(self, filter, level: str = "debug", stream=None) -> logging.Handler:
        """Start echoing matching lines to ``stream`` (default: stderr).

        Returns:
            The trace handle to pass to ``stop_trace``.

        Raises:
            ValueError: ``level`` is not a level name.
        """
        levelno = _stdlib_level_or_raise(level)
        handler = logging.StreamHandler(stream or sys.stderr)
        return self._install_trace(handler, filter, levelno)

    def trace_file(self, path: str, filter, level: str = "debug") -> logging.Handler:
        """Start appending matching lines to ``path``.

        Missing parent directories are created.
        """
        levelno = _stdlib_level_or_raise(level)
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
        return self._install_trace(handler, filter, levelno)

    def stop_trace(self, trace) -> bool:
        """Detach and close one trace. Returns False if it is not active."""
        with self._lock:
            if trace not in self._traces:
                return False
            self._traces.remove(trace)
        self._logger.removeHandler(trace)
        trace.close()
        _log.debug("stopped trace %s", trace)
        return True

    def clear_all_traces(self) -> None:
        with self._lock:
            traces, self._traces = self._traces, []
        for trace in traces:
            self._logger.removeHandler(trace)
            trace.close()
        _log.debug("cleared %d trace(s)", len(traces))

    def _install_trace(self, handler, filter, levelno: int) -> logging.Handler:
        handler.setLevel(levelno)
        handler.addFilter(TraceFilter(filter))
        with self._lock:
            self._traces.append(handler)
        self._logger.addHandler(handler)
        _log.debug("started trace %s filter=%r", handler, filter)
        return handler

    # ---------------------------------------------------------------------- #
    # Handler levels and status
    # ---------------------------------------------------------------------- #

    def status(self) -> str:
        """Describe the logger, its handlers and the active traces."""
        logger = self._logger
        lines = [
            f"Logger {logger.name!r} at level "
            f"{from_stdlib_level(logger.getEffectiveLevel())}",
            "Handlers:",
        ]
        with self._lock:
            traces = list(self._traces)
        handlers = [h for h in logger.handlers if h not in traces]
        if not handlers:
            lines.append("  (none)")
        for h in handlers:
            lines.append(
                f"  {h.get_name() or type(h).__name__} "
                f"level={from_stdlib_level(h.level)}"
            )
        lines.append("Active traces:")
        if not traces:
            lines.append("  (none)")
        for t in traces:
            criteria = [f.criteria for f in t.filters if isinstance(f, TraceFilter)]
            lines.append(
                f"  {type(t).__name__} filter={criteria[0] if criteria else {}} "
                f"level={from_stdlib_level(t.level)}"
            )
        return "\n".join(lines)

    def get_loglevel(self, handler: str) -> str:
        """Return the level name of the named handler (or of the logger)."""
        target = self._find(handler)
        if isinstance(target, logging.Logger):
            return from_stdlib_level(target.getEffectiveLevel())
        return from_stdlib_level(target.level)

    def set_loglevel(self, handler: str, ident_or_level, level=None) -> None:
        """Set the level of a named handler.

        Called as ``set_loglevel(name, level)`` or
        ``set_loglevel(name, ident, level)``, where ``ident`` is the file path
        that tells apart several file handlers sharing one name.

        Raises:
            LookupError: No handler by that name (and ident).
            ValueError: ``level`` is not a level name.
        """
        if level is None:
            ident, level = None, ident_or_level
        else:
            ident = ident_or_level
        levelno = _stdlib_level_or_raise(level)
        self._find(handler, ident).setLevel(levelno)

    def _find(self, name: str, ident: Optional[str] = None):
        if ident is None and name == self._logger.name:
            return self._logger
        for h in self._logger.handlers:
            if h.get_name() != name:
                continue
            if ident is not None:
                path = getattr(h, "baseFilename", None)
                if path != os.path.abspath(ident):
                    continue
            return h
        if ident is not None:
            raise LookupError(f"no handler {name!r} for {ident!r}")
        raise LookupError(f"no handler {name!r}")


# ---------------------------------------------------------------------------
# Process-wide default backend.
# ---------------------------------------------------------------------------
_default_backend: Optional[Backend] = None
_default_lock = threading.Lock()


def get_backend() -> Backend:
    """Return the process-wide backend, a StdlibBackend unless replaced."""
    global _default_backend
    backend = _default_backend
    if backend is None:
        with _default_lock:
            if _default_backend is None:
                _default_backend = StdlibBackend()
            backend = _default_backend
    return backend


def set_backend(backend: Optional[Backend]) -> None:
    """Replace the process-wide backend. None restores a fresh StdlibBackend."""
    global _default_backend
    with _default_lock:
        _default_backend = backend
