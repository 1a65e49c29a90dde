"""lagerlog/__init__.py - Public API for the lagerlog package.

lagerlog puts two cheap level checks in front of a logging backend. Calls
below the configured minimum level return before any message text is built,
and messages given as zero-argument callables are only produced when the
call's level number shares a bit with the backend's runtime level mask.
That check is bitwise, so a producer may still run for a line the backend
then drops.

Quick start:
    import logging
    import lagerlog

    logging.basicConfig(level=logging.DEBUG)   # the default backend uses stdlib logging

    lagerlog.info("job %s started", job_id)
    lagerlog.debug(lambda: f"state: {expensive_dump()}")   # skipped at "info"

    lagerlog.set_level("debug")                # lower the minimum level
    lagerlog.set_truncation_size(1024)

    # Echo one module's lines to stderr while investigating
    trace = lagerlog.trace_console({"module": "billing"})
    ...
    lagerlog.stop_trace(trace)

Levels, most verbose first: debug, info, notice, warning, error, critical,
alert, emergency, and ``none`` (as a minimum level: log nothing).

Exported names:
    Logger:             The gate/resolve/dispatch facade; one per backend/config.
    Backend:            Interface a backend implements.
    StdlibBackend:      Backend on top of the standard ``logging`` package.
    CompileTimeConfig:  Minimum level and truncation size.
    log, debug ... emergency:  Log through the process-wide default Logger.
    get_level, set_level, get_truncation_size, set_truncation_size:
                        Accessors for the process-wide config.
    get_backend, set_backend:  The process-wide backend.
    level_to_num, num_to_level:  Level name/number translation.
"""

from .backend import Backend, StdlibBackend, TraceFilter, get_backend, set_backend
from .config import CompileTimeConfig, get_config, reset_config
from .core import SHORTHAND_LEVELS, Logger
from .levels import LEVEL_NAMES, LEVELS, level_to_num, num_to_level

_root = Logger()


def log(level, message, *args, stacklevel: int = 1) -> None:
    """Log through the process-wide default Logger. See ``Logger.log``."""
    _root._log(level, message, args, stacklevel + 1)


def _make_function(level: str):
    def function(message, *args, stacklevel: int = 1) -> None:
        _root._log(level, message, args, stacklevel + 1)

    function.__name__ = function.__qualname__ = level
    function.__doc__ = f"Log ``message`` at level ``{level}`` through the default Logger."
    return function


for _name in SHORTHAND_LEVELS:
    globals()[_name] = _make_function(_name)
del _name


def is_enabled(level) -> bool:
    return _root.is_enabled(level)


# ---------------------------------------------------------------------------
# Process-wide configuration
# ---------------------------------------------------------------------------


def get_level():
    return get_config().get_level()


def set_level(level) -> bool:
    return get_config().set_level(level)


def get_truncation_size() -> int:
    return get_config().get_truncation_size()


def set_truncation_size(size) -> bool:
    return get_config().set_truncation_size(size)


# ---------------------------------------------------------------------------
# Backend pass-throughs
# ---------------------------------------------------------------------------


def trace_console(filter, level: str = "debug"):
    return _root.trace_console(filter, level)


def trace_file(path: str, filter, level: str = "debug"):
    return _root.trace_file(path, filter, level)


def stop_trace(trace):
    return _root.stop_trace(trace)


def clear_all_traces():
    return _root.clear_all_traces()


def status():
    return _root.status()


def get_loglevel(handler: str):
    return _root.get_loglevel(handler)


def set_loglevel(handler: str, ident_or_level, level=None):
    return _root.set_loglevel(handler, ident_or_level, level)


def posix_error(error):
    return _root.posix_error(error)


__all__ = [
    "Logger",
    "Backend",
    "StdlibBackend",
    "TraceFilter",
    "CompileTimeConfig",
    "LEVELS",
    "LEVEL_NAMES",
    "level_to_num",
    "num_to_level",
    "log",
    *SHORTHAND_LEVELS,
    "is_enabled",
    "get_config",
    "reset_config",
    "get_level",
    "set_level",
    "get_truncation_size",
    "set_truncation_size",
    "get_backend",
    "set_backend",
    "trace_console",
    "trace_file",
    "stop_trace",
    "clear_all_traces",
    "status",
    "get_loglevel",
    "set_loglevel",
    "posix_error",
]
__version__ = "0.1.0"
