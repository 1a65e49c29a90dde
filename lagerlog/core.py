"""core.py - The Logger facade: gate, resolve, dispatch.

Every log call runs the same short pipeline:

    1. Compile-time gate: is the call's level at least as severe as the
       configured minimum? If not, return immediately. No frame is
       inspected, no producer runs, the backend is never touched.
    2. Capture the call site (module, function, line, pid).
    3. Resolve the message. A deferred producer runs only if the backend's
       runtime mask admits the level; if it does not, the call ends here.
    4. Dispatch the literal message, its args and the truncation size to
       the backend.

Logger carries one shorthand method per level (``debug`` ... ``emergency``),
generated from the level table when this module is imported.
"""

from typing import Optional

from . import backend as _backend
from . import config as _config
from .callsite import capture_call_site
from .dispatch import dispatch
from .gate import should_log_compile_time
from .levels import LEVELS
from .message import is_deferred, resolve


class Logger:
    """Level-gated front-end to a Backend.

    Both collaborators are optional. When omitted, the process-wide defaults
    (``backend.get_backend()`` and ``config.get_config()``) are looked up on
    every call, so replacing them takes effect immediately.

    Example:
        >>> from lagerlog.config import CompileTimeConfig
        >>> log = Logger(config=CompileTimeConfig(level="warning"))
        >>> log.info("skipped")                       # gated, costs nothing
        >>> log.error("disk %s is full", "/var")      # dispatched
        >>> log.debug(lambda: expensive_dump())       # producer never runs
    """

    def __init__(self, backend=None, config=None) -> None:
        self._backend = backend
        self._config = config

    @property
    def backend(self):
        return self._backend if self._backend is not None else _backend.get_backend()

    @property
    def config(self):
        return self._config if self._config is not None else _config.get_config()

    # ---------------------------------------------------------------------- #
    # Logging
    # ---------------------------------------------------------------------- #

    def is_enabled(self, level) -> bool:
        """Return True if a call at ``level`` passes the compile-time gate."""
        return should_log_compile_time(level, self.config)

    def log(self, level, message, *args, stacklevel: int = 1) -> None:
        """Log ``message`` at ``level``.

        Args:
            level: One of the level names.
            message: A ``%``-style format string, or a zero-argument callable
                returning one.
            *args: Format arguments. Without args the message is literal.
            stacklevel: How many frames above the caller to report as the
                call site, as in ``logging.Logger.log``.
        """
        self._log(level, message, args, stacklevel + 1)

    def _log(self, level, message, args, stacklevel: int) -> None:
        config = self.config
        if not should_log_compile_time(level, config):
            return

        call_site = capture_call_site(stacklevel)
        backend = self.backend
        deferred = is_deferred(message)
        fmt = resolve(message, level, backend)
        if deferred and not fmt:
            return  # runtime mask excludes the level

        dispatch(backend, level, call_site, fmt, args, config.get_truncation_size())

    # ---------------------------------------------------------------------- #
    # Pass-throughs to the backend
    # ---------------------------------------------------------------------- #

    def trace_console(self, filter, level: str = "debug"):
        return self.backend.trace_console(filter, level)

    def trace_file(self, path: str, filter, level: str = "debug"):
        return self.backend.trace_file(path, filter, level)

    def stop_trace(self, trace):
        return self.backend.stop_trace(trace)

    def clear_all_traces(self):
        return self.backend.clear_all_traces()

    def status(self):
        return self.backend.status()

    def get_loglevel(self, handler: str):
        return self.backend.get_loglevel(handler)

    def set_loglevel(self, handler: str, ident_or_level, level: Optional[str] = None):
        return self.backend.set_loglevel(handler, ident_or_level, level)

    def posix_error(self, error):
        return self.backend.posix_error(error)


def _make_shorthand(level: str):
    def shorthand(self, message, *args, stacklevel: int = 1) -> None:
        self._log(level, message, args, stacklevel + 1)

    shorthand.__name__ = level
    shorthand.__qualname__ = f"Logger.{level}"
    shorthand.__doc__ = f"Log ``message`` at level ``{level}``. See ``Logger.log``."
    return shorthand


# "none" is a threshold, not something to log at.
SHORTHAND_LEVELS = tuple(name for name, _ in LEVELS if name != "none")

for _name in SHORTHAND_LEVELS:
    setattr(Logger, _name, _make_shorthand(_name))
del _name
