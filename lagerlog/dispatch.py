"""dispatch.py - Hand-off of an admitted log line to the backend."""

from .callsite import CallSite


def build_envelope(call_site: CallSite) -> dict:
    """Return the metadata envelope attached to every dispatched line."""
    return {
        "module": call_site.module,
        "function": call_site.function,
        "line": call_site.line,
        "pid": call_site.pid,
    }


def dispatch(backend, level, call_site: CallSite, fmt, args, truncation_size) -> None:
    """Forward one resolved log line to ``backend.dispatch_log``.

    Fire-and-forget: the backend's return value is ignored and its exceptions
    propagate unchanged.

    Args:
        backend: The Backend receiving the line.
        level: Level name of the call.
        call_site: Where the call came from.
        fmt: The resolved format string.
        args: Positional format arguments (a tuple, possibly empty).
        truncation_size: Current truncation size, passed through opaquely.
    """
    backend.dispatch_log(level, build_envelope(call_site), fmt, args, truncation_size)
