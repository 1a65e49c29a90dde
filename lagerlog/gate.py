"""gate.py - The two level checks a log call has to pass.

Compile-time gate:
    Compares the call's severity number with the configured minimum. It runs
    before any message text exists, so a call that fails it costs one dict
    lookup and nothing else.

Runtime gate:
    Consulted only for deferred (callable) messages. It ANDs the call's
    severity number with the live mask reported by the backend, treating
    level numbers as flags rather than ranks. The mask belongs to the backend,
    which may enable and disable levels independently of each other.
"""

from .levels import level_to_num


def should_log_compile_time(level, config) -> bool:
    """Return True if ``level`` is at least as severe as the configured level.

    An unknown call level, or an unknown configured level, never logs.

    Args:
        level: Level name of the call site.
        config: A CompileTimeConfig (or anything with ``get_level()``).

    Example:
        >>> from lagerlog.config import CompileTimeConfig
        >>> cfg = CompileTimeConfig(level="warning")
        >>> should_log_compile_time("error", cfg)
        True
        >>> should_log_compile_time("info", cfg)
        False
    """
    num = level_to_num(level)
    if num is None:
        return False
    threshold = level_to_num(config.get_level())
    if threshold is None:
        return False
    return num <= threshold


def should_log_runtime(level, backend) -> bool:
    """Return True if the backend's live mask has the call level's bits set.

    Queries ``backend.get_runtime_mask()`` once per call.
    """
    num = level_to_num(level)
    if num is None:
        return False
    return (num & backend.get_runtime_mask()) > 0
