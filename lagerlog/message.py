"""message.py - Resolution of deferred log messages.

A message is either a format string or a zero-argument callable producing
one. The callable form exists so that expensive messages are only built when
someone is going to read them::

    log.debug(lambda: f"cache state: {cache.dump()}")

The producer runs at most once per call, and only when the backend's runtime
mask admits the level. Exceptions it raises propagate to the caller.
"""

from .gate import should_log_runtime


def is_deferred(message) -> bool:
    """Return True if ``message`` is a producer rather than literal text."""
    return callable(message) and not isinstance(message, (str, bytes))


def resolve(message, level, backend):
    """Return the literal form of ``message``.

    Literal messages are returned unchanged. A deferred producer is invoked
    only if ``should_log_runtime(level, backend)`` passes; otherwise the
    empty string is returned and the producer is never called.

    Example:
        >>> resolve("plain text", "info", backend=None)
        'plain text'
    """
    if not is_deferred(message):
        return message
    if should_log_runtime(level, backend):
        return message()
    return ""
