"""config.py - Process-wide minimum level and truncation size.

CompileTimeConfig holds the two settings every log call reads: the minimum
level a call must reach to be considered at all, and the truncation size
forwarded to the backend. Reads happen on the hot path of every log call and
are plain attribute reads; writes are rare and serialized by a lock.

Configuration errors never raise. They are written as one line to the
config's stream (default: stderr) and the setter returns False, leaving the
previous value in place. Integer levels are a legacy form: they are still
accepted but produce a deprecation advisory on the same stream.

Typical usage::

    from lagerlog import config

    cfg = config.get_config()
    cfg.set_level("warning")      # True
    cfg.set_level("verbose")      # False, prints "ERROR: unknown level 'verbose'"
    cfg.set_truncation_size(512)  # True
"""

import os
import sys
import threading
from typing import Optional

from .levels import LEVEL_NAMES, num_to_level

DEFAULT_LEVEL = "info"
DEFAULT_TRUNCATION_SIZE = 4096

LEVEL_ENV_VAR = "LAGERLOG_LEVEL"
TRUNCATION_SIZE_ENV_VAR = "LAGERLOG_TRUNCATION_SIZE"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class CompileTimeConfig:
    """Minimum log level and truncation size shared by all call sites.

    Attributes:
        _level: The stored level. Normally one of the level names; may be a
            legacy integer when it came from the environment or the
            constructor, in which case ``get_level()`` translates it.
        _truncation_size (int): Forwarded verbatim to the backend.
        _stream: Writable file-like object for advisories and errors.
        _lock (threading.Lock): Serializes writers.

    Example:
        >>> cfg = CompileTimeConfig()
        >>> cfg.get_level()
        'info'
        >>> cfg.set_level("error")
        True
        >>> cfg.get_level()
        'error'
    """

    def __init__(
        self,
        level=DEFAULT_LEVEL,
        truncation_size: int = DEFAULT_TRUNCATION_SIZE,
        stream=None,
    ) -> None:
        """Create a config with the given initial values.

        Args:
            level: Level name, or a legacy integer in [-1, 7]. Integers are
                stored as given and translated on every read.
            truncation_size: Initial truncation size, any integer.
            stream: Destination for advisories and error lines. Defaults to
                ``sys.stderr`` resolved at write time.

        Raises:
            ValueError: If ``level`` or ``truncation_size`` is invalid.
        """
        if level not in LEVEL_NAMES and num_to_level(level) is None:
            raise ValueError(f"unknown level {level!r}")
        if not _is_int(truncation_size):
            raise ValueError(
                f"truncation_size must be an integer, got {truncation_size!r}"
            )
        self._level = level
        self._truncation_size = truncation_size
        self._stream = stream
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls, environ=None, stream=None) -> "CompileTimeConfig":
        """Build a config from ``LAGERLOG_LEVEL`` and ``LAGERLOG_TRUNCATION_SIZE``.

        A numeric ``LAGERLOG_LEVEL`` is kept as a legacy integer, so reading
        it back prints the deprecation advisory. Values that cannot be used
        are reported on ``stream`` and the default is kept.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.
            stream: Passed through to the new config.
        """
        if environ is None:
            environ = os.environ
        config = cls(stream=stream)

        raw_level = environ.get(LEVEL_ENV_VAR)
        if raw_level:
            raw_level = raw_level.strip()
            try:
                level = int(raw_level)
            except ValueError:
                level = raw_level
            if level in LEVEL_NAMES or num_to_level(level) is not None:
                config._level = level
            else:
                config._report(f"ERROR: unknown level {raw_level!r} in {LEVEL_ENV_VAR}")

        raw_size = environ.get(TRUNCATION_SIZE_ENV_VAR)
        if raw_size:
            try:
                config._truncation_size = int(raw_size.strip())
            except ValueError:
                config._report(
                    f"ERROR: invalid truncation size {raw_size!r} "
                    f"in {TRUNCATION_SIZE_ENV_VAR}"
                )
        return config

    # ---------------------------------------------------------------------- #
    # Level
    # ---------------------------------------------------------------------- #

    def get_level(self) -> Optional[str]:
        """Return the configured minimum level name.

        A legacy integer is translated to its name and the deprecation
        advisory is written on every such read.
        """
        level = self._level
        if _is_int(level):
            level = num_to_level(level)
            self._report(f'Using integers is deprecated, please use "{level}" instead')
        return level

    def set_level(self, level) -> bool:
        """Set the minimum level.

        Args:
            level: One of the level names, or an integer in [-1, 7]. Integers
                are translated to names before they are stored and produce
                the deprecation advisory.

        Returns:
            True if the level was stored, False if it was rejected (an error
            line is written and the previous level is kept).
        """
        if _is_int(level):
            name = num_to_level(level)
            if name is not None:
                self._report(f'Using integers is deprecated, please use "{name}" instead')
                level = name
        if not isinstance(level, str) or level not in LEVEL_NAMES:
            self._report(f"ERROR: unknown level {level!r}")
            return False
        with self._lock:
            self._level = level
        return True

    # ---------------------------------------------------------------------- #
    # Truncation size
    # ---------------------------------------------------------------------- #

    def get_truncation_size(self) -> int:
        """Return the truncation size forwarded to the backend."""
        return self._truncation_size

    def set_truncation_size(self, size) -> bool:
        """Store ``size`` verbatim. Zero and negative values are accepted.

        Returns:
            True on success, False if ``size`` is not an integer.
        """
        if not _is_int(size):
            self._report(f"ERROR: invalid truncation size {size!r}")
            return False
        with self._lock:
            self._truncation_size = size
        return True

    def _report(self, line: str) -> None:
        print(line, file=self._stream or sys.stderr)


# ---------------------------------------------------------------------------
# Process-wide default instance, created from the environment on first use.
# ---------------------------------------------------------------------------
_default_config: Optional[CompileTimeConfig] = None
_default_lock = threading.Lock()


def get_config() -> CompileTimeConfig:
    """Return the process-wide config, building it from the environment once."""
    global _default_config
    config = _default_config
    if config is None:
        with _default_lock:
            if _default_config is None:
                _default_config = CompileTimeConfig.from_env()
            config = _default_config
    return config


def reset_config(config: Optional[CompileTimeConfig] = None) -> None:
    """Replace the process-wide config.

    Passing None discards the current instance so the next ``get_config()``
    rebuilds it from the environment.
    """
    global _default_config
    with _default_lock:
        _default_config = config
