"""levels.py - Level registry for lagerlog.

Levels follow syslog severity: the lower the number, the more severe the
level. ``none`` (-1) is a sentinel meaning "log nothing" when used as the
configured minimum level.

The name/number mapping is closed. Anything outside the nine entries below
translates to ``None``; callers decide what an unknown level means (the gates
treat it as "do not log", the config setter reports an error).
"""

import logging
from typing import Optional

LEVELS = (
    ("debug", 7),
    ("info", 6),
    ("notice", 5),
    ("warning", 4),
    ("error", 3),
    ("critical", 2),
    ("alert", 1),
    ("emergency", 0),
    ("none", -1),
)

LEVEL_NAMES = tuple(name for name, _ in LEVELS)

_NAME_TO_NUM = dict(LEVELS)
_NUM_TO_NAME = {num: name for name, num in LEVELS}

# Numeric levels understood by the standard ``logging`` package. NOTICE, ALERT
# and EMERGENCY have no stdlib counterpart and are registered below.
NOTICE = 25
ALERT = 60
EMERGENCY = 70

_STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": NOTICE,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": ALERT,
    "emergency": EMERGENCY,
}

logging.addLevelName(NOTICE, "NOTICE")
logging.addLevelName(ALERT, "ALERT")
logging.addLevelName(EMERGENCY, "EMERGENCY")


def level_to_num(name) -> Optional[int]:
    """Return the severity number for ``name``, or None if it is not a level.

    Example:
        >>> level_to_num("warning")
        4
        >>> level_to_num("verbose") is None
        True
    """
    if not isinstance(name, str):
        return None
    return _NAME_TO_NUM.get(name)


def num_to_level(num) -> Optional[str]:
    """Return the level name for severity ``num``, or None if out of range.

    ``bool`` is rejected even though it is an ``int`` subclass.

    Example:
        >>> num_to_level(6)
        'info'
        >>> num_to_level(8) is None
        True
    """
    if isinstance(num, bool) or not isinstance(num, int):
        return None
    return _NUM_TO_NAME.get(num)


def to_stdlib_level(name) -> Optional[int]:
    """Map a level name to the matching ``logging`` level number.

    ``none`` has no stdlib equivalent and maps to None, as do unknown names.
    """
    if not isinstance(name, str):
        return None
    return _STDLIB_LEVELS.get(name)


def from_stdlib_level(levelno: int) -> str:
    """Return the most verbose level name admitted by a stdlib threshold.

    Used to report handler levels back in lagerlog terms: a handler at
    ``logging.INFO`` reports ``"info"``, one at 35 reports ``"error"``.
    ``logging.NOTSET`` reports ``"debug"``, anything above EMERGENCY ``"none"``.
    """
    for name, _ in LEVELS:
        stdlib = _STDLIB_LEVELS.get(name)
        if stdlib is not None and stdlib >= levelno:
            return name
    return "none"
