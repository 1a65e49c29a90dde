"""callsite.py - Capture of the code location that issued a log call.

Only admitted calls pay for the frame walk: the facade captures the call site
after the compile-time gate has passed.
"""

import inspect
import os


class CallSite:
    """Where a log call came from.

    Attributes:
        module (str): ``__name__`` of the calling module.
        function (str): Name of the enclosing function (``"<module>"`` at
            module level).
        line (int): Source line number of the call.
        pid (int): Identity of the calling process.
    """

    __slots__ = ("module", "function", "line", "pid")

    def __init__(self, module: str, function: str, line: int, pid: int) -> None:
        self.module = module
        self.function = function
        self.line = line
        self.pid = pid

    def __repr__(self) -> str:  # pragma: no cover
        return f"CallSite({self.module}:{self.function}:{self.line}, pid={self.pid})"


UNKNOWN = "unknown"


def capture_call_site(stacklevel: int = 1) -> CallSite:
    """Describe the frame ``stacklevel`` levels above the caller.

    ``stacklevel=0`` describes the caller itself; ``stacklevel=1`` (the
    default) describes whoever called the caller, which is what a logging
    entry point wants to report.

    If the stack is shallower than requested, module and function are
    reported as ``"unknown"`` and the line as 0.
    """
    frame = inspect.currentframe()
    try:
        # Skip this function's own frame plus ``stacklevel`` callers.
        for _ in range(stacklevel + 1):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return CallSite(UNKNOWN, UNKNOWN, 0, os.getpid())
        return CallSite(
            module=frame.f_globals.get("__name__", UNKNOWN),
            function=frame.f_code.co_name,
            line=frame.f_lineno,
            pid=os.getpid(),
        )
    finally:
        del frame
