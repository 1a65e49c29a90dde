"""examples/basic_usage.py - lagerlog integration demo.

Demonstrates:
    Scenario A: level gating, calls below the configured level cost nothing
    Scenario B: lazy messages, producers run only when the backend listens
    Scenario C: a console trace scoped to one function

Run:
    python examples/basic_usage.py
"""

import logging
import sys

import lagerlog

# ---------------------------------------------------------------------------
# Standard logger setup: the default backend hands lines to the "lagerlog"
# logger, so anything configured here applies.
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(module)s.%(funcName)s:%(lineno)d pid=%(process)d %(message)s",
)


def summarize_cart(cart: dict) -> str:
    """Stand-in for an expensive debug dump."""
    print("  (building cart summary...)", file=sys.stderr)
    return ", ".join(f"{sku} x{qty}" for sku, qty in cart.items())


def checkout(user_id: int, cart: dict) -> None:
    lagerlog.info("checkout started: user_id=%d", user_id)
    lagerlog.debug(lambda: f"cart contents: {summarize_cart(cart)}")
    if not cart:
        lagerlog.error("empty cart for user_id=%d", user_id)
        return
    lagerlog.notice("checkout complete: %d item(s)", len(cart))


# ===========================================================================
# Scenario A: default level "info", debug calls are gated
# ===========================================================================
print("=== Scenario A: level 'info' ===", file=sys.stderr)
checkout(1, {"sku-1": 2})

# ===========================================================================
# Scenario B: level "debug", the lazy producer now runs
# ===========================================================================
print("\n=== Scenario B: level 'debug' ===", file=sys.stderr)
lagerlog.set_level("debug")
checkout(2, {"sku-9": 1, "sku-3": 4})

# ===========================================================================
# Scenario C: echo checkout() errors to stderr through a trace
# ===========================================================================
print("\n=== Scenario C: trace ===", file=sys.stderr)
trace = lagerlog.trace_console({"function": "checkout"}, "error")
checkout(3, {})
lagerlog.stop_trace(trace)

print("\n" + lagerlog.status(), file=sys.stderr)
