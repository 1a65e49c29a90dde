"""examples/multithreaded_usage.py - Shared level, many threads.

The minimum level is process-wide: raising it from one thread gates every
other thread's calls from that point on. Each line still reports its own
call site and process id.

Run:
    python examples/multithreaded_usage.py
"""

import logging
import threading
import time

import lagerlog

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] [thread=%(threadName)s] %(funcName)s: %(message)s",
)


def worker(worker_id: int) -> None:
    for step in range(3):
        lagerlog.info("worker %d step %d", worker_id, step)
        time.sleep(0.01)
    lagerlog.warning("worker %d done", worker_id)


def main() -> None:
    threads = [
        threading.Thread(target=worker, args=(i,), name=f"Worker-{i}") for i in range(3)
    ]
    for t in threads:
        t.start()

    # Only warnings and above from here on, in every thread.
    time.sleep(0.015)
    lagerlog.set_level("warning")

    for t in threads:
        t.join()


if __name__ == "__main__":
    main()
