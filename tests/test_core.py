"""test_core.py - Unit and integration tests for the Logger facade.

Covers:
    - One shorthand method per level except "none"
    - Compile-time gate: gated calls never touch the backend or producers
    - Deferred producers run once when admitted, never when the mask excludes
    - Literal single-argument messages are forwarded with empty args
    - Envelope reports the caller's module, function, line and pid
    - stacklevel shifts the reported call site
    - Truncation size is forwarded as configured
    - Logger without explicit collaborators follows the process defaults
    - Pass-through methods reach the backend untouched
    - End-to-end scenario at configured level "error"
"""

import inspect
import os

import pytest

from lagerlog.config import CompileTimeConfig
from lagerlog.core import SHORTHAND_LEVELS, Logger

from conftest import RecordingBackend


class RaisingProducer:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        raise AssertionError("producer must not run")


class TestShorthands:
    def test_one_method_per_level_except_none(self):
        assert SHORTHAND_LEVELS == (
            "debug",
            "info",
            "notice",
            "warning",
            "error",
            "critical",
            "alert",
            "emergency",
        )
        for name in SHORTHAND_LEVELS:
            assert callable(getattr(Logger, name))
        assert not hasattr(Logger, "none")

    @pytest.mark.parametrize("level", ["notice", "warning", "error", "alert"])
    def test_shorthand_logs_at_its_level(self, backend, stream, level):
        log = Logger(backend, CompileTimeConfig(level="debug", stream=stream))
        getattr(log, level)("hello")
        assert [line["level"] for line in backend.lines] == [level]

    def test_shorthand_metadata(self):
        assert Logger.info.__name__ == "info"
        assert Logger.info.__qualname__ == "Logger.info"


class TestCompileTimeGate:
    def setup_method(self):
        self.backend = RecordingBackend()
        self.log = Logger(self.backend, CompileTimeConfig(level="warning"))

    def test_gated_call_does_nothing(self):
        self.log.info("not today")
        assert self.backend.lines == []
        assert self.backend.mask_queries == 0

    def test_gated_producer_is_never_invoked(self):
        producer = RaisingProducer()
        self.log.debug(producer)
        assert producer.calls == 0

    def test_admitted_call_is_dispatched(self):
        self.log.warning("disk %d%% full", 91)
        assert len(self.backend.lines) == 1
        assert self.backend.lines[0]["fmt"] == "disk %d%% full"
        assert self.backend.lines[0]["args"] == (91,)

    def test_unknown_level_is_dropped(self):
        self.log.log("verbose", "text")
        assert self.backend.lines == []

    def test_is_enabled(self):
        assert self.log.is_enabled("error") is True
        assert self.log.is_enabled("notice") is False


class TestDeferredMessages:
    def setup_method(self):
        self.backend = RecordingBackend()
        self.log = Logger(self.backend, CompileTimeConfig(level="debug"))

    def test_producer_runs_once_when_admitted(self):
        calls = []

        def producer():
            calls.append(1)
            return "expensive %s"

        self.backend.mask = 6
        self.log.info(producer, "value")

        assert calls == [1]
        assert self.backend.lines[0]["fmt"] == "expensive %s"
        assert self.backend.lines[0]["args"] == ("value",)

    def test_runtime_exclusion_skips_producer_and_dispatch(self):
        self.backend.mask = 2  # notice is 5: no bits in common
        producer = RaisingProducer()
        self.log.notice(producer)

        assert producer.calls == 0
        assert self.backend.lines == []

    def test_literal_message_skips_runtime_gate(self):
        self.backend.mask = 0
        self.log.info("always goes through")
        assert self.backend.mask_queries == 0
        assert len(self.backend.lines) == 1

    def test_literal_single_argument_has_empty_args(self):
        self.log.info("100% literal")
        assert self.backend.lines[0]["fmt"] == "100% literal"
        assert self.backend.lines[0]["args"] == ()


class TestEnvelope:
    def setup_method(self):
        self.backend = RecordingBackend()
        self.log = Logger(self.backend, CompileTimeConfig(level="debug", truncation_size=77))

    def test_envelope_describes_the_caller(self):
        line = inspect.currentframe().f_lineno + 1
        self.log.error("boom")

        envelope = self.backend.lines[0]["envelope"]
        assert envelope == {
            "module": __name__,
            "function": "test_envelope_describes_the_caller",
            "line": line,
            "pid": os.getpid(),
        }

    def test_log_method_reports_the_caller(self):
        line = inspect.currentframe().f_lineno + 1
        self.log.log("info", "via log()")

        envelope = self.backend.lines[0]["envelope"]
        assert envelope["function"] == "test_log_method_reports_the_caller"
        assert envelope["line"] == line

    def test_stacklevel_reports_the_wrappers_caller(self):
        def wrapper(msg):
            self.log.warning(msg, stacklevel=2)

        line = inspect.currentframe().f_lineno + 1
        wrapper("wrapped")

        envelope = self.backend.lines[0]["envelope"]
        assert envelope["function"] == "test_stacklevel_reports_the_wrappers_caller"
        assert envelope["line"] == line

    def test_truncation_size_is_forwarded(self):
        self.log.info("x")
        assert self.backend.lines[0]["truncation_size"] == 77

    def test_truncation_size_follows_config_changes(self):
        self.log.config.set_truncation_size(-5)
        self.log.info("x")
        assert self.backend.lines[0]["truncation_size"] == -5


class TestDefaults:
    def test_logger_follows_process_defaults(self, defaults):
        backend, config = defaults
        log = Logger()
        assert log.backend is backend
        assert log.config is config

        config.set_level("error")
        log.warning("gated")
        log.error("admitted")
        assert [line["fmt"] for line in backend.lines] == ["admitted"]


class TestPassThrough:
    def test_pass_throughs_reach_backend(self):
        calls = []

        class AdminBackend(RecordingBackend):
            def trace_console(self, filter, level="debug"):
                calls.append(("trace_console", filter, level))
                return "t1"

            def trace_file(self, path, filter, level="debug"):
                calls.append(("trace_file", path, filter, level))
                return "t2"

            def stop_trace(self, trace):
                calls.append(("stop_trace", trace))
                return True

            def clear_all_traces(self):
                calls.append(("clear_all_traces",))

            def status(self):
                return "all good"

            def get_loglevel(self, handler):
                return "info"

            def set_loglevel(self, handler, ident_or_level, level=None):
                calls.append(("set_loglevel", handler, ident_or_level, level))

        log = Logger(AdminBackend(), CompileTimeConfig())
        assert log.trace_console({"module": "a"}) == "t1"
        assert log.trace_file("/tmp/x.log", {}, "error") == "t2"
        assert log.stop_trace("t1") is True
        log.clear_all_traces()
        assert log.status() == "all good"
        assert log.get_loglevel("console") == "info"
        log.set_loglevel("console", "warning")
        log.set_loglevel("file", "/tmp/x.log", "error")

        assert calls == [
            ("trace_console", {"module": "a"}, "debug"),
            ("trace_file", "/tmp/x.log", {}, "error"),
            ("stop_trace", "t1"),
            ("clear_all_traces",),
            ("set_loglevel", "console", "warning", None),
            ("set_loglevel", "file", "/tmp/x.log", "error"),
        ]

    def test_posix_error(self, backend):
        log = Logger(backend, CompileTimeConfig())
        assert log.posix_error(2) == os.strerror(2)
        assert log.posix_error("enoent") == os.strerror(2)
        assert log.posix_error("not_an_errno") == "not_an_errno"

    @pytest.mark.parametrize(
        "call",
        [
            lambda log: log.trace_console({}),
            lambda log: log.trace_file("/tmp/x.log", {}),
            lambda log: log.stop_trace(object()),
            lambda log: log.clear_all_traces(),
            lambda log: log.status(),
            lambda log: log.get_loglevel("console"),
            lambda log: log.set_loglevel("console", "info"),
        ],
    )
    def test_unsupported_admin_call_raises(self, backend, call):
        """Every administrative call a backend does not override raises."""
        log = Logger(backend, CompileTimeConfig())
        with pytest.raises(NotImplementedError):
            call(log)


# ---------------------------------------------------------------------------
# Integration — configured level "error"
# ---------------------------------------------------------------------------


class TestIntegrationErrorThreshold:
    def test_debug_gated_and_critical_dispatched(self):
        backend = RecordingBackend(mask=2)
        log = Logger(backend, CompileTimeConfig(level="error"))

        debug_producer = RaisingProducer()
        log.debug(debug_producer)
        assert backend.lines == []
        assert debug_producer.calls == 0

        produced = []

        def critical_producer():
            produced.append(1)
            return "reactor temperature critical"

        line = inspect.currentframe().f_lineno + 1
        log.critical(critical_producer)

        assert produced == [1]
        assert backend.lines == [
            {
                "level": "critical",
                "envelope": {
                    "module": __name__,
                    "function": "test_debug_gated_and_critical_dispatched",
                    "line": line,
                    "pid": os.getpid(),
                },
                "fmt": "reactor temperature critical",
                "args": (),
                "truncation_size": 4096,
            }
        ]
