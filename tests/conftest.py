"""conftest.py - Shared fixtures: a recording backend and isolated defaults."""

import io

import pytest

import lagerlog
from lagerlog.backend import Backend
from lagerlog.config import CompileTimeConfig


class RecordingBackend(Backend):
    """Backend that stores dispatched lines and serves a fixed runtime mask."""

    def __init__(self, mask: int = 0xFF) -> None:
        self.mask = mask
        self.mask_queries = 0
        self.lines = []

    def dispatch_log(self, level, envelope, fmt, args, truncation_size):
        self.lines.append(
            {
                "level": level,
                "envelope": envelope,
                "fmt": fmt,
                "args": args,
                "truncation_size": truncation_size,
            }
        )

    def get_runtime_mask(self) -> int:
        self.mask_queries += 1
        return self.mask


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def config(stream):
    return CompileTimeConfig(stream=stream)


@pytest.fixture
def defaults(backend, config):
    """Install the recording backend and a fresh config as process defaults."""
    lagerlog.set_backend(backend)
    lagerlog.reset_config(config)
    yield backend, config
    lagerlog.set_backend(None)
    lagerlog.reset_config(None)
