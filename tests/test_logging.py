"""Tests for logging setup."""

import sys
import os
import io
import logging

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexcrawl.systems.generator import generate_map
from hexcrawl.utils.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("hexcrawl.systems.collapse", "hexcrawl.systems.carver"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestSetupLogging:
    def test_summary_line(self):
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)
        generate_map(seed=0xDEADBEEF)
        text = stream.getvalue()
        assert "[INFO ] hexcrawl.systems.generator" in text
        assert "seed=0xdeadbeef" in text

    def test_step_lines_hidden_without_trace(self):
        stream = io.StringIO()
        setup_logging("DEBUG", stream=stream)
        generate_map(seed=1)
        text = stream.getvalue()
        assert "hexcrawl.systems.collapse" not in text
        assert "grid built" in text

    def test_step_trace(self):
        stream = io.StringIO()
        setup_logging("DEBUG", stream=stream, step_trace=True)
        generate_map(seed=1)
        text = stream.getvalue()
        assert "hexcrawl.systems.collapse" in text
        assert "hexcrawl.systems.carver" in text

    def test_single_handler(self):
        setup_logging("INFO")
        setup_logging("WARNING")
        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger().level == logging.WARNING
