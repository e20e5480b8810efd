"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from kglcore.config.logging import configure_logging
from kglcore.services.gateway import ValidationGateway


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    kgl = logging.getLogger("kglcore")
    kgl_level = kgl.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    kgl.setLevel(kgl_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("kglcore").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("kglcore").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("kglcore.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "kglcore.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("kglcore.plugins.manager").debug("Registered plugin: probe")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Registered plugin: probe"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "kglcore.plugins.manager"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pluggy").debug("hook noise")
        assert capfd.readouterr().err == ""

    def test_warn_mode_lines_rendered(
        self, gateway: ValidationGateway, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=False, log_json=True)
        gateway.configure(strictness="warn")
        gateway.validate_checkpoint("map", [{"handle": "client"}], [])
        lines = [json.loads(line) for line in capfd.readouterr().err.strip().splitlines()]
        events = [line["event"] for line in lines]
        assert events[0] == "map stage: 1 errors, 0 warnings"
        assert events[1] == '[R06] Module "client" is not a canonical KGL handle'
        assert all(line["logger"] == "kglcore.services.gateway" for line in lines)

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
