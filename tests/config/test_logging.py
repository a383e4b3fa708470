"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from mosaicpods.config.logging import configure_logging, package_level


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pods = logging.getLogger("mosaicpods")
    pods_level = pods.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pods.setLevel(pods_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("mosaicpods").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("mosaicpods").level == logging.WARNING

    def test_quiet_raises_package_level(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("mosaicpods").level == logging.ERROR

    @pytest.mark.parametrize(
        ("verbose", "quiet", "expected"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.DEBUG),
        ],
    )
    def test_package_level(self, verbose: bool, quiet: bool, expected: int) -> None:
        assert package_level(verbose=verbose, quiet=quiet) == expected

    def test_single_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("mosaicpods.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"

    def test_stdlib_records_are_rendered(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("mosaicpods.infrastructure.registry").warning("Pod problem: %s", "x")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Pod problem: x"
        assert parsed["logger"] == "mosaicpods.infrastructure.registry"
