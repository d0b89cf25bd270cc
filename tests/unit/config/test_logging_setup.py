"""Tests for logging configuration."""
from __future__ import annotations

import logging
from pathlib import Path


class TestConfigureLogging:
    def test_writes_to_log_file(self, tmp_path: Path) -> None:
        """Records reach the configured log file."""
        from depvendor.core.stdlib_logging import configure_logging

        log_file = tmp_path / "logs" / "depvendor.log"
        configure_logging(level="INFO", log_path=log_file)

        logging.getLogger("depvendor.test").info("hello from test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello from test" in log_file.read_text(encoding="utf-8")

    def test_idempotent_for_same_target(self, tmp_path: Path) -> None:
        """Configuring the same log file twice installs one handler."""
        from depvendor.core.stdlib_logging import configure_logging

        root = logging.getLogger()
        before = len(root.handlers)
        configure_logging(level="WARNING")
        configure_logging(level="DEBUG")

        assert len(root.handlers) == before + 1
        assert root.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        """An unknown level name configures INFO."""
        from depvendor.core.stdlib_logging import configure_logging

        configure_logging(level="chatty")

        assert logging.getLogger().level == logging.INFO
