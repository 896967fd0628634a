# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for logging configuration."""

import json
import logging

import pytest

from schoolproject.core.config.settings import DatabaseSettings, Settings
from schoolproject.utils.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_context():
    """Drop bound context between tests."""
    clear_context()
    yield
    clear_context()


def _production_settings(**overrides) -> Settings:
    return Settings(
        environment="production",
        debug=False,
        log_level="INFO",
        database=DatabaseSettings(password="prod-password", **overrides),  # type: ignore[arg-type]
    )


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sets_levels(self) -> None:
        """Test that the app logger follows log_level and noisy loggers are quieted."""
        setup_logging(_production_settings())

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("schoolproject").level == logging.INFO
        assert logging.getLogger("sqlalchemy").level == logging.WARNING

    def test_echo_enables_sql_logging(self) -> None:
        """Test that DB echo raises SQL engine logging to INFO."""
        setup_logging(_production_settings(echo=True))

        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    def test_replaces_root_handler(self) -> None:
        """Test that repeated setup leaves a single root handler."""
        settings = _production_settings()

        setup_logging(settings)
        setup_logging(settings)

        assert len(logging.getLogger().handlers) == 1

    def test_production_renders_json(self, capsys) -> None:
        """Test that stdlib records come out as JSON lines with bound context."""
        setup_logging(_production_settings())
        bind_context(request_id="req-1")

        logging.getLogger("schoolproject.tests").info("Created class: %s", "1A")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "Created class: 1A"
        assert record["request_id"] == "req-1"
        assert record["level"] == "info"

    def test_structlog_logger_shares_handler(self, capsys) -> None:
        """Test that get_logger output goes through the same renderer."""
        setup_logging(_production_settings())

        get_logger("schoolproject.tests").info("Listing classes", total=3)

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "Listing classes"
        assert record["total"] == 3

    def test_clear_context_drops_values(self, capsys) -> None:
        """Test that cleared context no longer appears."""
        setup_logging(_production_settings())
        bind_context(request_id="req-2")
        clear_context()

        logging.getLogger("schoolproject.tests").info("after clear")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert "request_id" not in record
