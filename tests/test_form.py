# ABOUTME: Unit tests for form wiring and submission payloads
import logging
import tempfile
from pathlib import Path

import pytest

from keystroke_timing.events import TimingSummary
from keystroke_timing.form import (
    LoginForm,
    attach_on_init,
    extra_word_page,
    login_page,
    populate_submission,
)
from keystroke_timing.logger import KeystrokeLogger
from keystroke_timing.surface import TextInput
from keystroke_timing.utils import ConfigManager


class TestAttachOnInit:
    """Test the page bootstrap hook."""

    def test_attaches_to_named_input(self):
        form = LoginForm("kc-form-login", [TextInput("username"), TextInput("password")])
        logger = attach_on_init(form, "password")

        assert isinstance(logger, KeystrokeLogger)
        assert logger.surface is form.query("password")

    def test_missing_input_returns_none(self, caplog):
        form = LoginForm("kc-form-extra-word", [])
        with caplog.at_level(logging.WARNING):
            logger = attach_on_init(form, "extraWord")

        assert logger is None
        assert "extraWord" in caplog.text


class TestSubmission:
    """Test populating the hidden keystroke field."""

    def test_login_submission_carries_timing(self):
        form, logger = login_page()
        form.query("username").set_value("alice", 0.0)
        form.query("password").type_text("pw", start=1000.0, interval=100.0, dwell=50.0)

        fields = populate_submission(form, logger)

        assert form.submitted
        assert fields["username"] == "alice"
        assert fields["password"] == "pw"
        summary = TimingSummary.from_json(fields["keystrokeData"])
        assert summary == logger.get_summary()
        assert summary.total_time == 150.0

    def test_username_typing_is_not_captured(self):
        form, logger = login_page()
        form.query("username").type_text("alice")

        fields = populate_submission(form, logger)
        assert TimingSummary.from_json(fields["keystrokeData"]).events == ()

    def test_submission_overwrites_previous_payload(self):
        form, logger = login_page()
        password = form.query("password")
        password.type_text("wrong")
        populate_submission(form, logger)

        password.set_value("", 5000.0)
        password.type_text("right", start=8000.0)
        fields = populate_submission(form, logger)

        summary = TimingSummary.from_json(fields["keystrokeData"])
        assert len(summary.of_type("down")) == 5
        assert summary.events[0].timestamp == 0.0

    def test_missing_logger_does_not_block(self, caplog):
        form = LoginForm("kc-form-login", [TextInput("password", value="pw")])
        with caplog.at_level(logging.WARNING):
            fields = populate_submission(form, None)

        assert form.submitted
        assert fields == {"password": "pw"}
        assert "without timing data" in caplog.text

    def test_extra_word_page(self):
        form, logger = extra_word_page()
        form.query("extraWord").type_text("lantern")

        fields = populate_submission(form, logger)
        summary = TimingSummary.from_json(fields["keystrokeData"])
        assert len(summary.of_type("insert")) == 7

    def test_configured_field_names(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("""
form:
  password_field: pass
  data_field: timing
            """)
            config_path = f.name

        try:
            config = ConfigManager(config_path)
            form, logger = login_page(config)
            form.query("pass").type_text("x")

            fields = populate_submission(form, logger, config)
            assert "timing" in fields
            assert "keystrokeData" not in fields
        finally:
            Path(config_path).unlink()


class TestPageBuilders:
    """Test the page builder signatures and package exports."""

    def test_return_annotations(self):
        import typing

        expected = typing.Tuple[LoginForm, typing.Optional[KeystrokeLogger]]
        assert typing.get_type_hints(login_page)["return"] == expected
        assert typing.get_type_hints(extra_word_page)["return"] == expected

    def test_exported_from_package(self):
        import keystroke_timing

        assert keystroke_timing.login_page is login_page
        assert keystroke_timing.extra_word_page is extra_word_page
