"""Tests for log level selection."""

from posteditor.utils.logging import resolve_log_level


class TestResolveLogLevel:

    def test_defaults_to_info(self):
        assert resolve_log_level(environ={}) == "INFO"

    def test_environment_level_used(self):
        assert resolve_log_level(environ={"POSTEDIT_LOG_LEVEL": "warning"}) == "WARNING"

    def test_unknown_level_falls_back_to_info(self):
        assert resolve_log_level(environ={"POSTEDIT_LOG_LEVEL": "chatty"}) == "INFO"

    def test_verbose_overrides_environment(self):
        assert resolve_log_level(verbose=True, environ={"POSTEDIT_LOG_LEVEL": "ERROR"}) == "DEBUG"
