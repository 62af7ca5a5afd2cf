"""
Tests for ErrorHandler core functionality.

Tests cover:
- Singleton pattern behavior
- Exception capture and normalization
- Context sanitization
- Signal emission and log levels
"""

import logging
from unittest.mock import patch

import pytest

from commission.error_handler import LOGGER_NAME, ErrorHandler, get_error_handler, init_logging
from commission.errors import BaseAppError, ConfigError, ErrorCode, ErrorType, ValidationError


class TestErrorHandlerSingleton:
    """Test the singleton pattern implementation."""

    def test_singleton_pattern(self):
        handler1 = ErrorHandler()
        handler2 = ErrorHandler()

        assert handler1 is handler2

    def test_get_error_handler_returns_singleton(self):
        assert get_error_handler() is ErrorHandler()

    def test_initialization_only_once(self):
        """Initialization only happens once despite multiple instantiations."""
        previous = ErrorHandler._instance
        ErrorHandler._instance = None

        try:
            with patch.object(ErrorHandler, "_setup_logging") as mock_setup:
                handler1 = ErrorHandler()
                handler2 = ErrorHandler()

                assert mock_setup.call_count == 1
                assert handler1 is handler2
        finally:
            ErrorHandler._instance = previous


class TestErrorCapture:
    """Test exception capture and normalization."""

    def setup_method(self):
        self.handler = ErrorHandler()

    def test_capture_basic_exception(self):
        app_error = self.handler.capture(ValueError("Test error"))

        assert isinstance(app_error, BaseAppError)
        assert app_error.type == ErrorType.VALIDATION
        assert app_error.code == ErrorCode.INVALID_INPUT
        assert app_error.user_message == "Test error"
        assert "ValueError: Test error" in app_error.technical_message
        assert "traceback" in app_error.context

    def test_capture_already_app_error(self):
        original_error = ConfigError(code=ErrorCode.CONFIG_INVALID, user_message="Bad config")

        app_error = self.handler.capture(original_error)

        assert app_error is original_error
        assert app_error.technical_message == "ConfigError: Bad config"

    def test_capture_with_sanitized_context(self):
        context = {
            "password": "secret123",
            "api_key": "key123",
            "token": "token123",
            "safe_data": "this is safe",
            "count": 3,
            "long_text": "x" * 300,
        }

        app_error = self.handler.capture(ValueError("Test error"), context)

        assert app_error.context["password"] == "[REDACTED]"
        assert app_error.context["api_key"] == "[REDACTED]"
        assert app_error.context["token"] == "[REDACTED]"
        assert app_error.context["safe_data"] == "this is safe"
        assert app_error.context["count"] == "3"
        assert app_error.context["long_text"] == "x" * 200 + "..."

    def test_context_is_truncated(self):
        context = {f"item{i}": i for i in range(25)}

        app_error = self.handler.capture(ValueError("Test error"), context)

        assert "item19" in app_error.context
        assert "item20" not in app_error.context
        assert app_error.context["..."] == "(5 more items truncated)"


class TestErrorHandling:
    """Test handle() logging and signal emission."""

    def setup_method(self):
        self.handler = ErrorHandler()

    def test_handle_emits_signal(self):
        received = []

        def on_error(error):
            received.append(error)

        self.handler.errorOccurred.connect(on_error)
        try:
            app_error = self.handler.handle(TimeoutError("too slow"))
        finally:
            self.handler.errorOccurred.disconnect(on_error)

        assert received == [app_error]
        assert app_error.code == ErrorCode.TIMEOUT

    def test_validation_errors_log_at_info(self):
        error = ValidationError(code=ErrorCode.REQUIRED_FIELD_MISSING, user_message="Please enter Locks", field="locks")

        with patch.object(ErrorHandler._logger, "log") as mock_log:
            self.handler.handle(error)

        assert mock_log.call_args[0][0] == logging.INFO
        assert mock_log.call_args[0][1] == "[REQUIRED_FIELD_MISSING] Please enter Locks"

    def test_system_errors_log_at_error(self):
        with patch.object(ErrorHandler._logger, "log") as mock_log:
            self.handler.handle(OSError("disk"))

        assert mock_log.call_args[0][0] == logging.ERROR
        assert mock_log.call_args[1]["extra"]["app_code"] == "OS_ERROR"

    def test_keyboard_interrupt_is_reraised(self):
        with pytest.raises(KeyboardInterrupt):
            self.handler.handle(KeyboardInterrupt())  # type: ignore[arg-type]

    def test_to_user_message_retriable_hint(self):
        app_error = self.handler.capture(ConfigError(code=ErrorCode.CONFIG_INVALID, user_message="Bad config"))
        assert self.handler.to_user_message(app_error) == "Bad config"

        app_error.retriable = True
        assert self.handler.to_user_message(app_error) == "Bad config You can try again."


class TestLoggingSetup:
    """Test logger configuration."""

    def test_error_logger_does_not_propagate(self):
        ErrorHandler()
        logger = logging.getLogger(LOGGER_NAME)

        assert logger.propagate is False
        assert logger.handlers

    def test_init_logging_uses_level(self):
        with patch("commission.error_handler.logging.basicConfig") as mock_basic:
            init_logging("debug")

        assert mock_basic.call_args[1]["level"] == logging.DEBUG


class TestExceptionHooks:
    """Test installing and restoring exception hooks."""

    def test_install_and_restore(self):
        import sys
        import threading

        handler = ErrorHandler()
        original_hook = sys.excepthook
        original_threading_hook = threading.excepthook

        handler.install_hooks()
        try:
            assert sys.excepthook is not original_hook
            assert threading.excepthook is not original_threading_hook
        finally:
            handler.restore_hooks()

        assert sys.excepthook is handler._original_excepthook
