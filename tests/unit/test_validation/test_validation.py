"""
Unit tests for the shared validators and error handlers.
"""

import logging
from datetime import timedelta

import pytest

from memstatsd.validation import (
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    validate_boolean,
    validate_hostname,
    validate_interval,
    validate_metric_prefix,
    validate_port,
    validate_positive_float,
    validate_positive_integer,
)


@pytest.mark.unit
class TestNumericValidators:

    def test_positive_integer_accepts_numeric_strings(self):
        assert validate_positive_integer("42") == 42

    def test_positive_integer_rejects_bool(self):
        with pytest.raises(ValidationError):
            validate_positive_integer(True)

    def test_positive_integer_bounds(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_positive_integer(0, field_name="size")
        assert exc_info.value.field_name == "size"
        assert exc_info.value.value == 0

        with pytest.raises(ValidationError):
            validate_positive_integer(11, max_value=10)

    def test_positive_float(self):
        assert validate_positive_float("2.5") == 2.5
        with pytest.raises(ValidationError):
            validate_positive_float(-0.1)
        with pytest.raises(ValidationError):
            validate_positive_float("fast")

    @pytest.mark.parametrize("port", [1, 8125, 65535])
    def test_valid_ports(self, port):
        assert validate_port(port) == port

    @pytest.mark.parametrize("port", [0, 65536, "udp"])
    def test_invalid_ports(self, port):
        with pytest.raises(ValidationError):
            validate_port(port)


@pytest.mark.unit
class TestIntervalValidation:

    def test_seconds_and_timedelta(self):
        assert validate_interval(10) == 10.0
        assert validate_interval(timedelta(milliseconds=250)) == 0.25

    @pytest.mark.parametrize("interval", [0, 0.0, timedelta(0), timedelta(seconds=-1)])
    def test_non_positive_interval_rejected(self, interval):
        with pytest.raises(ValidationError):
            validate_interval(interval)


@pytest.mark.unit
class TestStringValidators:

    def test_boolean_requires_real_bool(self):
        assert validate_boolean(False) is False
        with pytest.raises(ValidationError):
            validate_boolean("true")

    def test_hostname_is_stripped(self):
        assert validate_hostname("  statsd.local ") == "statsd.local"
        with pytest.raises(ValidationError):
            validate_hostname("   ")

    @pytest.mark.parametrize("prefix", ["", "app.", "my-service.web_1."])
    def test_valid_prefixes(self, prefix):
        assert validate_metric_prefix(prefix) == prefix

    @pytest.mark.parametrize("prefix", ["app:", "a|b", "rate@", "has space", 5])
    def test_invalid_prefixes(self, prefix):
        with pytest.raises(ValidationError):
            validate_metric_prefix(prefix)


@pytest.mark.unit
class TestErrorHandlers:

    def test_handle_error_reraises_by_default(self):
        with pytest.raises(ValueError):
            handle_error(ValueError("boom"), "testing")

    def test_expected_error_logged_without_traceback(self, caplog):
        with caplog.at_level(logging.ERROR):
            handle_error(ValueError("boom"), "testing", reraise=False)

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.getMessage() == "Error in testing: boom"
        assert record.exc_info is None

    def test_unexpected_error_logged_critical_with_traceback(self, caplog):
        with caplog.at_level(logging.ERROR):
            handle_error(RuntimeError("x"), "ctx", include_traceback=True, reraise=False)

        record = caplog.records[-1]
        assert record.levelno == logging.CRITICAL
        assert record.exc_info is not None

    def test_handle_config_error_always_reraises(self, caplog):
        error = ValidationError("bad interval", field_name="agent.interval_seconds")
        with pytest.raises(ValidationError) as exc_info:
            handle_config_error(error, "validating configuration")

        assert exc_info.value is error
        assert "Error in config validating configuration: bad interval" in caplog.text

    def test_handle_cli_error_exits(self, caplog):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ValidationError("bad"), "configuration loading", exit_code=3)
        assert exc_info.value.code == 3
        assert "CLI configuration loading" in caplog.text
