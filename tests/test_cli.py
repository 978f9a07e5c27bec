"""
Tests for the memstatsd command-line entry point.
"""

from unittest.mock import patch

import pytest

from memstatsd.cli.main import apply_overrides, build_parser, load_app_config, main_cli
from memstatsd.models.config import AppConfig
from memstatsd.reporting.metrics_client import LoggingMetricsClient
from memstatsd.validation import ValidationError


@pytest.mark.unit
class TestArgumentHandling:
    """Test cases for configuration loading and overrides."""

    def test_explicit_config_is_loaded(self, config_files):
        config = load_app_config(config_files["config"])
        assert config.agent.prefix == "app."

    def test_explicit_missing_config_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_app_config(temp_dir / "nope.toml")

    def test_missing_default_config_uses_defaults(self, temp_dir):
        with patch("memstatsd.cli.main.get_config_path", return_value=temp_dir / "nope.toml"):
            assert load_app_config(None) == AppConfig()

    def test_overrides_apply(self):
        args = build_parser().parse_args([
            "--prefix", "svc.", "--interval", "2.5", "--debug",
            "--statsd-host", "collector", "--statsd-port", "9125",
        ])

        config = apply_overrides(AppConfig(), args)

        assert config.agent.prefix == "svc."
        assert config.agent.interval_seconds == 2.5
        assert config.agent.debug is True
        assert config.statsd.host == "collector"
        assert config.statsd.port == 9125

    def test_no_overrides_keeps_config(self):
        args = build_parser().parse_args([])
        assert apply_overrides(AppConfig(), args) == AppConfig()

    @pytest.mark.parametrize("argv", [
        ["--interval", "0"],
        ["--statsd-port", "99999"],
        ["--prefix", "has space"],
    ])
    def test_invalid_overrides(self, argv):
        args = build_parser().parse_args(argv)
        with pytest.raises(ValidationError):
            apply_overrides(AppConfig(), args)


@pytest.mark.integration
class TestMainCli:
    """End-to-end runs of main_cli with signal registration patched out."""

    def test_dry_run_for_zero_duration(self, config_files):
        with patch("memstatsd.cli.main.signal.signal") as mock_signal, \
                patch("memstatsd.cli.main.MemStatsAgent") as mock_agent_cls:
            main_cli(["--config", str(config_files["config"]), "--dry-run", "--duration", "0"])

        assert mock_signal.call_count == 2
        config_arg, client_arg = mock_agent_cls.from_config.call_args.args
        assert config_arg.prefix == "app."
        assert isinstance(client_arg, LoggingMetricsClient)
        agent = mock_agent_cls.from_config.return_value
        agent.start.assert_called_once_with(5.0)
        agent.stop.assert_called_once()

    def test_statsd_client_created_from_config(self, config_files):
        with patch("memstatsd.cli.main.signal.signal"), \
                patch("memstatsd.cli.main.MemStatsAgent"), \
                patch("memstatsd.cli.main.create_statsd_client") as mock_create:
            main_cli(["--config", str(config_files["config"]), "--duration", "0"])

        mock_create.assert_called_once_with(
            host="statsd.local", port=8125, prefix="", max_udp_size=512, ipv6=False
        )

    def test_real_agent_runs_and_stops(self, config_files):
        with patch("memstatsd.cli.main.signal.signal"):
            main_cli([
                "--config", str(config_files["config"]),
                "--dry-run", "--interval", "0.01", "--duration", "0.1",
            ])

    def test_invalid_config_exits_with_code_1(self, temp_dir):
        config_file = temp_dir / "config.toml"
        config_file.write_text("[agent]\ninterval_seconds = -5\n")

        with patch("memstatsd.cli.main.signal.signal"), pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(config_file)])

        assert exc_info.value.code == 1

    def test_missing_config_exits_with_code_1(self, temp_dir):
        with patch("memstatsd.cli.main.signal.signal"), pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(temp_dir / "missing.toml")])

        assert exc_info.value.code == 1
