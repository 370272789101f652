"""Unit tests for main entry point."""

import asyncio
import socket
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from tempest_exporter.config import Settings, WeatherFlowConfig
from tempest_exporter.exceptions import ConfigurationError, FetchError
from tempest_exporter.main import (
    load_settings,
    main,
    parse_args,
    run,
    run_exporter,
    setup_logging,
)
from tempest_exporter.schemas import StationResponse


class TestParseArgs:
    def test_default_args(self):
        """Test default argument values."""
        with patch("sys.argv", ["tempest-exporter"]):
            args = parse_args()

        assert args.once is False
        assert args.port is None
        assert args.log_level is None

    def test_once_flag(self):
        """Test --once flag."""
        with patch("sys.argv", ["tempest-exporter", "--once"]):
            args = parse_args()

        assert args.once is True

    def test_port_arg(self):
        """Test --port argument."""
        with patch("sys.argv", ["tempest-exporter", "--port", "9100"]):
            args = parse_args()

        assert args.port == 9100

    def test_log_level_arg(self):
        """Test --log-level argument."""
        with patch("sys.argv", ["tempest-exporter", "--log-level", "DEBUG"]):
            args = parse_args()

        assert args.log_level == "DEBUG"


class TestSetupLogging:
    def test_setup_logging_info(self):
        """Test logging setup with INFO level."""
        setup_logging("INFO")

    def test_setup_logging_debug(self):
        """Test logging setup with DEBUG level."""
        setup_logging("DEBUG")


class TestLoadSettings:
    def test_missing_token_names_variable(self, monkeypatch: pytest.MonkeyPatch):
        """Test a missing token is reported by environment variable name."""
        monkeypatch.delenv("WEATHERFLOW_API_TOKEN", raising=False)
        monkeypatch.setenv("WEATHERFLOW_STATION_ID", "42")

        with pytest.raises(ConfigurationError, match="WEATHERFLOW_API_TOKEN"):
            load_settings()

    def test_invalid_value_names_variable(self, monkeypatch: pytest.MonkeyPatch):
        """Test an invalid value is reported with its own prefix."""
        monkeypatch.setenv("WEATHERFLOW_API_TOKEN", "abc")
        monkeypatch.setenv("WEATHERFLOW_STATION_ID", "42")
        monkeypatch.setenv("WEATHERFLOW_LISTEN_PORT", "abc")

        with pytest.raises(ConfigurationError, match="WEATHERFLOW_LISTEN_PORT") as exc_info:
            load_settings()
        assert "WEATHERFLOW_API_TOKEN" not in str(exc_info.value)

    def test_valid_settings(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("WEATHERFLOW_API_TOKEN", "abc")
        monkeypatch.setenv("WEATHERFLOW_STATION_ID", "42")

        assert load_settings().weatherflow.api_token == "abc"


class TestRunExporter:
    @pytest.mark.asyncio
    async def test_refreshes_until_shutdown(self):
        """Test the loop refreshes repeatedly and stops on shutdown."""
        exporter = MagicMock()
        exporter.run_once = AsyncMock(return_value=True)
        shutdown_event = asyncio.Event()

        async def trigger_shutdown():
            await asyncio.sleep(0.1)
            shutdown_event.set()

        await asyncio.gather(
            run_exporter(exporter, shutdown_event, interval=0.01),
            trigger_shutdown(),
        )

        assert exporter.run_once.call_count >= 2

    @pytest.mark.asyncio
    async def test_no_refresh_when_already_shut_down(self):
        exporter = MagicMock()
        exporter.run_once = AsyncMock()
        shutdown_event = asyncio.Event()
        shutdown_event.set()

        await run_exporter(exporter, shutdown_event, interval=0.01)

        exporter.run_once.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_error_does_not_stop_loop(self):
        """Test unexpected refresh errors are logged and the loop goes on."""
        exporter = MagicMock()
        exporter.run_once = AsyncMock(side_effect=[RuntimeError("bad"), True, True, True])
        shutdown_event = asyncio.Event()

        async def trigger_shutdown():
            while exporter.run_once.call_count < 2:
                await asyncio.sleep(0.01)
            shutdown_event.set()

        await asyncio.gather(
            run_exporter(exporter, shutdown_event, interval=0.01),
            trigger_shutdown(),
        )

        assert exporter.run_once.call_count >= 2

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self):
        """Test a FetchError raised by the exporter ends the loop."""
        exporter = MagicMock()
        exporter.run_once = AsyncMock(side_effect=FetchError("down"))

        with pytest.raises(FetchError):
            await run_exporter(exporter, asyncio.Event(), interval=0.01)


class TestRunOnce:
    @pytest.mark.asyncio
    async def test_once_prints_metrics(
        self,
        weatherflow_config: WeatherFlowConfig,
        station_payload: dict,
        capsys: pytest.CaptureFixture,
    ):
        """Test --once fetches a single observation and prints the exposition."""
        client = MagicMock()
        client.get_station_observation = AsyncMock(
            return_value=StationResponse.model_validate(station_payload)
        )
        client.close = AsyncMock()
        settings = Settings(weatherflow=weatherflow_config)

        with patch("tempest_exporter.exporter.WeatherFlowClient", return_value=client):
            await run(settings, once=True)

        output = capsys.readouterr().out
        assert "tempest_station_air_temperature{" in output
        assert "tempest_exporter_refresh_total 1.0" in output
        client.get_station_observation.assert_called_once()
        client.close.assert_called_once()


class TestRunServe:
    @pytest.mark.asyncio
    async def test_busy_port_fails_before_fetch(self, weatherflow_config: WeatherFlowConfig):
        """Test an unbindable port raises OSError without contacting the API."""
        busy = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        busy.bind(("127.0.0.1", 0))
        busy.listen()
        client = MagicMock()
        client.get_station_observation = AsyncMock()
        client.close = AsyncMock()
        config = weatherflow_config.model_copy(
            update={"listen_addr": "127.0.0.1", "listen_port": busy.getsockname()[1]}
        )

        try:
            with patch("tempest_exporter.exporter.WeatherFlowClient", return_value=client):
                with pytest.raises(OSError):
                    await run(Settings(weatherflow=config))
        finally:
            busy.close()

        client.get_station_observation.assert_not_called()


class TestMain:
    def test_bind_failure_exits_1(self, weatherflow_config: WeatherFlowConfig):
        """Test a listen error is logged and exits with status 1."""
        with (
            patch("sys.argv", ["tempest-exporter"]),
            patch(
                "tempest_exporter.main.load_settings",
                return_value=Settings(weatherflow=weatherflow_config),
            ),
            patch("tempest_exporter.main.setup_logging"),
            patch(
                "tempest_exporter.main.run",
                MagicMock(side_effect=OSError(98, "Address already in use")),
            ),
            patch("tempest_exporter.main.logger") as logger,
        ):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        logger.error.assert_called_once()
        assert "Address already in use" in str(logger.error.call_args)

    def test_fetch_error_exits_1(self, weatherflow_config: WeatherFlowConfig):
        with (
            patch("sys.argv", ["tempest-exporter", "--once"]),
            patch(
                "tempest_exporter.main.load_settings",
                return_value=Settings(weatherflow=weatherflow_config),
            ),
            patch("tempest_exporter.main.setup_logging"),
            patch("tempest_exporter.main.run", MagicMock(side_effect=FetchError("down"))),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
