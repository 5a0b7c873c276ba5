"""Tests for the command line entry points."""

from unittest.mock import AsyncMock, patch

from mcslack.__main__ import main, run_ingest, run_server
from mcslack.config import Settings


class TestRunIngest:
    def test_requires_webhook_url(self, caplog):
        assert run_ingest(Settings(slack={"webhook_url": None})) == 1
        assert "slack.webhook_url is required" in caplog.text

    def test_reads_stdin_by_default(self):
        app_settings = Settings(slack={"webhook_url": "https://hooks.slack.test/x"})

        with (
            patch("mcslack.__main__.stdin_lines") as mock_stdin,
            patch("mcslack.__main__.LogIngestor.run", new_callable=AsyncMock) as mock_run,
        ):
            assert run_ingest(app_settings) == 0

        mock_stdin.assert_called_once_with()
        mock_run.assert_awaited_once_with(mock_stdin.return_value)

    def test_follows_log_file(self, tmp_path):
        log_path = tmp_path / "latest.log"
        app_settings = Settings(
            slack={"webhook_url": "https://hooks.slack.test/x"},
            ingest={"log_path": log_path},
        )

        with (
            patch("mcslack.__main__.LogFileFollower") as mock_follower,
            patch("mcslack.__main__.LogIngestor.run", new_callable=AsyncMock),
        ):
            assert run_ingest(app_settings) == 0

        mock_follower.assert_called_once_with(log_path)


class TestRunServer:
    def test_requires_token(self, caplog):
        assert run_server(Settings(slack={"token": None})) == 1
        assert "slack.token is required" in caplog.text

    def test_serves_with_configured_address(self):
        app_settings = Settings(slack={"token": "secret"}, server={"port": 9090})

        with patch("mcslack.__main__.uvicorn.Server") as mock_server:
            mock_server.return_value.started = True
            assert run_server(app_settings) == 0

        config = mock_server.call_args.args[0]
        assert config.port == 9090
        assert config.host == "127.0.0.1"
        assert config.lifespan == "on"

    def test_failed_startup_exits_non_zero(self):
        with patch("mcslack.__main__.uvicorn.Server") as mock_server:
            mock_server.return_value.started = False
            assert run_server(Settings(slack={"token": "secret"})) == 1


class TestMain:
    def test_ingest_log_path_override(self, tmp_path):
        log_path = tmp_path / "latest.log"

        with (
            patch("sys.argv", ["mcslack", "ingest", "--log-path", str(log_path)]),
            patch("mcslack.__main__.run_ingest", return_value=0) as mock_run,
        ):
            assert main() == 0

        assert mock_run.call_args.args[0].ingest.log_path == log_path

    def test_server_port_override(self):
        with (
            patch("sys.argv", ["mcslack", "server", "--port", "9000"]),
            patch("mcslack.__main__.run_server", return_value=0) as mock_run,
        ):
            assert main() == 0

        assert mock_run.call_args.args[0].server.port == 9000
