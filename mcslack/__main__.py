import argparse
import asyncio
import sys
from datetime import timedelta
from pathlib import Path

import uvicorn

from .config import Settings, settings
from .log_monitor import MessageClassifier
from .log_monitor.ingest import LogIngestor
from .log_monitor.sources import LogFileFollower, stdin_lines
from .logger import logger
from .main import create_app
from .slack import SlackClient


def run_ingest(app_settings: Settings) -> int:
    if not app_settings.slack.webhook_url:
        logger.error("slack.webhook_url is required for ingest")
        return 1

    ingestor = LogIngestor(
        poster=SlackClient(app_settings.slack.webhook_url),
        classifier=MessageClassifier(app_settings.classifier),
        tolerance=timedelta(seconds=app_settings.ingest.discard_tolerance_seconds),
        post_timeout=app_settings.slack.webhook_timeout_seconds,
    )

    log_path = app_settings.ingest.log_path
    if log_path is None:
        lines = stdin_lines()
    else:
        lines = LogFileFollower(log_path).lines()

    try:
        asyncio.run(ingestor.run(lines))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


def run_server(app_settings: Settings) -> int:
    if not app_settings.slack.token:
        logger.error("slack.token is required for server")
        return 1

    config = uvicorn.Config(
        create_app(app_settings),
        host=app_settings.server.host,
        port=app_settings.server.port,
        lifespan="on",
    )
    server = uvicorn.Server(config)
    server.run()
    # uvicorn returns normally when the lifespan startup fails
    return 0 if server.started else 1


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="mcslack", description="Minecraft <-> Slack bridge"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest_parser = subparsers.add_parser(
        "ingest", help="Forward relevant Minecraft log messages to Slack"
    )
    ingest_parser.add_argument(
        "--log-path", type=Path, help="Follow this log file instead of stdin"
    )

    server_parser = subparsers.add_parser(
        "server", help="Serve a Slack outgoing webhook that forwards to Minecraft"
    )
    server_parser.add_argument("--host", type=str)
    server_parser.add_argument("--port", type=int)

    args = parser.parse_args()

    if args.command == "ingest":
        ingest = settings.ingest
        if args.log_path is not None:
            ingest = ingest.model_copy(update={"log_path": args.log_path})
        return run_ingest(settings.model_copy(update={"ingest": ingest}))

    server = settings.server
    overrides = {
        k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None
    }
    return run_server(
        settings.model_copy(update={"server": server.model_copy(update=overrides)})
    )


if __name__ == "__main__":
    sys.exit(main())
