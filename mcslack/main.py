from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .config import Settings, settings
from .logger import logger
from .rcon import RconClient
from .routers import webhook


def create_app(
    app_settings: Settings = settings, rcon_client: Optional[RconClient] = None
) -> FastAPI:
    """Build the app serving Slack outgoing webhooks.

    Startup fails if RCON cannot be reached or the password is rejected,
    since no command could succeed afterwards.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = rcon_client or RconClient(
            app_settings.rcon.host,
            app_settings.rcon.port,
            app_settings.rcon.password,
        )
        logger.info(f"Connecting to RCON at {client.address}...")
        await client.connect(app_settings.rcon.connect_timeout_seconds)
        app.state.rcon_client = client
        logger.info("Startup complete.")
        yield
        await client.close()

    app = FastAPI(lifespan=lifespan, title="mc-slack-bridge")
    app.state.settings = app_settings
    app.include_router(webhook.router)
    return app


app = create_app()
