import json

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..config import Settings
from ..dependencies import get_rcon_client, get_settings
from ..logger import logger
from ..rcon import RconClient, RconError
from ..slack import WebhookPayload

router = APIRouter(tags=["webhook"])


def build_tellraw_command(user_name: str, text: str) -> str:
    """Command that shows `<user_name> text` in every player's chat."""
    return "tellraw @a " + json.dumps({"text": f"<{user_name}> {text}"})


@router.post("/")
async def slack_outgoing_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    rcon_client: RconClient = Depends(get_rcon_client),
):
    """Forward a message typed in Slack to the Minecraft chat."""
    payload = WebhookPayload.from_form(await request.form())

    if settings.slack.token is None or payload.token != settings.slack.token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook token"
        )

    # Replying with a body would post it back into the channel
    if payload.user_name in settings.slack.ignore_users:
        return Response(status_code=status.HTTP_200_OK)

    command = build_tellraw_command(payload.user_name, payload.text)
    try:
        await rcon_client.execute(command, settings.rcon.timeout_seconds)
    except RconError as e:
        logger.error(f"Failed to forward message to Minecraft: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to forward message to Minecraft",
        )

    return Response(status_code=status.HTTP_200_OK)
