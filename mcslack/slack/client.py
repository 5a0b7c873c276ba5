"""Client for Slack incoming webhooks."""

import asyncio

import httpx


class SlackError(Exception):
    """Slack answered a webhook post with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class SlackClient:
    """Posts messages to a channel through an incoming webhook URL."""

    def __init__(self, webhook_url: str):
        self.webhook_url = webhook_url

    async def post(self, text: str, timeout: float) -> None:
        """Post `text` to the channel, giving up after `timeout` seconds in total.

        Raises:
            SlackError: Slack returned a status outside 200-299
            httpx.HTTPError: the request failed
            TimeoutError: the whole request took longer than `timeout`
        """
        # httpx timeouts apply per phase, so bound the request as a whole too
        async with asyncio.timeout(timeout):
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(self.webhook_url, json={"text": text})

        if not response.is_success:
            raise SlackError(response.status_code, response.text)
