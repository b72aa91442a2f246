"""httpx-backed webhook sink."""

import logging
from typing import Any

import httpx

from brand_savings.errors import WebhookError

logger = logging.getLogger(__name__)


class HttpWebhookSink:
    """
    POSTs the submission payload as JSON with a bearer credential.

    Any failure to deliver (a malformed URL, a transport error, a timeout,
    a non-2xx status) is raised as WebhookError. The response body is never
    read.
    """

    def __init__(
        self,
        url: str,
        token: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._token = token
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "HttpWebhookSink":
        from brand_savings.config import get_settings

        settings = get_settings()
        return cls(
            url=settings.resolved_webhook_url,
            token=settings.resolved_webhook_token,
            timeout=settings.webhook_timeout_seconds,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    async def notify(self, payload: dict[str, Any]) -> None:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=payload, headers=self.headers)
        except httpx.TimeoutException as e:
            raise WebhookError("Webhook request timed out") from e
        except httpx.HTTPError as e:
            raise WebhookError(f"Webhook request failed: {e}") from e
        except Exception as e:
            # Bad URL or header values never reach the network
            logger.error(f"Webhook request could not be built: {e}")
            raise WebhookError(f"Webhook request could not be sent: {e}") from e

        if not response.is_success:
            raise WebhookError(
                f"Webhook returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        logger.debug(f"Webhook accepted submission ({response.status_code})")
