from typing import Optional

import httpx
from pydantic import BaseModel

from core.config import Settings
from core.errors import DeliveryError
from core.logger import logger
from embeds.models import WebhookMessage


class DeliveryResult(BaseModel):
    ok: bool
    status_code: Optional[int] = None
    message: str = ""


class DiscordWebhookNotifier:
    """Executes a Discord webhook exactly once per call. Failures come back as values."""

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._settings  = settings
        self._transport = transport

    @property
    def endpoint(self) -> str:
        s = self._settings
        return f"{s.api_base}/webhooks/{s.webhook_id}/{s.webhook_token}"

    def _redacted_endpoint(self) -> str:
        return f"{self._settings.api_base}/webhooks/{self._settings.webhook_id}/***"

    def _post(self, message: WebhookMessage) -> httpx.Response:
        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent":   "StatusEmbedRelay/1.0",
        }
        try:
            with httpx.Client(timeout=self._settings.timeout, transport=self._transport) as client:
                response = client.post(self.endpoint, json=message.to_payload(), headers=headers)
        except httpx.TimeoutException as exc:
            raise DeliveryError(f"Request timed out after {self._settings.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Transport error: {exc.__class__.__name__}: {exc}") from exc

        if response.is_error:
            raise DeliveryError(
                f"Discord rejected the webhook: HTTP {response.status_code} {response.text[:200]}",
                status_code=response.status_code,
            )
        return response

    def send(self, message: WebhookMessage) -> DeliveryResult:
        if not self._settings.webhook_configured:
            logger.error("Discord webhook id/token not configured - skipping delivery.")
            return DeliveryResult(ok=False, message="webhook not configured")

        logger.debug(f"Executing webhook {self._redacted_endpoint()}")
        try:
            response = self._post(message)
        except DeliveryError as exc:
            logger.error(f"Delivery failed: {exc}")
            return DeliveryResult(ok=False, status_code=exc.status_code, message=str(exc))

        logger.info(f"Discord response: HTTP {response.status_code}")
        return DeliveryResult(ok=True, status_code=response.status_code, message="delivered")
