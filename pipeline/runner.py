from typing import Any, Literal, Optional, Protocol

from pydantic import BaseModel

from adapters.base import BaseAdapter
from adapters.registry import get_adapter
from core.config import Settings
from core.errors import ConfigError, DecodeError
from core.logger import logger
from embeds.builder import build_message
from embeds.models import DisplayEmbed, WebhookMessage
from notifier.discord_notifier import DeliveryResult, DiscordWebhookNotifier


class Notifier(Protocol):
    def send(self, message: WebhookMessage) -> DeliveryResult: ...


class PipelineResult(BaseModel):
    status: Literal["skipped", "sent", "failed"]
    embed: Optional[DisplayEmbed] = None
    delivery: Optional[DeliveryResult] = None


class StatusPipeline:
    """decode → build → send, once per call, with no state kept between calls."""

    def __init__(self, settings: Settings, notifier: Optional[Notifier] = None) -> None:
        self.settings = settings
        self.notifier = notifier if notifier is not None else DiscordWebhookNotifier(settings)

    def run(self, payload: Any, provider: str = "instatus") -> PipelineResult:
        """Process one payload.

        Raises DecodeError for malformed payloads and for unknown providers;
        delivery problems are reported in the returned result instead.
        """
        adapter: Optional[BaseAdapter] = get_adapter(provider)
        if adapter is None:
            raise DecodeError(f"No adapter registered for provider '{provider}'.")

        event = adapter.parse(payload)
        message = build_message(event, self.settings)

        if message is None:
            logger.info(f"[{adapter.provider_name}] Payload has no incident or maintenance - nothing to send.")
            return PipelineResult(status="skipped")

        logger.info(message.embed.summary())

        delivery = self.notifier.send(message)
        return PipelineResult(
            status="sent" if delivery.ok else "failed",
            embed=message.embed,
            delivery=delivery,
        )


def handler(event: Any, context: Any = None, settings: Optional[Settings] = None,
            notifier: Optional[Notifier] = None) -> None:
    """Function-style entry point: one webhook payload per invocation.

    Always returns normally; configuration, decode and delivery failures are
    only logged.
    """
    if settings is None:
        try:
            settings = Settings.from_env()
        except ConfigError as exc:
            logger.error(f"Cannot load settings, dropping payload: {exc}")
            return None
    logger.setLevel(settings.log_level.upper())

    try:
        result = StatusPipeline(settings, notifier).run(event)
    except DecodeError as exc:
        logger.warning(f"Dropping payload: {exc}")
        return None

    if result.status == "failed" and result.delivery is not None:
        logger.warning(f"Notification not delivered: {result.delivery.message}")
    return None
