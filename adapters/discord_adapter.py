from typing import Any

from adapters.base import BaseAdapter, StatusEvent


class DiscordStatusAdapter(BaseAdapter):
    """Incident-only webhooks from discordstatus.com.

    This feed never announces maintenance windows, so a stray ``maintenance``
    key is dropped before validation rather than turned into an embed.
    """

    provider_name = "discordstatus"

    def parse(self, payload: Any) -> StatusEvent:
        if isinstance(payload, dict) and "maintenance" in payload:
            payload = {k: v for k, v in payload.items() if k != "maintenance"}
        return self._validate(payload)
