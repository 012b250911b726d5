from typing import Any

from adapters.base import BaseAdapter, StatusEvent


class InstatusAdapter(BaseAdapter):
    """Instatus webhooks: an incident or a maintenance, never both."""

    provider_name = "instatus"

    def parse(self, payload: Any) -> StatusEvent:
        return self._validate(payload)
