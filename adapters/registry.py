from typing import Optional

from adapters.base import BaseAdapter
from adapters.discord_adapter import DiscordStatusAdapter
from adapters.instatus_adapter import InstatusAdapter


ADAPTER_REGISTRY: dict[str, BaseAdapter] = {
    "instatus":      InstatusAdapter(),
    "discordstatus": DiscordStatusAdapter(),
}


def get_adapter(provider_name: str) -> Optional[BaseAdapter]:
    return ADAPTER_REGISTRY.get(provider_name.lower())
