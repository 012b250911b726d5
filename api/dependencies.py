from functools import lru_cache

from fastapi import Depends

from core.config import Settings
from notifier.discord_notifier import DiscordWebhookNotifier
from pipeline.runner import Notifier


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def get_notifier(settings: Settings = Depends(get_settings)) -> Notifier:
    return DiscordWebhookNotifier(settings)
