import logging
import os
from pathlib import Path
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from core.errors import ConfigError

# Load .env from the project root
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path)

DEFAULT_API_BASE       = "https://discord.com/api/v10"
DEFAULT_URL_TEMPLATE   = "https://discordstatus.com/incidents/{id}"
DEFAULT_EMBED_COLOR    = 0x2483C5
DEFAULT_TIMEOUT_SECS   = 5.0

RED_ICON    = "<:statusred:816435667001147482>"
YELLOW_ICON = "<:statusyellow:816435667017400350>"
GREEN_ICON  = "<:statusgreen:816435666988171314>"


class Settings(BaseModel):
    """Everything one invocation needs, read once and passed down explicitly."""

    webhook_id: str = ""
    webhook_token: str = ""
    role_id: Optional[str] = None

    api_base: str = DEFAULT_API_BASE
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECS, gt=0)

    color: int = DEFAULT_EMBED_COLOR
    link_source: Literal["url", "id"] = "url"
    body_format: Literal["markdown", "plain"] = "markdown"
    incident_url_template: str = DEFAULT_URL_TEMPLATE

    red_icon: str = RED_ICON
    yellow_icon: str = YELLOW_ICON
    green_icon: str = GREEN_ICON

    log_level: str = "INFO"

    @field_validator("incident_url_template")
    @classmethod
    def check_url_template(cls, value: str) -> str:
        try:
            value.format(id="x")
        except (KeyError, IndexError, ValueError, AttributeError) as exc:
            raise ValueError(f"cannot format {value!r} with an incident id: {exc!r}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value!r}")
        return value

    @property
    def webhook_configured(self) -> bool:
        return bool(self.webhook_id and self.webhook_token)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Unset or blank variables fall back to the defaults above. A value that is
        set but cannot be used (a non-numeric timeout, an unknown link source)
        raises ConfigError instead of being silently replaced.
        """
        env = os.environ if environ is None else environ

        def _get(key: str) -> Optional[str]:
            value = env.get(key)
            if value is None or not value.strip():
                return None
            return value.strip()

        raw: dict[str, object] = {}
        mapping = {
            "webhook_id":            "DISCORD_WEBHOOK_ID",
            "webhook_token":         "DISCORD_WEBHOOK_TOKEN",
            "role_id":               "DISCORD_STATUS_ROLE_ID",
            "api_base":              "DISCORD_API_BASE",
            "timeout":               "DISCORD_WEBHOOK_TIMEOUT",
            "link_source":           "EMBED_LINK_SOURCE",
            "body_format":           "EMBED_BODY_FORMAT",
            "incident_url_template": "INCIDENT_URL_TEMPLATE",
            "red_icon":              "STATUS_ICON_RED",
            "yellow_icon":           "STATUS_ICON_YELLOW",
            "green_icon":            "STATUS_ICON_GREEN",
            "log_level":             "LOG_LEVEL",
        }
        for field, key in mapping.items():
            value = _get(key)
            if value is not None:
                raw[field] = value

        color = _get("EMBED_COLOR")
        if color is not None:
            try:
                # Accepts "2393029", "0x2483C5" and "#2483C5".
                raw["color"] = int(color.replace("#", "0x"), 0)
            except ValueError as exc:
                raise ConfigError(f"EMBED_COLOR is not a valid color: {color!r}") from exc

        if "api_base" in raw:
            raw["api_base"] = str(raw["api_base"]).rstrip("/")
        if "link_source" in raw:
            raw["link_source"] = str(raw["link_source"]).lower()
        if "body_format" in raw:
            raw["body_format"] = str(raw["body_format"]).lower()

        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
