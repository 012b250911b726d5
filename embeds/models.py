from typing import Any, Optional

from pydantic import BaseModel, Field

# Discord rejects embeds over these limits.
MAX_TITLE_LENGTH = 256
MAX_FIELD_NAME_LENGTH = 256
MAX_FIELD_VALUE_LENGTH = 1024


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class EmbedFooter(BaseModel):
    text: str


class DisplayEmbed(BaseModel):
    title: str
    url: str = ""
    color: int
    timestamp: Optional[str] = None
    footer: Optional[EmbedFooter] = None
    fields: list[EmbedField] = Field(default_factory=list)

    def summary(self) -> dict[str, Any]:
        """Compact form for the log formatter."""
        return {"title": self.title, "fields": len(self.fields), "url": self.url}


class WebhookMessage(BaseModel):
    """Body of one execute-webhook call: optional mention text plus a single embed."""

    content: Optional[str] = None
    embeds: list[DisplayEmbed]
    allowed_mentions: Optional[dict[str, list[str]]] = None

    @property
    def embed(self) -> DisplayEmbed:
        return self.embeds[0]

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(exclude_none=True)
        # Empty urls are rejected by Discord; drop them instead of sending "".
        for embed in payload["embeds"]:
            if not embed.get("url"):
                embed.pop("url", None)
        return payload
