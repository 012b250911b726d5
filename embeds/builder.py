"""Render decoded status events into Discord webhook messages.

Nothing in this module performs I/O or raises on odd input: unknown statuses
render without an icon and unparseable timestamps are shown verbatim.
"""

import re
from datetime import datetime, timezone
from typing import Optional, Union

from adapters.base import (
    Incident,
    IncidentUpdate,
    Maintenance,
    MaintenanceUpdate,
    StatusEntity,
    StatusEvent,
    normalize_status,
)
from core.config import Settings
from embeds.models import (
    MAX_FIELD_NAME_LENGTH,
    MAX_FIELD_VALUE_LENGTH,
    MAX_TITLE_LENGTH,
    DisplayEmbed,
    EmbedField,
    EmbedFooter,
    WebhookMessage,
)

INCIDENT_FOOTER = "Started at"
EMPTY_FIELD_VALUE = "\u200b"

# RFC 3339: full date and time, optional fraction, mandatory Z or ±HH:MM offset.
_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|z|[+-]\d{2}:\d{2})"
)

# Lifecycle status → severity colour of the icon.
_INCIDENT_SEVERITY = {
    "investigating": "red",
    "identified":    "yellow",
    "monitoring":    "yellow",
    "resolved":      "green",
}

_MAINTENANCE_SEVERITY = {
    "planned":     "yellow",
    "in_progress": "red",
    "completed":   "green",
}


def _icon(severity: Optional[str], settings: Settings) -> str:
    return {
        "red":    settings.red_icon,
        "yellow": settings.yellow_icon,
        "green":  settings.green_icon,
    }.get(severity or "", "")


def incident_icon(status: str, settings: Settings) -> str:
    return _icon(_INCIDENT_SEVERITY.get(normalize_status(status)), settings)


def maintenance_icon(status: str, settings: Settings) -> str:
    return _icon(_MAINTENANCE_SEVERITY.get(normalize_status(status)), settings)


def _parse_timestamp(value: str) -> Optional[datetime]:
    if not isinstance(value, str) or _RFC3339.fullmatch(value) is None:
        return None
    try:
        return datetime.fromisoformat(value[:-1] + "+00:00" if value[-1] in "Zz" else value)
    except ValueError:
        return None


def humanize_time(value: str) -> str:
    """'2024-01-02T03:04:05.123Z' → '03:04:05z'; anything unparseable is returned as-is."""
    parsed = _parse_timestamp(value)
    if parsed is None:
        return value
    return parsed.astimezone(timezone.utc).strftime("%H:%M:%Sz")


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def _field_body(update: Union[IncidentUpdate, MaintenanceUpdate], settings: Settings) -> str:
    body = update.markdown if settings.body_format == "markdown" else update.body
    if not body.strip():
        return EMPTY_FIELD_VALUE
    return _truncate(body, MAX_FIELD_VALUE_LENGTH)


def _link(entity: StatusEntity, settings: Settings) -> str:
    # Only incidents have an id-based page; maintenance always links its own url.
    if settings.link_source == "id" and isinstance(entity, Incident):
        try:
            return settings.incident_url_template.format(id=entity.id)
        except (KeyError, IndexError, ValueError, AttributeError):
            return entity.url
    return entity.url


def _incident_fields(incident: Incident, settings: Settings) -> list[EmbedField]:
    # sorted() is stable, so updates sharing a timestamp keep their payload order.
    updates = sorted(incident.incident_updates, key=lambda u: u.created_at)
    return [
        EmbedField(
            name=_truncate(
                f"{incident_icon(u.status, settings)} {u.status} ({humanize_time(u.created_at)})",
                MAX_FIELD_NAME_LENGTH,
            ),
            value=_field_body(u, settings),
        )
        for u in updates
    ]


def _maintenance_fields(maintenance: Maintenance, settings: Settings) -> list[EmbedField]:
    updates = sorted(maintenance.maintenance_updates, key=lambda u: u.created_at)
    return [
        EmbedField(
            name=_truncate(f"Update ({humanize_time(u.created_at)})", MAX_FIELD_NAME_LENGTH),
            value=_field_body(u, settings),
        )
        for u in updates
    ]


def build_embed(entity: StatusEntity, settings: Settings) -> DisplayEmbed:
    if isinstance(entity, Incident):
        icon   = incident_icon(entity.status, settings)
        kind   = "Incident"
        fields = _incident_fields(entity, settings)
        footer = EmbedFooter(text=INCIDENT_FOOTER)
    else:
        icon   = maintenance_icon(entity.status, settings)
        kind   = "Maintenance"
        fields = _maintenance_fields(entity, settings)
        footer = None

    timestamp = entity.created_at if _parse_timestamp(entity.created_at) is not None else None

    return DisplayEmbed(
        title=_truncate(f"{icon} {kind}: {entity.name}", MAX_TITLE_LENGTH),
        url=_link(entity, settings),
        color=settings.color,
        timestamp=timestamp,
        footer=footer,
        fields=fields,
    )


def build_message(event: StatusEvent, settings: Settings) -> Optional[WebhookMessage]:
    """Build the outbound message for an event, or None when it carries no entity."""
    entity = event.entity
    if entity is None:
        return None

    content = None
    allowed_mentions = None
    if settings.role_id:
        content = f"<@&{settings.role_id}>"
        allowed_mentions = {"parse": [], "roles": [settings.role_id]}

    return WebhookMessage(
        content=content,
        embeds=[build_embed(entity, settings)],
        allowed_mentions=allowed_mentions,
    )
