from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from core.errors import DecodeError


def normalize_status(status: str) -> str:
    """'In progress' / 'IN_PROGRESS' / 'in_progress' → 'in_progress'."""
    return "_".join(status.strip().lower().split())


class _PayloadModel(BaseModel):
    """Treats explicit JSON nulls like absent keys so field defaults apply."""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class PageInfo(_PayloadModel):
    id: str = ""
    url: str = ""
    # UP | HASISSUES | UNDERMAINTENANCE; kept as a plain string so new values pass through.
    status_indicator: str = ""
    status_description: str = ""


class MetaInfo(_PayloadModel):
    unsubscribe: str = ""
    documentation: str = ""


class AffectedComponent(_PayloadModel):
    id: str = ""
    name: str = ""
    status: str = ""


class IncidentUpdate(_PayloadModel):
    id: str = ""
    incident_id: str = ""
    status: str = ""
    body: str = ""
    markdown: str = ""
    created_at: str
    updated_at: str = ""


class MaintenanceUpdate(_PayloadModel):
    id: str = ""
    maintenance_id: str = ""
    body: str = ""
    markdown: str = ""
    created_at: str
    updated_at: str = ""


class Incident(_PayloadModel):
    id: str
    name: str
    url: str = ""

    status: str
    impact: str = ""
    backfilled: bool = False

    created_at: str
    updated_at: str = ""
    resolved_at: Optional[str] = None

    affected_components: list[AffectedComponent] = Field(default_factory=list)
    incident_updates: list[IncidentUpdate] = Field(default_factory=list)


class Maintenance(_PayloadModel):
    id: str
    name: str
    url: str = ""

    status: str
    impact: str = ""
    duration: Optional[float] = None
    backfilled: bool = False

    created_at: str
    updated_at: str = ""
    resolved_at: Optional[str] = None

    affected_components: list[AffectedComponent] = Field(default_factory=list)
    maintenance_updates: list[MaintenanceUpdate] = Field(default_factory=list)


StatusEntity = Union[Incident, Maintenance]


class StatusEvent(_PayloadModel):
    """One decoded webhook delivery: page metadata plus at most one entity."""

    provider: str = Field(default="unknown")
    meta: MetaInfo = Field(default_factory=MetaInfo)
    page: PageInfo = Field(default_factory=PageInfo)

    incident: Optional[Incident] = None
    maintenance: Optional[Maintenance] = None

    @model_validator(mode="after")
    def check_single_entity(self) -> "StatusEvent":
        if self.incident is not None and self.maintenance is not None:
            raise ValueError("payload carries both an incident and a maintenance")
        return self

    @property
    def entity(self) -> Optional[StatusEntity]:
        """The populated entity, or None when there is nothing to notify about."""
        return self.incident if self.incident is not None else self.maintenance


class BaseAdapter(ABC):
    # Subclasses should override this to name their provider.
    provider_name: str = "unknown"

    @abstractmethod
    def parse(self, payload: Any) -> StatusEvent:
        """Parse the raw payload from the provider and return a StatusEvent.

        Raises DecodeError when the payload does not conform.
        """
        pass

    def _validate(self, payload: Any) -> StatusEvent:
        if not isinstance(payload, dict):
            raise DecodeError(
                f"[{self.provider_name}] expected a JSON object, got {type(payload).__name__}"
            )
        try:
            return StatusEvent.model_validate({**payload, "provider": self.provider_name})
        except ValidationError as exc:
            raise DecodeError(f"[{self.provider_name}] invalid payload: {exc}") from exc
