"""Sample webhook bodies shared by the test modules."""

import copy

_PAGE = {
    "meta": {
        "unsubscribe":   "https://status.example.com/unsubscribe",
        "documentation": "https://instatus.com/help/webhooks",
    },
    "page": {
        "id":                 "page_1",
        "url":                "https://status.example.com",
        "status_indicator":   "HASISSUES",
        "status_description": "Some systems are experiencing issues",
    },
}

_INCIDENT = {
    "id":         "inc_123",
    "name":       "API outage",
    "url":        "https://status.example.com/incident/inc_123",
    "status":     "identified",
    "impact":     "MAJOROUTAGE",
    "backfilled": False,
    "created_at": "2024-01-02T03:00:00.000Z",
    "updated_at": "2024-01-02T03:30:00.000Z",
    "resolved_at": None,
    "affected_components": [
        {"id": "cmp_1", "name": "API", "status": "MAJOROUTAGE"},
    ],
    # Deliberately out of chronological order.
    "incident_updates": [
        {
            "id":          "upd_2",
            "incident_id": "inc_123",
            "status":      "identified",
            "body":        "Root cause identified.",
            "markdown":    "**Root cause** identified.",
            "created_at":  "2024-01-02T03:20:00.000Z",
            "updated_at":  "2024-01-02T03:20:00.000Z",
        },
        {
            "id":          "upd_1",
            "incident_id": "inc_123",
            "status":      "investigating",
            "body":        "We are investigating elevated error rates.",
            "markdown":    "We are _investigating_ elevated error rates.",
            "created_at":  "2024-01-02T03:04:05.123Z",
            "updated_at":  "2024-01-02T03:04:05.123Z",
        },
    ],
}

_MAINTENANCE = {
    "id":         "mnt_9",
    "name":       "Database upgrade",
    "url":        "https://status.example.com/maintenance/mnt_9",
    "status":     "In progress",
    "impact":     "UNDERMAINTENANCE",
    "duration":   60,
    "backfilled": False,
    "created_at": "2024-03-04T10:00:00.000Z",
    "updated_at": "2024-03-04T10:15:00.000Z",
    "resolved_at": None,
    "affected_components": [],
    "maintenance_updates": [
        {
            "id":             "mu_2",
            "maintenance_id": "mnt_9",
            "body":           "Upgrade started.",
            "markdown":       "Upgrade **started**.",
            "created_at":     "2024-03-04T10:15:00.000Z",
            "updated_at":     "2024-03-04T10:15:00.000Z",
        },
        {
            "id":             "mu_1",
            "maintenance_id": "mnt_9",
            "body":           "Maintenance scheduled.",
            "markdown":       "Maintenance _scheduled_.",
            "created_at":     "2024-03-04T10:00:00.000Z",
            "updated_at":     "2024-03-04T10:00:00.000Z",
        },
    ],
}


def incident_payload(**overrides) -> dict:
    payload = copy.deepcopy(_PAGE)
    incident = copy.deepcopy(_INCIDENT)
    incident.update(overrides)
    payload["incident"] = incident
    return payload


def maintenance_payload(**overrides) -> dict:
    payload = copy.deepcopy(_PAGE)
    maintenance = copy.deepcopy(_MAINTENANCE)
    maintenance.update(overrides)
    payload["maintenance"] = maintenance
    return payload


def page_only_payload() -> dict:
    return copy.deepcopy(_PAGE)
