"""Dashboard aggregation over an already fetched document list.

Pure functions, no store access. Everything is recomputed from the full list
on each call, which is fine for the fixed fetch cap. "now" and the local
timezone are injectable so the time-dependent counters can be pinned in tests.
Naive timestamps are read as UTC.
"""

import math
from datetime import datetime, timezone, tzinfo

from shared.models.dashboard import ActivityItem, DashboardStats, DashboardSummary, DepartmentStats
from shared.models.document import (
    DakDocument,
    DocumentStatus,
    DocumentType,
    FINISHED_STATUSES,
    PENDING_STATUSES,
)

UNKNOWN_DEPARTMENT = "Unknown"
RECENT_ACTIVITY_LIMIT = 4
DEPARTMENT_ROLLUP_LIMIT = 5


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _resolve_now(now: datetime | None, tz: tzinfo | None) -> datetime:
    if now is None:
        return datetime.now(tz or timezone.utc)
    now = _as_aware(now)
    return now.astimezone(tz) if tz is not None else now


################ COUNTERS ##################

def filter_by_type(documents: list[DakDocument], doc_type: DocumentType | str) -> list[DakDocument]:
    """Documents of one direction, in list order."""
    doc_type = DocumentType(doc_type)
    return [doc for doc in documents if doc.type == doc_type]


def count_by_type(documents: list[DakDocument], doc_type: DocumentType | str) -> int:
    return len(filter_by_type(documents, doc_type))


def is_pending(document: DakDocument) -> bool:
    return document.status in PENDING_STATUSES


def pending_count(documents: list[DakDocument]) -> int:
    return sum(1 for doc in documents if is_pending(doc))


def is_overdue(document: DakDocument, now: datetime | None = None) -> bool:
    """A due date strictly before now on a document that is neither closed nor sent."""
    if document.due_date is None or document.status in FINISHED_STATUSES:
        return False
    return _as_aware(document.due_date) < _resolve_now(now, None)


def overdue_count(documents: list[DakDocument], now: datetime | None = None) -> int:
    now = _resolve_now(now, None)
    return sum(1 for doc in documents if is_overdue(doc, now))


def closed_today_count(documents: list[DakDocument], now: datetime | None = None, tz: tzinfo | None = None) -> int:
    """Closed or sent documents whose last update falls on today's local date."""
    now = _resolve_now(now, tz)
    local_tz = tz or now.tzinfo
    today = now.date()
    return sum(
        1
        for doc in documents
        if doc.status in FINISHED_STATUSES and _as_aware(doc.updated_at).astimezone(local_tz).date() == today
    )


################ LABELS ##################

def time_ago(timestamp: datetime, now: datetime | None = None) -> str:
    """Relative label in whole minutes, hours or days, always truncated.

    Units are not singularised: one hour reads "1 hours ago".
    """
    now = _resolve_now(now, None)
    minutes = math.floor((now - _as_aware(timestamp)).total_seconds() / 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} minutes ago"
    if minutes < 1440:
        return f"{minutes // 60} hours ago"
    return f"{minutes // 1440} days ago"


def status_label(status: DocumentStatus | str) -> str:
    return DocumentStatus(status).value.replace("_", " ")


################ FEEDS ##################

def recent_activity(documents: list[DakDocument], now: datetime | None = None, limit: int = RECENT_ACTIVITY_LIMIT) -> list[ActivityItem]:
    """The first documents of the list, in the order given (already newest first)."""
    now = _resolve_now(now, None)
    return [
        ActivityItem(
            id=doc.id,
            action="New Inward DAK Registered" if doc.type == DocumentType.INWARD else "New Outward DAK Created",
            dak_number=doc.dak_number,
            department=doc.get_department_name(UNKNOWN_DEPARTMENT),
            time=time_ago(doc.created_at, now),
            priority=doc.priority,
        )
        for doc in documents[:limit]
    ]


def department_rollup(documents: list[DakDocument], limit: int = DEPARTMENT_ROLLUP_LIMIT) -> list[DepartmentStats]:
    """Inward, outward and pending counts per department name.

    Groups keep the order in which their name first appears in the list; only
    the first `limit` groups are returned, whatever their volume.
    """
    groups: dict[str, DepartmentStats] = {}
    for doc in documents:
        name = doc.get_department_name(UNKNOWN_DEPARTMENT)
        group = groups.setdefault(name, DepartmentStats(name=name))
        if doc.type == DocumentType.INWARD:
            group.inward += 1
        else:
            group.outward += 1
        if is_pending(doc):
            group.pending += 1
    return list(groups.values())[:limit]


def build_dashboard(documents: list[DakDocument], now: datetime | None = None, tz: tzinfo | None = None) -> DashboardSummary:
    """All dashboard counters, the activity feed and the department rollup in one payload."""
    now = _resolve_now(now, tz)
    stats = DashboardStats(
        total=len(documents),
        inward=count_by_type(documents, DocumentType.INWARD),
        outward=count_by_type(documents, DocumentType.OUTWARD),
        pending=pending_count(documents),
        overdue=overdue_count(documents, now),
        closed_today=closed_today_count(documents, now, tz),
    )
    return DashboardSummary(
        stats=stats,
        recent_activity=recent_activity(documents, now),
        departments=department_rollup(documents),
    )
