"""Pydantic models for the dashboard payload."""

from pydantic import BaseModel

from shared.models.document import DocumentPriority


class DashboardStats(BaseModel):
    total: int = 0
    inward: int = 0
    outward: int = 0
    pending: int = 0
    overdue: int = 0
    closed_today: int = 0


class ActivityItem(BaseModel):
    """One line of the recent-activity feed."""

    id: str
    action: str
    dak_number: str
    department: str
    time: str
    priority: DocumentPriority


class DepartmentStats(BaseModel):
    """Per-department inward/outward/pending counts."""

    name: str
    inward: int = 0
    outward: int = 0
    pending: int = 0


class DashboardSummary(BaseModel):
    stats: DashboardStats
    recent_activity: list[ActivityItem] = []
    departments: list[DepartmentStats] = []
