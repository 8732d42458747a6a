"""Pydantic models for DAK documents.

Hierarchy:
  DakDocument     — a row of the dak_documents table as returned by the store,
                    including the joined department name and code.
  DocumentCreate  — fields a caller may supply when registering a document.
  DocumentUpdate  — partial patch; only fields explicitly set are sent.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class DocumentType(str, Enum):
    INWARD = "inward"
    OUTWARD = "outward"


class DocumentPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class DocumentStatus(str, Enum):
    RECEIVED = "received"
    UNDER_PROCESS = "under_process"
    FORWARDED = "forwarded"
    CLOSED = "closed"
    ESCALATED = "escalated"
    DRAFT = "draft"
    SENT = "sent"


# statuses that still wait for action, and statuses that end a document's life
PENDING_STATUSES = frozenset({DocumentStatus.RECEIVED, DocumentStatus.UNDER_PROCESS})
FINISHED_STATUSES = frozenset({DocumentStatus.CLOSED, DocumentStatus.SENT})


class DepartmentRef(BaseModel):
    """Department columns joined onto a document row."""

    name: str
    code: str


class DakDocument(BaseModel):
    """A stored DAK document.

    id and dak_number are assigned by the store; the client never mints them.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    dak_number: str
    reference_number: str | None = None
    type: DocumentType
    subject: str
    sender: str
    sender_address: str | None = None
    receiver: str | None = None
    receiver_address: str | None = None
    department_id: str | None = None
    branch: str = "main"
    priority: DocumentPriority = DocumentPriority.MEDIUM
    status: DocumentStatus = DocumentStatus.RECEIVED
    date_received: datetime | None = None
    date_sent: datetime | None = None
    due_date: datetime | None = None
    content: str | None = None
    remarks: str | None = None
    created_by: str | None = None
    assigned_to: str | None = None
    created_at: datetime
    updated_at: datetime
    departments: DepartmentRef | None = None

    def get_department_name(self, fallback: str = "Unknown") -> str:
        return self.departments.name if self.departments and self.departments.name else fallback


class DocumentCreate(BaseModel):
    """Caller-supplied fields for a new document.

    Every field is optional here so that missing required values surface as a
    validation failure of the access layer rather than a model error.
    """

    model_config = ConfigDict(extra="ignore")

    reference_number: str | None = None
    type: DocumentType | None = None
    subject: str | None = None
    sender: str | None = None
    sender_address: str | None = None
    receiver: str | None = None
    receiver_address: str | None = None
    department_id: str | None = None
    branch: str | None = None
    priority: DocumentPriority | None = None
    status: DocumentStatus | None = None
    date_received: datetime | None = None
    date_sent: datetime | None = None
    due_date: datetime | None = None
    content: str | None = None
    remarks: str | None = None
    created_by: str | None = None
    assigned_to: str | None = None


class DocumentUpdate(BaseModel):
    """Partial patch for an existing document.

    Use model_dump(exclude_unset=True) so unspecified fields stay unchanged in the store.
    """

    model_config = ConfigDict(extra="forbid")

    reference_number: str | None = None
    type: DocumentType | None = None
    subject: str | None = None
    sender: str | None = None
    sender_address: str | None = None
    receiver: str | None = None
    receiver_address: str | None = None
    department_id: str | None = None
    branch: str | None = None
    priority: DocumentPriority | None = None
    status: DocumentStatus | None = None
    date_received: datetime | None = None
    date_sent: datetime | None = None
    due_date: datetime | None = None
    content: str | None = None
    remarks: str | None = None
    assigned_to: str | None = None
