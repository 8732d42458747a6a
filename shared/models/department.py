from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Department(BaseModel):
    """A row of the departments table."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    code: str
    head_name: str | None = None
    head_email: str | None = None
    branch: str = "main"
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
