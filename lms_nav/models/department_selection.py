# lms_nav/models/department_selection.py

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlmodel import Column, Field, SQLModel


class DepartmentSelection(SQLModel, table=True):
    """Last department a user committed a switch to."""

    __tablename__ = "department_selections"

    user_id: str = Field(
        sa_column=Column(String(128), primary_key=True)
    )

    department_id: str = Field(
        sa_column=Column(String(128), nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
