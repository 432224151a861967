import uuid
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship
from models.user import User
import enum


class ComplaintCategory(str, enum.Enum):
    academics = "Academics"
    hostel = "Hostel"
    canteen = "Canteen"
    infrastructure = "Infrastructure"
    transport = "Transport"
    others = "Others"


class ComplaintStatus(str, enum.Enum):
    pending = "Pending"           # Submitted, owner may still edit or withdraw it
    in_progress = "In Progress"   # Admin is working on it
    resolved = "Resolved"         # Action taken / closed


class Complaint(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True, nullable=False)
    category: ComplaintCategory = Field(index=True)
    title: str
    description: str
    status: ComplaintStatus = Field(default=ComplaintStatus.pending, index=True)
    admin_remarks: str = Field(default="")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )

    owner: Optional[User] = Relationship()
