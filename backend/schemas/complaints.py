import uuid
from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict
from models.complaints import ComplaintCategory, ComplaintStatus

# Request bodies take plain optional strings; the service validates them so
# that missing or unknown values come back as 400 rather than 422.


class ComplaintCreate(BaseModel):
    category: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


class ComplaintUpdate(BaseModel):
    category: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


class ComplaintStatusUpdate(BaseModel):
    status: Optional[str] = None
    admin_remarks: Optional[str] = None


# Response schema
class OwnerRead(BaseModel):
    id: uuid.UUID
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class ComplaintRead(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    category: ComplaintCategory
    title: str
    description: str
    status: ComplaintStatus
    admin_remarks: str
    created_at: datetime
    updated_at: datetime
    owner: Optional[OwnerRead] = None

    model_config = ConfigDict(from_attributes=True)


class ComplaintMessage(BaseModel):
    message: str
    complaint: ComplaintRead


class ComplaintStatsRead(BaseModel):
    total: int
    pending: int
    in_progress: int
    resolved: int
    by_category: Dict[str, int]

    model_config = ConfigDict(from_attributes=True)
