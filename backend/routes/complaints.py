import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlmodel import Session
from core.database import get_session
from core.exceptions import ValidationError
from repositories.complaint_repository import ComplaintRepository
from schemas.complaints import (
    ComplaintCreate,
    ComplaintMessage,
    ComplaintRead,
    ComplaintStatsRead,
    ComplaintStatusUpdate,
    ComplaintUpdate,
)
from services.complaint_service import ComplaintService
from services.guard import Principal
from utils.security import get_current_principal

router = APIRouter(tags=["Complaints"])


def get_complaint_service(session: Session = Depends(get_session)) -> ComplaintService:
    return ComplaintService(ComplaintRepository(session))


def parse_complaint_id(complaint_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(complaint_id)
    except ValueError:
        raise ValidationError("Invalid complaint id")


def to_read(complaint) -> ComplaintRead:
    # owner is lazy-loaded, so convert while the request session is still open
    return ComplaintRead.model_validate(complaint)


# Create a complaint
@router.post("/", response_model=ComplaintMessage, status_code=201)
def create_complaint(
    payload: ComplaintCreate,
    principal: Principal = Depends(get_current_principal),
    service: ComplaintService = Depends(get_complaint_service),
):
    complaint = service.create(principal, payload.category, payload.title, payload.description)
    return {"message": "Complaint submitted successfully", "complaint": to_read(complaint)}


# Complaints submitted by the logged-in user, newest first
@router.get("/my", response_model=List[ComplaintRead])
def list_my_complaints(
    principal: Principal = Depends(get_current_principal),
    service: ComplaintService = Depends(get_complaint_service),
):
    return [to_read(complaint) for complaint in service.list_mine(principal)]


# Admin: all complaints, optionally filtered by status and/or category
@router.get("/admin/all", response_model=List[ComplaintRead])
def list_all_complaints(
    status: Optional[str] = None,
    category: Optional[str] = None,
    principal: Principal = Depends(get_current_principal),
    service: ComplaintService = Depends(get_complaint_service),
):
    complaints = service.list_all(principal, status=status, category=category)
    return [to_read(complaint) for complaint in complaints]


# Admin: dashboard counters
@router.get("/admin/stats/dashboard", response_model=ComplaintStatsRead)
def dashboard_stats(
    principal: Principal = Depends(get_current_principal),
    service: ComplaintService = Depends(get_complaint_service),
):
    return ComplaintStatsRead.model_validate(service.stats(principal))


# Admin: set status and remarks
@router.put("/admin/{complaint_id}/status", response_model=ComplaintMessage)
def update_complaint_status(
    complaint_id: str,
    payload: ComplaintStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    service: ComplaintService = Depends(get_complaint_service),
):
    complaint = service.update_status(
        principal,
        parse_complaint_id(complaint_id),
        payload.status,
        admin_remarks=payload.admin_remarks,
    )
    return {"message": "Complaint status updated successfully", "complaint": to_read(complaint)}


@router.get("/{complaint_id}", response_model=ComplaintRead)
def get_complaint_by_id(
    complaint_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ComplaintService = Depends(get_complaint_service),
):
    return to_read(service.get(principal, parse_complaint_id(complaint_id)))


# Owner edits, only while Pending
@router.put("/{complaint_id}", response_model=ComplaintMessage)
def update_complaint(
    complaint_id: str,
    payload: ComplaintUpdate,
    principal: Principal = Depends(get_current_principal),
    service: ComplaintService = Depends(get_complaint_service),
):
    complaint = service.update_fields(
        principal,
        parse_complaint_id(complaint_id),
        category=payload.category,
        title=payload.title,
        description=payload.description,
    )
    return {"message": "Complaint updated successfully", "complaint": to_read(complaint)}


# Owner withdraws, only while Pending
@router.delete("/{complaint_id}")
def delete_complaint(
    complaint_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ComplaintService = Depends(get_complaint_service),
):
    service.delete(principal, parse_complaint_id(complaint_id))
    return {"message": "Complaint deleted successfully"}
