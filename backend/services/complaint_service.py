import uuid
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from core.exceptions import NotFoundError, ValidationError
from models.complaints import Complaint, ComplaintCategory, ComplaintStatus
from repositories.complaint_repository import ComplaintRepository
from services.guard import Action, Principal, authorize

logger = logging.getLogger(__name__)


@dataclass
class ComplaintStats:
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    resolved: int = 0
    by_category: Dict[str, int] = field(default_factory=dict)


def _parse_enum(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label} '{value}'. Allowed: {allowed}")


def parse_category(value) -> ComplaintCategory:
    return _parse_enum(ComplaintCategory, value, "category")


def parse_status(value) -> ComplaintStatus:
    return _parse_enum(ComplaintStatus, value, "status")


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


def build_complaint(owner_id: uuid.UUID, category, title, description) -> Complaint:
    """
    Validate raw input and build a new Pending complaint owned by owner_id.

    Raises ValidationError if any field is missing or the category is unknown.
    """
    if _is_blank(category) or _is_blank(title) or _is_blank(description):
        raise ValidationError("Please provide all required fields")

    return Complaint(
        owner_id=owner_id,
        category=parse_category(category),
        title=title.strip(),
        description=description,
        status=ComplaintStatus.pending,
        admin_remarks="",
    )


class ComplaintService:
    def __init__(self, repository: ComplaintRepository):
        self.repository = repository

    def _load(self, complaint_id: uuid.UUID) -> Complaint:
        complaint = self.repository.find_by_id(complaint_id)
        if not complaint:
            raise NotFoundError()
        return complaint

    def _guarded_load(self, action: Action, principal: Optional[Principal], complaint_id: uuid.UUID) -> Complaint:
        # principal-only rules first, so role failures never leak existence
        authorize(action, principal)
        complaint = self._load(complaint_id)
        authorize(action, principal, complaint)
        return complaint

    def create(self, principal: Optional[Principal], category, title, description) -> Complaint:
        authorize(Action.create, principal)
        complaint = build_complaint(principal.id, category, title, description)
        self.repository.insert(complaint)
        logger.info("Complaint %s created by %s", complaint.id, principal.id)
        return complaint

    def get(self, principal: Optional[Principal], complaint_id: uuid.UUID) -> Complaint:
        return self._guarded_load(Action.read, principal, complaint_id)

    def list_mine(self, principal: Optional[Principal]) -> List[Complaint]:
        authorize(Action.list_mine, principal)
        return self.repository.find_by_owner(principal.id)

    def list_all(self, principal: Optional[Principal], status=None, category=None) -> List[Complaint]:
        authorize(Action.list_all, principal)
        return self.repository.find_all(
            status=None if _is_blank(status) else parse_status(status),
            category=None if _is_blank(category) else parse_category(category),
        )

    def update_fields(
        self,
        principal: Optional[Principal],
        complaint_id: uuid.UUID,
        category=None,
        title=None,
        description=None,
    ) -> Complaint:
        complaint = self._guarded_load(Action.update_fields, principal, complaint_id)

        patch = {}
        if category is not None:
            if _is_blank(category):
                raise ValidationError("Category cannot be empty")
            patch["category"] = parse_category(category)
        if title is not None:
            if _is_blank(title):
                raise ValidationError("Title cannot be empty")
            patch["title"] = title.strip()
        if description is not None:
            if _is_blank(description):
                raise ValidationError("Description cannot be empty")
            patch["description"] = description

        if not patch:
            return complaint

        complaint = self.repository.update(complaint.id, patch)
        logger.info("Complaint %s fields %s updated by %s", complaint.id, sorted(patch), principal.id)
        return complaint

    def delete(self, principal: Optional[Principal], complaint_id: uuid.UUID) -> None:
        self._guarded_load(Action.delete, principal, complaint_id)
        self.repository.delete(complaint_id)
        logger.info("Complaint %s deleted by %s", complaint_id, principal.id)

    def update_status(
        self,
        principal: Optional[Principal],
        complaint_id: uuid.UUID,
        status,
        admin_remarks: Optional[str] = None,
    ) -> Complaint:
        """
        Set a complaint's status, and optionally replace its admin remarks.

        Any status may follow any other, Resolved -> Pending included. Remarks
        are overwritten wholesale when given and left alone when None.
        """
        authorize(Action.update_status, principal)
        if _is_blank(status):
            raise ValidationError("Please provide status")
        new_status = parse_status(status)

        complaint = self._load(complaint_id)
        authorize(Action.update_status, principal, complaint)

        patch = {"status": new_status}
        if admin_remarks is not None:
            patch["admin_remarks"] = admin_remarks

        previous = complaint.status
        complaint = self.repository.update(complaint.id, patch)
        logger.info(
            "Complaint %s status %s -> %s by %s",
            complaint.id, previous.value, new_status.value, principal.id,
        )
        return complaint

    def stats(self, principal: Optional[Principal]) -> ComplaintStats:
        authorize(Action.stats, principal)

        by_status = self.repository.count_grouped_by("status")
        by_category = self.repository.count_grouped_by("category")

        stats = ComplaintStats(
            pending=by_status.get(ComplaintStatus.pending, 0),
            in_progress=by_status.get(ComplaintStatus.in_progress, 0),
            resolved=by_status.get(ComplaintStatus.resolved, 0),
            by_category={
                ComplaintCategory(category).value: total
                for category, total in by_category.items()
                if total > 0
            },
        )
        stats.total = stats.pending + stats.in_progress + stats.resolved
        return stats
