import uuid
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select
from core.exceptions import InternalError, NotFoundError
from models.complaints import Complaint, ComplaintCategory, ComplaintStatus

logger = logging.getLogger(__name__)

GROUPABLE_FIELDS = {"status", "category"}


class ComplaintRepository:
    """SQLModel-backed store for complaints. One instance per request session."""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self, complaint: Optional[Complaint] = None):
        try:
            self.session.commit()
            if complaint is not None:
                self.session.refresh(complaint)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Complaint write failed: %s", e)
            raise InternalError() from e

    def _filtered(self, statement, status: Optional[ComplaintStatus], category: Optional[ComplaintCategory]):
        if status is not None:
            statement = statement.where(Complaint.status == status)
        if category is not None:
            statement = statement.where(Complaint.category == category)
        return statement

    def _fetch(self, statement) -> list:
        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            logger.error("Complaint query failed: %s", e)
            raise InternalError() from e

    def insert(self, complaint: Complaint) -> uuid.UUID:
        self.session.add(complaint)
        self._commit(complaint)
        return complaint.id

    def find_by_id(self, complaint_id: uuid.UUID) -> Optional[Complaint]:
        try:
            return self.session.get(Complaint, complaint_id, options=[selectinload(Complaint.owner)])
        except SQLAlchemyError as e:
            logger.error("Complaint lookup failed: %s", e)
            raise InternalError() from e

    def find_by_owner(self, owner_id: uuid.UUID) -> List[Complaint]:
        statement = (
            select(Complaint)
            .where(Complaint.owner_id == owner_id)
            .order_by(Complaint.created_at.desc())
        )
        return self._fetch(statement)

    def find_all(
        self,
        status: Optional[ComplaintStatus] = None,
        category: Optional[ComplaintCategory] = None,
    ) -> List[Complaint]:
        statement = self._filtered(select(Complaint).options(selectinload(Complaint.owner)), status, category)
        return self._fetch(statement.order_by(Complaint.created_at.desc()))

    def update(self, complaint_id: uuid.UUID, patch: dict) -> Complaint:
        complaint = self.find_by_id(complaint_id)
        if not complaint:
            raise NotFoundError()

        for field, value in patch.items():
            setattr(complaint, field, value)
        complaint.updated_at = datetime.now(timezone.utc)

        self.session.add(complaint)
        self._commit(complaint)
        return complaint

    def delete(self, complaint_id: uuid.UUID) -> None:
        complaint = self.find_by_id(complaint_id)
        if not complaint:
            raise NotFoundError()
        self.session.delete(complaint)
        self._commit()

    def count(
        self,
        status: Optional[ComplaintStatus] = None,
        category: Optional[ComplaintCategory] = None,
    ) -> int:
        statement = self._filtered(select(func.count()).select_from(Complaint), status, category)
        try:
            return self.session.exec(statement).one()
        except SQLAlchemyError as e:
            logger.error("Complaint count failed: %s", e)
            raise InternalError() from e

    def count_grouped_by(self, field: str) -> Dict:
        if field not in GROUPABLE_FIELDS:
            raise ValueError(f"Cannot group complaints by {field!r}")

        column = getattr(Complaint, field)
        statement = select(column, func.count()).group_by(column)
        return {value: total for value, total in self._fetch(statement)}
