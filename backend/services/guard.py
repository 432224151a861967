"""
Authorization guard for complaint operations.

Every operation is gated by an ordered list of rules looked up in RULES. The
principal carries its role as a plain tag; rules dispatch on that tag rather
than on per-role classes.

Rules that only look at the principal run before the complaint is loaded
(``authorize(action, principal)``), rules that need the complaint run once it
has been found (``authorize(action, principal, complaint)``).
"""
import uuid
import enum
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple
from core.exceptions import ForbiddenError, InvalidStateError, UnauthenticatedError
from models.complaints import Complaint, ComplaintStatus
from models.user import UserRole


@dataclass(frozen=True)
class Principal:
    id: uuid.UUID
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin


class Action(str, enum.Enum):
    create = "create"
    read = "read"
    list_mine = "list_mine"
    list_all = "list_all"
    update_fields = "update_fields"
    delete = "delete"
    update_status = "update_status"
    stats = "stats"


Rule = Callable[[Principal, Optional[Complaint]], None]


def require_admin(principal: Principal, complaint: Optional[Complaint]) -> None:
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")


def require_owner_or_admin(principal: Principal, complaint: Optional[Complaint]) -> None:
    if complaint is None or principal.is_admin:
        return
    if complaint.owner_id != principal.id:
        raise ForbiddenError("Access denied")


def require_owner(principal: Principal, complaint: Optional[Complaint]) -> None:
    if complaint is None:
        return
    if complaint.owner_id != principal.id:
        raise ForbiddenError("Access denied")


def require_pending(principal: Principal, complaint: Optional[Complaint]) -> None:
    if complaint is None:
        return
    if complaint.status != ComplaintStatus.pending:
        raise InvalidStateError("Cannot modify complaint that is not pending")


RULES: Dict[Action, Tuple[Rule, ...]] = {
    Action.create: (),
    Action.read: (require_owner_or_admin,),
    Action.list_mine: (),
    Action.list_all: (require_admin,),
    Action.update_fields: (require_owner, require_pending),
    Action.delete: (require_owner, require_pending),
    Action.update_status: (require_admin,),
    Action.stats: (require_admin,),
}


def authorize(action: Action, principal: Optional[Principal], complaint: Optional[Complaint] = None) -> None:
    """Raise the first error produced by the action's rules, in table order."""
    if principal is None:
        raise UnauthenticatedError()
    for rule in RULES[action]:
        rule(principal, complaint)
