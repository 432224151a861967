import uuid
import pytest
from conftest import principal_for
from core.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from models.complaints import ComplaintCategory, ComplaintStatus
from services.complaint_service import build_complaint, parse_category, parse_status


# --- Entity & validation ---

def test_build_complaint_defaults():
    owner_id = uuid.uuid4()
    complaint = build_complaint(owner_id, "Hostel", "  Leaky faucet ", "Room 204")

    assert complaint.owner_id == owner_id
    assert complaint.category == ComplaintCategory.hostel
    assert complaint.title == "Leaky faucet"
    assert complaint.status == ComplaintStatus.pending
    assert complaint.admin_remarks == ""


@pytest.mark.parametrize(
    "category,title,description",
    [
        (None, "Title", "Description"),
        ("Hostel", "", "Description"),
        ("Hostel", "Title", "   "),
        ("", "Title", "Description"),
    ],
)
def test_build_complaint_requires_all_fields(category, title, description):
    with pytest.raises(ValidationError):
        build_complaint(uuid.uuid4(), category, title, description)


def test_build_complaint_rejects_unknown_category():
    with pytest.raises(ValidationError) as exc:
        build_complaint(uuid.uuid4(), "Parking", "Title", "Description")
    assert "Parking" in exc.value.detail


def test_parsers_accept_display_values():
    assert parse_status("In Progress") == ComplaintStatus.in_progress
    assert parse_category("Others") == ComplaintCategory.others
    with pytest.raises(ValidationError):
        parse_status("Closed")


# --- Lifecycle ---

def test_create_sets_owner_and_pending(service, student):
    complaint = service.create(principal_for(student), "Canteen", "Cold food", "Lunch was cold")

    assert complaint.owner_id == student.id
    assert complaint.status == ComplaintStatus.pending
    assert complaint.admin_remarks == ""
    assert complaint.created_at is not None


def test_create_requires_principal(service):
    with pytest.raises(UnauthenticatedError):
        service.create(None, "Canteen", "Cold food", "Lunch was cold")


def test_get_missing_complaint(service, admin):
    with pytest.raises(NotFoundError):
        service.get(principal_for(admin), uuid.uuid4())


def test_list_mine_is_scoped_to_caller(service, student, other_student, make_complaint):
    mine = make_complaint(student)
    make_complaint(other_student)

    result = service.list_mine(principal_for(student))

    assert [c.id for c in result] == [mine.id]


def test_list_all_requires_admin(service, student):
    with pytest.raises(ForbiddenError):
        service.list_all(principal_for(student))


def test_list_all_filters(service, admin, student, make_complaint):
    make_complaint(student, category=ComplaintCategory.hostel)
    target = make_complaint(student, category=ComplaintCategory.canteen, status=ComplaintStatus.resolved)
    make_complaint(student, category=ComplaintCategory.canteen)

    result = service.list_all(principal_for(admin), status="Resolved", category="Canteen")
    assert [c.id for c in result] == [target.id]

    assert len(service.list_all(principal_for(admin), category="Canteen")) == 2
    assert len(service.list_all(principal_for(admin))) == 3


def test_list_all_rejects_unknown_filter(service, admin):
    with pytest.raises(ValidationError):
        service.list_all(principal_for(admin), status="Closed")


def test_owner_updates_pending_complaint(service, student, make_complaint):
    complaint = make_complaint(student)

    updated = service.update_fields(
        principal_for(student), complaint.id, category="Transport", title=" Late bus "
    )

    assert updated.category == ComplaintCategory.transport
    assert updated.title == "Late bus"
    assert updated.description == "Details"


def test_update_rejects_blank_and_unknown_values(service, student, make_complaint):
    complaint = make_complaint(student)

    with pytest.raises(ValidationError):
        service.update_fields(principal_for(student), complaint.id, title="  ")
    with pytest.raises(ValidationError):
        service.update_fields(principal_for(student), complaint.id, category="Parking")


def test_update_with_no_fields_is_a_no_op(service, student, make_complaint):
    complaint = make_complaint(student, title="Unchanged")

    result = service.update_fields(principal_for(student), complaint.id)

    assert result.title == "Unchanged"


@pytest.mark.parametrize("status", [ComplaintStatus.in_progress, ComplaintStatus.resolved])
def test_owner_cannot_modify_outside_pending(service, student, make_complaint, status):
    complaint = make_complaint(student, status=status)

    with pytest.raises(InvalidStateError):
        service.update_fields(principal_for(student), complaint.id, title="New")
    with pytest.raises(InvalidStateError):
        service.delete(principal_for(student), complaint.id)


@pytest.mark.parametrize("status", list(ComplaintStatus))
def test_non_owner_is_forbidden_regardless_of_status(service, student, other_student, make_complaint, status):
    complaint = make_complaint(student, status=status)
    intruder = principal_for(other_student)

    with pytest.raises(ForbiddenError):
        service.get(intruder, complaint.id)
    with pytest.raises(ForbiddenError):
        service.update_fields(intruder, complaint.id, title="Mine now")
    with pytest.raises(ForbiddenError):
        service.delete(intruder, complaint.id)


def test_owner_deletes_pending_complaint(service, student, make_complaint):
    complaint = make_complaint(student)

    service.delete(principal_for(student), complaint.id)

    with pytest.raises(NotFoundError):
        service.get(principal_for(student), complaint.id)


def test_status_update_requires_admin(service, student, make_complaint):
    complaint = make_complaint(student)
    with pytest.raises(ForbiddenError):
        service.update_status(principal_for(student), complaint.id, "Resolved")


def test_status_update_forbidden_before_lookup(service, student):
    # role failure wins over a missing complaint
    with pytest.raises(ForbiddenError):
        service.update_status(principal_for(student), uuid.uuid4(), "Resolved")


def test_status_update_validates_status(service, admin, student, make_complaint):
    complaint = make_complaint(student)
    with pytest.raises(ValidationError):
        service.update_status(principal_for(admin), complaint.id, None)
    with pytest.raises(ValidationError):
        service.update_status(principal_for(admin), complaint.id, "Closed")


def test_status_update_missing_complaint(service, admin):
    with pytest.raises(NotFoundError):
        service.update_status(principal_for(admin), uuid.uuid4(), "Resolved")


def test_admin_can_move_status_backwards(service, admin, student, make_complaint):
    complaint = make_complaint(student)
    acting = principal_for(admin)

    service.update_status(acting, complaint.id, "Resolved")
    reverted = service.update_status(acting, complaint.id, "Pending")

    assert reverted.status == ComplaintStatus.pending


def test_remarks_overwritten_only_when_given(service, admin, student, make_complaint):
    complaint = make_complaint(student)
    acting = principal_for(admin)

    service.update_status(acting, complaint.id, "In Progress", admin_remarks="Looking into it")
    kept = service.update_status(acting, complaint.id, "Resolved")
    assert kept.admin_remarks == "Looking into it"

    replaced = service.update_status(acting, complaint.id, "Resolved", admin_remarks="Fixed")
    assert replaced.admin_remarks == "Fixed"

    cleared = service.update_status(acting, complaint.id, "Resolved", admin_remarks="")
    assert cleared.admin_remarks == ""


# --- Aggregation ---

def test_stats_requires_admin(service, student):
    with pytest.raises(ForbiddenError):
        service.stats(principal_for(student))


def test_stats_on_empty_store(service, admin):
    stats = service.stats(principal_for(admin))

    assert stats.total == 0
    assert stats.pending == stats.in_progress == stats.resolved == 0
    assert stats.by_category == {}


def test_stats_dashboard_scenario(service, admin, student, make_complaint):
    hostel, canteen = ComplaintCategory.hostel, ComplaintCategory.canteen
    make_complaint(student, category=hostel, status=ComplaintStatus.pending)
    make_complaint(student, category=hostel, status=ComplaintStatus.in_progress)
    make_complaint(student, category=canteen, status=ComplaintStatus.pending)
    make_complaint(student, category=canteen, status=ComplaintStatus.pending)
    make_complaint(student, category=canteen, status=ComplaintStatus.resolved)

    stats = service.stats(principal_for(admin))

    assert (stats.total, stats.pending, stats.in_progress, stats.resolved) == (5, 3, 1, 1)
    assert stats.by_category == {"Hostel": 2, "Canteen": 3}


def test_stats_total_matches_after_status_changes(service, admin, student, make_complaint):
    complaints = [make_complaint(student) for _ in range(4)]
    acting = principal_for(admin)
    for complaint, status in zip(complaints, ["In Progress", "Resolved", "Pending", "Resolved"]):
        service.update_status(acting, complaint.id, status)
    service.update_status(acting, complaints[1].id, "Pending")

    stats = service.stats(acting)

    assert stats.total == 4
    assert stats.total == stats.pending + stats.in_progress + stats.resolved
    assert (stats.pending, stats.in_progress, stats.resolved) == (2, 1, 1)


# --- End to end ---

def test_student_complaint_lifecycle(service, student, other_student, admin):
    a, b, staff = principal_for(student), principal_for(other_student), principal_for(admin)

    complaint = service.create(a, "Hostel", "Leaky faucet", "Room 204")

    mine = service.list_mine(a)
    assert len(mine) == 1
    assert mine[0].status == ComplaintStatus.pending

    with pytest.raises(ForbiddenError):
        service.get(b, complaint.id)

    service.update_status(staff, complaint.id, "In Progress", admin_remarks="Plumber dispatched")

    seen = service.get(a, complaint.id)
    assert seen.status == ComplaintStatus.in_progress
    assert seen.admin_remarks == "Plumber dispatched"

    with pytest.raises(InvalidStateError):
        service.delete(a, complaint.id)


def test_errors_fall_back_to_default_detail():
    assert NotFoundError().detail == "Complaint not found"
    assert ForbiddenError(None).detail == "Access denied"
    assert ValidationError("Title cannot be empty").detail == "Title cannot be empty"
