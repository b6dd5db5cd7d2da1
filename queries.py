"""Database access for the student-facing API.

Every function receives the requesting :class:`security.Principal`
explicitly and scopes its query to ``principal.id`` where the data is
owned by a student.
"""
import logging
from datetime import date, datetime

from sqlalchemy import and_, func, insert, literal, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import aliased

from errors import ActivityFull, AlreadySubscribed, Conflict, NotAssignedToRoom, NotFound
from extensions import db
from models import (
    Activity,
    ActivitySubscription,
    Announcement,
    AttendanceLog,
    ClearanceProcess,
    Complaint,
    MaintenanceRequest,
    PermissionRequest,
    Room,
    Student,
)

logger = logging.getLogger(__name__)


#-------------------------------------------------------
# Student
def get_profile(principal):
    """Student row and its room (``None`` when unassigned) in one outer join."""
    row = (
        db.session.query(Student, Room)
        .outerjoin(Room, Student.room_id == Room.id)
        .filter(Student.id == principal.id)
        .first()
    )
    if row is None:
        raise NotFound("Student not found")
    return row


def get_student_room_id(principal):
    room_id = db.session.query(Student.room_id).filter(Student.id == principal.id).scalar()
    if room_id is None:
        raise NotAssignedToRoom()
    return room_id


def get_student(principal):
    student = db.session.get(Student, principal.id)
    if student is None:
        raise NotFound("Student not found")
    return student


def update_photo(student, photo_url):
    student.photo_url = photo_url
    db.session.commit()
    logger.info("Photo updated for student %s", student.id)
    return student


def list_attendance(principal, filters):
    query = AttendanceLog.query.filter(AttendanceLog.student_id == principal.id)

    if "date" in filters:
        query = query.filter(AttendanceLog.date == filters["date"])
    if "month_start" in filters:
        query = query.filter(AttendanceLog.date.between(filters["month_start"], filters["month_end"]))
    if "status" in filters:
        query = query.filter(AttendanceLog.status == filters["status"])

    return query.order_by(AttendanceLog.date.desc(), AttendanceLog.id.desc()).all()


def get_clearance(principal):
    return ClearanceProcess.query.filter_by(student_id=principal.id).first()


def initiate_clearance(principal):
    if get_clearance(principal) is not None:
        raise Conflict("Clearance process already initiated")

    clearance = ClearanceProcess(student_id=principal.id)
    db.session.add(clearance)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Clearance process already initiated")

    logger.info("Clearance initiated for student %s", principal.id)
    return clearance


def mark_daily_absences(day=None):
    """Insert an ``absent`` row for every active student with no record for ``day``."""
    day = day or date.today()
    already_logged = (
        select(AttendanceLog.id)
        .where(AttendanceLog.student_id == Student.id, AttendanceLog.date == day)
        .exists()
    )
    missing = (
        select(Student.id, literal(day, type_=db.Date), literal("absent"))
        .where(Student.is_suspended.is_(False), ~already_logged)
    )
    stmt = insert(AttendanceLog).from_select(["student_id", "date", "status"], missing)

    result = db.session.execute(stmt)
    db.session.commit()
    return result.rowcount


#-------------------------------------------------------
# Complaints
def list_complaints(principal, filters):
    query = Complaint.query.filter(Complaint.student_id == principal.id)

    if filters.get("status"):
        query = query.filter(Complaint.status == filters["status"])
    if filters.get("type"):
        query = query.filter(Complaint.type == filters["type"])

    return query.order_by(Complaint.created_at.desc(), Complaint.id.desc()).all()


def create_complaint(principal, payload):
    complaint = Complaint(student_id=principal.id, status="pending", **payload)
    db.session.add(complaint)
    db.session.commit()
    logger.info("Complaint %s submitted by student %s", complaint.id, principal.id)
    return complaint


#-------------------------------------------------------
# Maintenance
def list_maintenance(principal, filters):
    room_id = get_student_room_id(principal)
    query = MaintenanceRequest.query.filter(MaintenanceRequest.room_id == room_id)

    if filters.get("status"):
        query = query.filter(MaintenanceRequest.status == filters["status"])
    if filters.get("category"):
        query = query.filter(MaintenanceRequest.category == filters["category"])

    return query.order_by(MaintenanceRequest.created_at.desc(), MaintenanceRequest.id.desc()).all()


def create_maintenance(principal, payload):
    room_id = get_student_room_id(principal)
    req = MaintenanceRequest(student_id=principal.id, room_id=room_id, status="open", **payload)
    db.session.add(req)
    db.session.commit()
    logger.info("Maintenance request %s opened for room %s", req.id, room_id)
    return req


#-------------------------------------------------------
# Permissions
def list_permissions(principal, filters):
    query = PermissionRequest.query.filter(PermissionRequest.student_id == principal.id)

    if filters.get("status"):
        query = query.filter(PermissionRequest.status == filters["status"])
    if filters.get("type"):
        query = query.filter(PermissionRequest.type == filters["type"])

    # Sắp xếp theo ngày bắt đầu gần nhất trước
    return query.order_by(PermissionRequest.start_date.asc(), PermissionRequest.id.asc()).all()


def create_permission(principal, payload):
    permission = PermissionRequest(student_id=principal.id, status="pending", **payload)
    db.session.add(permission)
    db.session.commit()
    logger.info("Permission request %s submitted by student %s", permission.id, principal.id)
    return permission


#-------------------------------------------------------
# Activities
def _participant_counts():
    return (
        db.session.query(
            ActivitySubscription.activity_id.label("activity_id"),
            func.count(ActivitySubscription.id).label("participant_count"),
        )
        .group_by(ActivitySubscription.activity_id)
        .subquery()
    )


def list_activities(principal, filters, now=None):
    """Upcoming activities with ``participant_count`` and ``is_subscribed`` per row."""
    now = now or datetime.now()
    counts = _participant_counts()
    mine = aliased(ActivitySubscription)
    student_id = principal.id if principal.is_student else None

    query = (
        db.session.query(
            Activity,
            func.coalesce(counts.c.participant_count, 0).label("participant_count"),
            mine.id.isnot(None).label("is_subscribed"),
        )
        .outerjoin(counts, counts.c.activity_id == Activity.id)
        .outerjoin(mine, and_(mine.activity_id == Activity.id, mine.student_id == student_id))
        .filter(Activity.event_date > now)
        .order_by(Activity.event_date.asc(), Activity.id.asc())
    )
    if filters.get("limit"):
        query = query.limit(filters["limit"])
    return query.all()


def count_participants(activity_id):
    return (
        db.session.query(func.count(ActivitySubscription.id))
        .filter(ActivitySubscription.activity_id == activity_id)
        .scalar()
    )


def find_subscription(principal, activity_id):
    return ActivitySubscription.query.filter_by(student_id=principal.id, activity_id=activity_id).first()


def _insert_if_capacity_left(principal, activity_id):
    """Insert the subscription only while the activity still has room, in one statement."""
    current = (
        select(func.count(ActivitySubscription.id))
        .where(ActivitySubscription.activity_id == activity_id)
        .scalar_subquery()
    )
    guarded = (
        select(literal(principal.id, type_=db.Integer), Activity.id)
        .where(
            Activity.id == activity_id,
            or_(Activity.max_participants.is_(None), current < Activity.max_participants),
        )
    )
    stmt = insert(ActivitySubscription).from_select(["student_id", "activity_id"], guarded)
    return db.session.execute(stmt).rowcount


def subscribe(principal, activity_id):
    activity = db.session.get(Activity, activity_id)
    if activity is None:
        raise NotFound("Activity not found")

    current = count_participants(activity_id)
    if activity.max_participants is not None and current >= activity.max_participants:
        raise ActivityFull(current, activity.max_participants)

    if find_subscription(principal, activity_id) is not None:
        raise AlreadySubscribed()

    try:
        inserted = _insert_if_capacity_left(principal, activity_id)
        if not inserted:
            db.session.rollback()
            raise ActivityFull(count_participants(activity_id), activity.max_participants)
        db.session.commit()
    except IntegrityError:
        # Request song song đã đăng ký trước
        db.session.rollback()
        raise AlreadySubscribed()

    logger.info("Student %s subscribed to activity %s", principal.id, activity_id)
    return activity, find_subscription(principal, activity_id)


def unsubscribe(principal, activity_id):
    deleted = ActivitySubscription.query.filter_by(
        student_id=principal.id, activity_id=activity_id
    ).delete(synchronize_session=False)
    if not deleted:
        db.session.rollback()
        raise NotFound("Subscription not found or already cancelled")
    db.session.commit()
    logger.info("Student %s unsubscribed from activity %s", principal.id, activity_id)


#-------------------------------------------------------
# Announcements
def list_announcements(filters):
    query = Announcement.query

    if filters.get("category"):
        query = query.filter(func.lower(Announcement.category) == filters["category"].lower())

    query = query.order_by(Announcement.created_at.desc(), Announcement.id.desc())
    if filters.get("limit"):
        query = query.limit(filters["limit"])
    return query.all()
