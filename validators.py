"""Request validation.

Each function takes the raw JSON body, query args or uploaded files and returns
clean values, or raises a :class:`errors.ValidationError` subclass. None of
them touch the database.
"""
import calendar
import re
from datetime import date, datetime

from errors import (
    DateNotFuture,
    InvalidDate,
    InvalidDateRange,
    InvalidEnum,
    MissingField,
    TooLong,
    ValidationError,
)
from models.attendance_log import ATTENDANCE_STATUSES
from models.complaint import COMPLAINT_STATUSES, COMPLAINT_TYPES
from models.maintenance_request import MAINTENANCE_CATEGORIES, MAINTENANCE_STATUSES
from models.permission import PERMISSION_STATUSES, PERMISSION_TYPES

TITLE_MAX_LENGTH = 200
TEXT_MAX_LENGTH = 5000
# INTEGER column upper bound
MAX_INT = 2**31 - 1

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")
_INT_RE = re.compile(r"^[0-9]+$")


#-------------------------------------------------------
# Field-level checks
def require(data, *fields):
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    missing = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    if missing:
        raise MissingField(missing)


def text(data, field, max_length):
    value = data[field]
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    value = value.strip()
    if len(value) > max_length:
        raise TooLong(field, max_length)
    return value


def normalize_choice(value):
    # "In Progress" -> "in_progress"
    return "_".join(value.strip().lower().split())


def choice(value, field, allowed):
    if not isinstance(value, str) or normalize_choice(value) not in allowed:
        raise InvalidEnum(field, allowed)
    return normalize_choice(value)


def parse_date(value, field):
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise InvalidDate(field)
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDate(field)


def parse_month(value, field="month"):
    """Return the first and last day of a ``YYYY-MM`` month."""
    if not isinstance(value, str) or not _MONTH_RE.match(value.strip()):
        raise InvalidDate(field, "YYYY-MM")
    year, month = (int(part) for part in value.strip().split("-"))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidDate(field, "YYYY-MM")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def positive_int(value, field):
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a positive integer")
    if isinstance(value, str) and _INT_RE.match(value.strip()):
        value = int(value.strip())
    if not isinstance(value, int) or not 0 < value <= MAX_INT:
        raise ValidationError(f"{field} must be a positive integer")
    return value


def optional_filter(args, field, allowed):
    value = args.get(field)
    if value is None or value == "":
        return None
    return choice(value, field, allowed)


def optional_limit(args):
    value = args.get("limit")
    if value is None or value == "":
        return None
    return positive_int(value, "limit")


#-------------------------------------------------------
# Profile photo
def allowed_file(filename, allowed_extensions):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed_extensions


def photo_upload(files, allowed_extensions):
    """Return the uploaded ``photo`` file and its lowercased extension."""
    photo = files.get("photo")
    if photo is None or not photo.filename:
        raise MissingField(["photo"])
    if not allowed_file(photo.filename, allowed_extensions):
        raise ValidationError("Only image files are allowed")
    return photo, photo.filename.rsplit('.', 1)[1].lower()


#-------------------------------------------------------
# Attendance
def attendance_filters(args):
    filters = {}
    if args.get("date"):
        filters["date"] = parse_date(args["date"], "date")
    if args.get("month"):
        filters["month_start"], filters["month_end"] = parse_month(args["month"])
    if args.get("status"):
        filters["status"] = choice(args["status"], "status", ATTENDANCE_STATUSES)
    return filters


#-------------------------------------------------------
# Complaints
def complaint_filters(args):
    return {
        "status": optional_filter(args, "status", COMPLAINT_STATUSES),
        "type": optional_filter(args, "type", COMPLAINT_TYPES),
    }


def complaint_payload(data):
    require(data, "title", "description", "type")

    is_secret = data.get("is_secret", False)
    if is_secret is None:
        is_secret = False
    if not isinstance(is_secret, bool):
        raise ValidationError("is_secret must be a boolean")

    return {
        "title": text(data, "title", TITLE_MAX_LENGTH),
        "description": text(data, "description", TEXT_MAX_LENGTH),
        "type": choice(data["type"], "type", COMPLAINT_TYPES),
        "is_secret": is_secret,
    }


#-------------------------------------------------------
# Maintenance
def maintenance_filters(args):
    return {
        "status": optional_filter(args, "status", MAINTENANCE_STATUSES),
        "category": optional_filter(args, "category", MAINTENANCE_CATEGORIES),
    }


def maintenance_payload(data):
    require(data, "category", "description")
    return {
        "category": choice(data["category"], "category", MAINTENANCE_CATEGORIES),
        "description": text(data, "description", TEXT_MAX_LENGTH),
    }


#-------------------------------------------------------
# Permissions
def permission_filters(args):
    return {
        "status": optional_filter(args, "status", PERMISSION_STATUSES),
        "type": optional_filter(args, "type", PERMISSION_TYPES),
    }


def permission_payload(data, today=None):
    require(data, "type", "start_date", "end_date", "reason")
    today = today or date.today()

    # type is checked before the dates, so a bad type is reported first
    permission_type = choice(data["type"], "type", PERMISSION_TYPES)
    start_date = parse_date(data["start_date"], "start_date")
    end_date = parse_date(data["end_date"], "end_date")
    reason = text(data, "reason", TEXT_MAX_LENGTH)

    if start_date <= today:
        raise DateNotFuture("start_date")
    if end_date < start_date:
        raise InvalidDateRange()

    return {
        "type": permission_type,
        "start_date": start_date,
        "end_date": end_date,
        "reason": reason,
    }


#-------------------------------------------------------
# Activities & announcements
def activity_reference(data):
    require(data, "activity_id")
    return positive_int(data["activity_id"], "activity_id")


def activity_filters(args):
    return {"limit": optional_limit(args)}


def announcement_filters(args):
    category = args.get("category")
    return {
        "limit": optional_limit(args),
        "category": category.strip() if category and category.strip() else None,
    }
