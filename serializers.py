def _iso(value):
    return value.isoformat() if value is not None else None


def room_to_dict(room):
    if room is None:
        return None
    return {
        "id": room.id,
        "room_number": room.room_number,
        "building": room.building,
        "floor": room.floor,
        "capacity": room.capacity,
    }


def profile_to_dict(student, room):
    return {
        "id": student.id,
        "national_id": student.national_id,
        "full_name": student.full_name,
        "student_id": student.student_id,
        "college": student.college,
        "academic_year": student.academic_year,
        "photo_url": student.photo_url,
        "housing_type": student.housing_type,
        "is_suspended": student.is_suspended,
        "room": room_to_dict(room),
        "created_at": _iso(student.created_at),
        "updated_at": _iso(student.updated_at),
    }


def attendance_to_dict(log):
    return {
        "id": log.id,
        "student_id": log.student_id,
        "date": _iso(log.date),
        "status": log.status,
        "created_at": _iso(log.created_at),
    }


def clearance_to_dict(clearance, student_id):
    if clearance is None:
        return {
            "student_id": student_id,
            "status": "not_initiated",
            "room_check_passed": False,
            "keys_returned": False,
            "percentage": 0,
            "initiated_at": None,
        }
    return {
        "id": clearance.id,
        "student_id": clearance.student_id,
        "status": clearance.status,
        "room_check_passed": clearance.room_check_passed,
        "keys_returned": clearance.keys_returned,
        "percentage": clearance.percentage,
        "initiated_at": _iso(clearance.initiated_at),
        "updated_at": _iso(clearance.updated_at),
    }


def complaint_to_dict(complaint):
    return {
        "id": complaint.id,
        "student_id": complaint.student_id,
        "title": complaint.title,
        "description": complaint.description,
        "type": complaint.type,
        "status": complaint.status,
        "is_secret": complaint.is_secret,
        "admin_reply": complaint.admin_reply,
        "created_at": _iso(complaint.created_at),
        "updated_at": _iso(complaint.updated_at),
    }


def maintenance_to_dict(req):
    return {
        "id": req.id,
        "student_id": req.student_id,
        "room_id": req.room_id,
        "category": req.category,
        "description": req.description,
        "status": req.status,
        "supervisor_reply": req.supervisor_reply,
        "created_at": _iso(req.created_at),
        "updated_at": _iso(req.updated_at),
    }


def permission_to_dict(permission):
    return {
        "id": permission.id,
        "student_id": permission.student_id,
        "type": permission.type,
        "start_date": _iso(permission.start_date),
        "end_date": _iso(permission.end_date),
        "reason": permission.reason,
        "status": permission.status,
        "admin_remarks": permission.admin_remarks,
        "created_at": _iso(permission.created_at),
        "updated_at": _iso(permission.updated_at),
    }


def activity_to_dict(activity, participant_count=0, is_subscribed=False):
    return {
        "id": activity.id,
        "title": activity.title,
        "description": activity.description,
        "location": activity.location,
        "event_date": _iso(activity.event_date),
        "max_participants": activity.max_participants,
        "participant_count": int(participant_count or 0),
        "is_subscribed": bool(is_subscribed),
        "created_at": _iso(activity.created_at),
    }


def subscription_to_dict(subscription):
    return {
        "id": subscription.id,
        "student_id": subscription.student_id,
        "activity_id": subscription.activity_id,
        "created_at": _iso(subscription.created_at),
    }


def announcement_to_dict(ann):
    return {
        "id": ann.id,
        "title": ann.title,
        "body": ann.body,
        "category": ann.category,
        "priority": ann.priority,
        "created_at": _iso(ann.created_at),
    }
