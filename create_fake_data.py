import logging
import random
from datetime import date, datetime, timedelta
from extensions import db
from app import app
from models import (
    Activity, ActivitySubscription, Announcement, AttendanceLog, Complaint,
    MaintenanceRequest, PermissionRequest, Student,
)
from models.complaint import COMPLAINT_TYPES
from models.maintenance_request import MAINTENANCE_CATEGORIES, MAINTENANCE_STATUSES

logger = logging.getLogger("create_fake_data")

# ====== CONFIG ======
ATTENDANCE_DAYS = 30   # số ngày điểm danh giả
NUM_ACTIVITIES = 6
# =====================


def create_attendance(students):
    logger.info("Creating attendance logs...")
    today = date.today()
    logs = []
    for student in students:
        for offset in range(1, ATTENDANCE_DAYS + 1):
            day = today - timedelta(days=offset)
            if AttendanceLog.query.filter_by(student_id=student.id, date=day).first():
                continue
            logs.append(AttendanceLog(
                student_id=student.id,
                date=day,
                status=random.choice(["present", "present", "present", "absent"]),
            ))
    db.session.bulk_save_objects(logs)
    db.session.commit()
    logger.info("Created %s attendance logs.", len(logs))


def create_service_records(students):
    logger.info("Creating complaints, maintenance and permission requests...")

    issues = [
        "Leaking tap in the bathroom",
        "Light bulb broken in the corridor",
        "Wi-Fi keeps disconnecting at night",
        "Wardrobe door hinge is loose",
        "Power socket sparks when used",
    ]

    records = []
    for student in students:
        records.append(Complaint(
            student_id=student.id,
            title="Noise Complaint",
            description="Loud noise from the neighbouring room after midnight.",
            type=random.choice(COMPLAINT_TYPES),
            is_secret=random.choice([True, False]),
        ))
        if student.room_id:
            records.append(MaintenanceRequest(
                student_id=student.id,
                room_id=student.room_id,
                category=random.choice(MAINTENANCE_CATEGORIES),
                description=random.choice(issues),
                status=random.choice(MAINTENANCE_STATUSES),
            ))
        start = date.today() + timedelta(days=random.randint(2, 20))
        records.append(PermissionRequest(
            student_id=student.id,
            type=random.choice(["late", "travel"]),
            start_date=start,
            end_date=start + timedelta(days=random.randint(0, 4)),
            reason="Family visit",
        ))

    db.session.add_all(records)
    db.session.commit()
    logger.info("Created %s service records.", len(records))


def create_activities(students):
    logger.info("Creating activities and announcements...")

    titles = ["Weekly Football", "Quran Competition", "Chess Tournament",
              "Blood Donation Day", "Movie Night", "Career Talk"]
    activities = []
    for i in range(NUM_ACTIVITIES):
        activities.append(Activity(
            title=titles[i % len(titles)],
            description="Open to all residents.",
            location=random.choice(["Main Sports Complex", "Hall A", "Library"]),
            event_date=datetime.now() + timedelta(days=random.randint(1, 30), hours=random.randint(0, 12)),
            max_participants=random.choice([None, 10, 20, 50]),
        ))
    db.session.add_all(activities)
    db.session.flush()

    for student in students:
        for activity in random.sample(activities, 2):
            db.session.add(ActivitySubscription(student_id=student.id, activity_id=activity.id))

    db.session.add_all([
        Announcement(title="Welcome", body="Welcome to the new housing term.", category="General"),
        Announcement(title="Water Outage", body="Water will be cut on Friday 9-12.", category="Maintenance",
                     priority="high"),
    ])
    db.session.commit()
    logger.info("Created %s activities.", len(activities))


if __name__ == "__main__":
    with app.app_context():
        logger.info("Seeding fake housing data...")
        db.create_all()

        students = Student.query.all()
        if not students:
            logger.warning("No students found, run create_student.py first.")
        else:
            create_attendance(students)
            create_service_records(students)
            create_activities(students)
            logger.info("Done.")
