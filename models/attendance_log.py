from extensions import db

ATTENDANCE_STATUSES = ("present", "absent")


class AttendanceLog(db.Model):
    __tablename__ = "attendance_logs"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    date = db.Column(db.Date, nullable=False)

    status = db.Column(
        db.Enum(*ATTENDANCE_STATUSES, name="attendance_status"),
        nullable=False
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())

    # Mỗi sinh viên chỉ có một bản ghi mỗi ngày
    __table_args__ = (
        db.UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),
        db.Index("ix_attendance_logs_date", "date"),
    )

    student = db.relationship("Student", back_populates="attendance_logs")
