from extensions import db

COMPLAINT_TYPES = ("general", "urgent")
COMPLAINT_STATUSES = ("pending", "resolved")


class Complaint(db.Model):
    __tablename__ = "complaints"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id", ondelete="CASCADE"), nullable=False)

    title = db.Column(db.String(200), nullable=False)     # tiêu đề ngắn
    description = db.Column(db.Text, nullable=False)
    admin_reply = db.Column(db.Text)                      # phản hồi của admin
    is_secret = db.Column(db.Boolean, nullable=False, default=False)

    type = db.Column(
        db.Enum(*COMPLAINT_TYPES, name="complaint_types"),
        nullable=False
    )
    status = db.Column(
        db.Enum(*COMPLAINT_STATUSES, name="complaint_status"),
        nullable=False,
        default="pending"
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    student = db.relationship("Student", back_populates="complaints")
