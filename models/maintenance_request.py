from extensions import db

MAINTENANCE_CATEGORIES = ("plumbing", "electric", "net", "furniture", "other")
MAINTENANCE_STATUSES = ("open", "in_progress", "fixed")


class MaintenanceRequest(db.Model):
    __tablename__ = "maintenance_requests"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    room_id = db.Column(db.Integer, db.ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True)

    category = db.Column(
        db.Enum(*MAINTENANCE_CATEGORIES, name="maintenance_categories"),
        nullable=False
    )
    description = db.Column(db.Text, nullable=False)
    supervisor_reply = db.Column(db.Text)

    status = db.Column(
        db.Enum(*MAINTENANCE_STATUSES, name="maintenance_statuses"),
        nullable=False,
        default="open"
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    student = db.relationship("Student", back_populates="maintenance_requests")
    room = db.relationship("Room", back_populates="maintenance_requests")
