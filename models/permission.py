from extensions import db

PERMISSION_TYPES = ("late", "travel")
PERMISSION_STATUSES = ("pending", "approved", "rejected")


class PermissionRequest(db.Model):
    __tablename__ = "permissions"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id", ondelete="CASCADE"), nullable=False)

    type = db.Column(
        db.Enum(*PERMISSION_TYPES, name="permission_types"),
        nullable=False
    )
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    reason = db.Column(db.Text, nullable=False)
    admin_remarks = db.Column(db.Text)

    status = db.Column(
        db.Enum(*PERMISSION_STATUSES, name="permission_statuses"),
        nullable=False,
        default="pending"
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    __table_args__ = (
        db.CheckConstraint("end_date >= start_date", name="ck_permissions_date_range"),
    )

    student = db.relationship("Student", back_populates="permissions")
