from extensions import db

CHECKPOINTS = ("room_check_passed", "keys_returned")


class ClearanceProcess(db.Model):
    __tablename__ = "clearance_process"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )
    room_check_passed = db.Column(db.Boolean, nullable=False, default=False)
    keys_returned = db.Column(db.Boolean, nullable=False, default=False)

    initiated_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    student = db.relationship("Student", back_populates="clearance")

    @property
    def passed_checkpoints(self):
        return sum(1 for name in CHECKPOINTS if getattr(self, name))

    @property
    def percentage(self):
        return self.passed_checkpoints * 100 // len(CHECKPOINTS)

    # Trạng thái luôn tính từ hai checkpoint, không lưu riêng
    @property
    def status(self):
        return "completed" if self.passed_checkpoints == len(CHECKPOINTS) else "pending"
