from extensions import db


class ActivitySubscription(db.Model):
    __tablename__ = "activity_subscriptions"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    activity_id = db.Column(db.Integer, db.ForeignKey("activities.id", ondelete="CASCADE"), nullable=False)

    created_at = db.Column(db.DateTime, server_default=db.func.now())

    # Ràng buộc này mới là bảo đảm chống đăng ký trùng khi có request song song
    __table_args__ = (
        db.UniqueConstraint("student_id", "activity_id", name="uq_subscription_student_activity"),
    )

    student = db.relationship("Student", back_populates="subscriptions")
    activity = db.relationship("Activity", back_populates="subscriptions")
