from extensions import db


class Activity(db.Model):
    __tablename__ = "activities"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    location = db.Column(db.String(255))
    event_date = db.Column(db.DateTime, nullable=False, index=True)
    max_participants = db.Column(db.Integer)  # NULL = không giới hạn

    created_at = db.Column(db.DateTime, server_default=db.func.now())

    __table_args__ = (
        db.CheckConstraint("max_participants IS NULL OR max_participants > 0", name="ck_activities_max_participants"),
    )

    subscriptions = db.relationship("ActivitySubscription", back_populates="activity", cascade="all, delete-orphan")
