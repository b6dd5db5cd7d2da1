from extensions import db


class Announcement(db.Model):
    __tablename__ = "announcements"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    body = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100))
    priority = db.Column(db.String(50), default="normal")
    created_at = db.Column(db.DateTime, server_default=db.func.now(), index=True)

    author_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"))
    author = db.relationship("User", back_populates="announcements")
