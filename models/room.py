from extensions import db


class Room(db.Model):
    __tablename__ = "rooms"

    id = db.Column(db.Integer, primary_key=True)
    room_number = db.Column(db.String(20), nullable=False, unique=True)
    building = db.Column(db.String(100), nullable=False)
    floor = db.Column(db.Integer, nullable=False, default=0)
    capacity = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime, server_default=db.func.now())

    __table_args__ = (
        db.CheckConstraint("capacity > 0", name="ck_rooms_capacity_positive"),
    )

    # Xoá phòng chỉ gỡ sinh viên khỏi phòng, không xoá sinh viên
    students = db.relationship("Student", back_populates="room", passive_deletes=True)
    maintenance_requests = db.relationship("MaintenanceRequest", back_populates="room", passive_deletes=True)
