from werkzeug.security import generate_password_hash, check_password_hash
from extensions import db


class Student(db.Model):
    __tablename__ = "students"

    id = db.Column(db.Integer, primary_key=True)
    national_id = db.Column(db.String(20), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(150), nullable=False)
    student_id = db.Column(db.String(20), unique=True)
    college = db.Column(db.String(100))
    academic_year = db.Column(db.String(20))
    photo_url = db.Column(db.String(500))
    housing_type = db.Column(db.String(50))
    is_suspended = db.Column(db.Boolean, nullable=False, default=False)

    room_id = db.Column(db.Integer, db.ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True)

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    room = db.relationship("Room", back_populates="students")

    # Mọi bản ghi của sinh viên bị xoá theo sinh viên
    attendance_logs = db.relationship("AttendanceLog", back_populates="student", cascade="all, delete-orphan")
    complaints = db.relationship("Complaint", back_populates="student", cascade="all, delete-orphan")
    maintenance_requests = db.relationship("MaintenanceRequest", back_populates="student", cascade="all, delete-orphan")
    permissions = db.relationship("PermissionRequest", back_populates="student", cascade="all, delete-orphan")
    subscriptions = db.relationship("ActivitySubscription", back_populates="student", cascade="all, delete-orphan")
    clearance = db.relationship("ClearanceProcess", back_populates="student", uselist=False, cascade="all, delete-orphan")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
