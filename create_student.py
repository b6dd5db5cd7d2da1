import logging
from app import app, db
from models import Room, Student
from security import encode_principal

logger = logging.getLogger("create_student")

ROOMS = [
    ("101", "Building A", 1, 2),
    ("102", "Building A", 1, 2),
    ("201", "Building B", 2, 3),
]

STUDENTS = [
    ("30412010101234", "Mohamed Ahmed Ali", "20230001", "Engineering", "Third Year", "Double", "101"),
    ("30501150201234", "Sara Mahmoud Hassan", "20230002", "Medicine", "Second Year", "Double", "101"),
    ("30309220301234", "Omar Khaled Youssef", "20230003", "Commerce", "Fourth Year", "Triple", "201"),
    ("30611300401234", "Nour Ibrahim Saleh", "20230004", "Science", "First Year", "Single", None),
]

if __name__ == "__main__":
    with app.app_context():
        db.create_all()

        rooms = {}
        for number, building, floor, capacity in ROOMS:
            room = Room.query.filter_by(room_number=number).first()
            if room is None:
                room = Room(room_number=number, building=building, floor=floor, capacity=capacity)
                db.session.add(room)
            rooms[number] = room
        db.session.flush()

        for national_id, name, student_id, college, year, housing, room_no in STUDENTS:
            if Student.query.filter_by(national_id=national_id).first():
                continue
            student = Student(
                national_id=national_id,
                full_name=name,
                student_id=student_id,
                college=college,
                academic_year=year,
                housing_type=housing,
                room=rooms.get(room_no),
            )
            student.set_password("123456")
            db.session.add(student)

        db.session.commit()

        # Token dùng thử cho môi trường dev
        for student in Student.query.order_by(Student.id).all():
            token = encode_principal(student.id, "student", expires_in=30 * 24 * 3600)
            logger.info("%s (%s): %s", student.full_name, student.national_id, token)
