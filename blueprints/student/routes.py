import os
import time

from flask import Blueprint, current_app, request

import queries
import validators
from responses import collection, success
from security import current_principal, student_required
from serializers import attendance_to_dict, clearance_to_dict, profile_to_dict

student_bp = Blueprint("student", __name__)

#-------------------------------------------------------
# Student Profile
@student_bp.route("/profile", methods=["GET"])
@student_required
def profile():
    principal = current_principal()
    student, room = queries.get_profile(principal)
    return success(profile_to_dict(student, room))


@student_bp.route("/upload-photo", methods=["POST"])
@student_required
def upload_photo():
    principal = current_principal()
    photo, ext = validators.photo_upload(request.files, current_app.config["ALLOWED_EXTENSIONS"])
    student = queries.get_student(principal)

    # Tên file do server sinh ra, không dùng tên gốc
    fname = f"photo-{student.id}-{int(time.time()*1000)}.{ext}"
    base = current_app.config["UPLOAD_FOLDER_PHOTOS"]
    os.makedirs(base, exist_ok=True)
    photo.save(os.path.join(base, fname))

    student = queries.update_photo(student, f"uploads/photos/{fname}")
    return success({"photo_url": student.photo_url}, 200, "Photo uploaded successfully")

#-------------------------------------------------------
# Attendance
@student_bp.route("/attendance", methods=["GET"])
@student_required
def attendance():
    principal = current_principal()
    filters = validators.attendance_filters(request.args)
    logs = queries.list_attendance(principal, filters)
    return collection(logs, attendance_to_dict)

#-------------------------------------------------------
# Clearance
@student_bp.route("/clearance", methods=["GET"])
@student_required
def clearance():
    principal = current_principal()
    process = queries.get_clearance(principal)
    return success(clearance_to_dict(process, principal.id))


@student_bp.route("/clearance/initiate", methods=["POST"])
@student_required
def initiate_clearance():
    principal = current_principal()
    process = queries.initiate_clearance(principal)
    return success(clearance_to_dict(process, principal.id), 201, "Clearance process initiated")
