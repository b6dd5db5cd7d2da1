from flask import Blueprint, request

import queries
import validators
from responses import collection, success
from security import current_principal, student_required
from serializers import complaint_to_dict, maintenance_to_dict, permission_to_dict

services_bp = Blueprint("services", __name__)


def _json_body():
    return request.get_json(silent=True) or {}

#-------------------------------------------------------
# Complaints
@services_bp.route("/complaints", methods=["GET"])
@student_required
def list_complaints():
    principal = current_principal()
    filters = validators.complaint_filters(request.args)
    return collection(queries.list_complaints(principal, filters), complaint_to_dict)


@services_bp.route("/complaints", methods=["POST"])
@student_required
def create_complaint():
    principal = current_principal()
    payload = validators.complaint_payload(_json_body())
    complaint = queries.create_complaint(principal, payload)
    return success(complaint_to_dict(complaint), 201, "Complaint submitted successfully")

#-------------------------------------------------------
# Maintenance (theo phòng của sinh viên)
@services_bp.route("/maintenance", methods=["GET"])
@student_required
def list_maintenance():
    principal = current_principal()
    filters = validators.maintenance_filters(request.args)
    return collection(queries.list_maintenance(principal, filters), maintenance_to_dict)


@services_bp.route("/maintenance", methods=["POST"])
@student_required
def create_maintenance():
    principal = current_principal()
    payload = validators.maintenance_payload(_json_body())
    req = queries.create_maintenance(principal, payload)
    return success(maintenance_to_dict(req), 201, "Maintenance request submitted successfully")

#-------------------------------------------------------
# Permissions
@services_bp.route("/permissions", methods=["GET"])
@student_required
def list_permissions():
    principal = current_principal()
    filters = validators.permission_filters(request.args)
    return collection(queries.list_permissions(principal, filters), permission_to_dict)


@services_bp.route("/permissions", methods=["POST"])
@student_required
def create_permission():
    principal = current_principal()
    payload = validators.permission_payload(_json_body())
    permission = queries.create_permission(principal, payload)
    return success(permission_to_dict(permission), 201, "Permission request submitted successfully")
