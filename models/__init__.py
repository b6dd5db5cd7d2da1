from .user import User
from .room import Room
from .student import Student
from .attendance_log import AttendanceLog
from .complaint import Complaint
from .maintenance_request import MaintenanceRequest
from .permission import PermissionRequest
from .activity import Activity
from .activity_subscription import ActivitySubscription
from .clearance_process import ClearanceProcess
from .announcement import Announcement


__all__ = ["User", "Room", "Student", "AttendanceLog", "Complaint", "MaintenanceRequest", "PermissionRequest",
           "Activity", "ActivitySubscription", "ClearanceProcess", "Announcement"]
