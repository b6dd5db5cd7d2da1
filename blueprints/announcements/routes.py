from flask import Blueprint, request
from flask_login import login_required

import queries
import validators
from responses import collection
from serializers import announcement_to_dict

announcements_bp = Blueprint("announcements", __name__)


# Announcement
@announcements_bp.route("", methods=["GET"])
@login_required
def list_announcements():
    filters = validators.announcement_filters(request.args)
    return collection(queries.list_announcements(filters), announcement_to_dict)
