from flask import Blueprint, request
from flask_login import login_required

import queries
import validators
from responses import collection, success
from security import current_principal, student_required
from serializers import activity_to_dict, subscription_to_dict

activities_bp = Blueprint("activities", __name__)


def _activity_row(row):
    activity, participant_count, is_subscribed = row
    return activity_to_dict(activity, participant_count, is_subscribed)


@activities_bp.route("", methods=["GET"])
@login_required
def list_activities():
    principal = current_principal()
    filters = validators.activity_filters(request.args)
    return collection(queries.list_activities(principal, filters), _activity_row)


@activities_bp.route("/subscribe", methods=["POST"])
@student_required
def subscribe():
    principal = current_principal()
    activity_id = validators.activity_reference(request.get_json(silent=True) or {})
    activity, subscription = queries.subscribe(principal, activity_id)
    return success(
        subscription_to_dict(subscription),
        201,
        f'Successfully subscribed to "{activity.title}"',
    )


@activities_bp.route("/unsubscribe", methods=["POST"])
@student_required
def unsubscribe():
    principal = current_principal()
    activity_id = validators.activity_reference(request.get_json(silent=True) or {})
    queries.unsubscribe(principal, activity_id)
    return success({"activity_id": activity_id}, 200, "Successfully unsubscribed")
