from flask import jsonify


def success(data=None, status=200, message=None):
    body = {"success": True}
    if message:
        body["message"] = message
    body["data"] = data
    return jsonify(body), status


def collection(items, serializer):
    data = [serializer(item) for item in items]
    return jsonify({"success": True, "count": len(data), "data": data}), 200
