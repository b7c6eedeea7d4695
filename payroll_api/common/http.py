# payroll_api/common/http.py
from flask import jsonify, make_response


def ok(data=None, status=200):
    return jsonify(data), status


def fail(message="Bad Request", status=400, field=None):
    payload = {"error": message}
    if field:
        payload["field"] = field
    return jsonify(payload), status


def text(message, status):
    resp = make_response(message, status)
    resp.mimetype = "text/plain"
    return resp
