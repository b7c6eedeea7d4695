# payroll_api/blueprints/frontend.py
from flask import Blueprint, current_app

bp = Blueprint("frontend", __name__)


@bp.get("/")
def index():
    # the rest of the static front-end is served by the app's static route
    return current_app.send_static_file("index.html")
