from __future__ import annotations

from flask import Blueprint, current_app, request

from payroll_api.common.errors import ValidationError
from payroll_api.common.http import ok, text
from payroll_api.extensions import db
from payroll_api.models.employee import Employee, MONEY_FIELDS, TEXT_FIELDS, round_money
from payroll_api.services.employee_gateway import EmployeeGateway
from payroll_api.services.employee_merge import (
    InvalidAmount, TextTooLong, clean_text, merge_employee, parse_amount,
)

bp = Blueprint("employees", __name__, url_prefix="/api/employees")


# ---------- helpers ----------
def _gateway() -> EmployeeGateway:
    return EmployeeGateway(db.session)


def _money(v) -> str:
    return str(round_money(v))


def _row(x: Employee):
    return {
        "id": x.id,
        "name": x.name,
        "designation": x.designation,
        "basic_salary": _money(x.basic_salary),
        "hra": _money(x.hra),
        "da": _money(x.da),
        "deductions": _money(x.deductions),
        "gross_salary": _money(x.gross_salary),
        "net_salary": _money(x.net_salary_rounded),
    }


def _parse_id(raw: str):
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _payload() -> dict:
    """Flat JSON object or form fields, whichever the client sent."""
    if request.is_json:
        d = request.get_json(silent=True)
        if d is None:
            raise ValidationError("Malformed JSON body")
        if not isinstance(d, dict):
            raise ValidationError("Expected a JSON object")
        return d
    return request.form.to_dict()


def _employee_from_payload(d: dict) -> Employee:
    values = {}
    for key in TEXT_FIELDS + MONEY_FIELDS:
        v = d.get(key)
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValidationError(f"Missing parameter: {key}", key)
        try:
            values[key] = clean_text(key, v) if key in TEXT_FIELDS else parse_amount(v)
        except TextTooLong as ex:
            raise ValidationError(str(ex), key) from ex
        except InvalidAmount as ex:
            raise ValidationError(f"{key}: {ex}", key) from ex
    return Employee(**values)


# ---------- routes ----------
@bp.get("")
@bp.get("/")
def list_employees():
    return ok([_row(x) for x in _gateway().get_all()])


@bp.get("/<eid>")
def get_employee(eid):
    emp_id = _parse_id(eid)
    if emp_id is None:
        return text("Invalid ID", 400)
    x = _gateway().get_by_id(emp_id)
    if x is None:
        return text("Not Found", 404)
    return ok(_row(x))


@bp.post("")
@bp.post("/")
def create_employee():
    x = _employee_from_payload(_payload())
    _gateway().create(x)
    current_app.logger.info("created employee %s (%s)", x.id, x.name)
    return ok(_row(x), status=201)


@bp.put("/<eid>")
def update_employee(eid):
    emp_id = _parse_id(eid)
    if emp_id is None:
        return text("Invalid ID", 400)
    gw = _gateway()
    existing = gw.get_by_id(emp_id)
    if existing is None:
        return text("Not Found", 404)

    try:
        merged = merge_employee(existing, _payload())
    except TextTooLong as ex:
        raise ValidationError(str(ex), ex.field) from ex
    # row may have been deleted between the read and the write
    if not gw.update(merged):
        return text("Not Found", 404)
    return ok(_row(merged))


@bp.delete("/<eid>")
def delete_employee(eid):
    emp_id = _parse_id(eid)
    if emp_id is None:
        return text("Invalid ID", 400)
    if not _gateway().delete(emp_id):
        return text("Not Found", 404)
    current_app.logger.info("deleted employee %s", emp_id)
    return ok({"status": "deleted"})
