# payroll_api/services/employee_merge.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping
import logging

from payroll_api.models.employee import Employee, MAX_TEXT_LENGTH, MONEY_FIELDS, TEXT_FIELDS

log = logging.getLogger(__name__)


class InvalidAmount(ValueError):
    def __init__(self, value):
        super().__init__(f"Invalid number for value: {value}")
        self.value = value


class TextTooLong(ValueError):
    def __init__(self, field, value):
        super().__init__(f"{field}: must be at most {MAX_TEXT_LENGTH} characters")
        self.field = field
        self.value = value


def clean_text(field: str, value: Any) -> str:
    """Strip a supplied name/designation and enforce the column length."""
    cleaned = str(value).strip()
    if len(cleaned) > MAX_TEXT_LENGTH:
        raise TextTooLong(field, value)
    return cleaned


def parse_amount(value: Any) -> Decimal:
    """
    Strict decimal parser for user-supplied amounts.

    Accepts Decimal, int, float (through str) and numeric strings.
    Rejects None, booleans, blank strings, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(value)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise InvalidAmount(value)
        try:
            amount = Decimal(raw)
        except InvalidOperation:
            raise InvalidAmount(value) from None
    else:
        raise InvalidAmount(value)

    if not amount.is_finite():
        raise InvalidAmount(value)
    return amount


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def merge_employee(existing: Employee, changes: Mapping[str, Any]) -> Employee:
    """
    Combine `existing` with a partial set of field values.

    A field counts as supplied only when its key is present in `changes`.
    Supplied-but-blank values and unparsable amounts keep the existing value;
    over-long text raises TextTooLong.
    The id is never taken from `changes`. `existing` is left untouched.
    """
    merged = Employee(
        id=existing.id,
        name=existing.name,
        designation=existing.designation,
        basic_salary=existing.basic_salary,
        hra=existing.hra,
        da=existing.da,
        deductions=existing.deductions,
    )

    for key in TEXT_FIELDS:
        if key not in changes or _is_blank(changes[key]):
            continue
        setattr(merged, key, clean_text(key, changes[key]))

    for key in MONEY_FIELDS:
        if key not in changes or _is_blank(changes[key]):
            continue
        try:
            setattr(merged, key, parse_amount(changes[key]))
        except InvalidAmount:
            log.warning("employee %s: ignoring unparsable %s=%r", existing.id, key, changes[key])

    return merged
