from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import Numeric, String
from sqlalchemy.orm import reconstructor, validates
from sqlalchemy.orm.attributes import set_committed_value
from sqlalchemy.types import TypeDecorator

from payroll_api.extensions import db

ZERO = Decimal("0")
CENT = Decimal("0.01")

TEXT_FIELDS = ("name", "designation")
MONEY_FIELDS = ("basic_salary", "hra", "da", "deductions")
MAX_TEXT_LENGTH = 100


def safe_amount(value) -> Decimal:
    """Normalise a monetary value: None becomes zero, floats go through str()."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value) -> Decimal:
    return safe_amount(value).quantize(CENT, rounding=ROUND_HALF_UP)


class Money(TypeDecorator):
    """
    Exact decimal amount with no fixed scale.

    NUMERIC on server databases. SQLite has no exact decimal storage, so
    there the value is kept as its decimal text and parsed back on load.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(64))
        return dialect.type_descriptor(Numeric(asdecimal=True))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = safe_amount(value)
        return str(value) if dialect.name == "sqlite" else value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return safe_amount(value)


class Employee(db.Model):
    __tablename__ = "employee"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name        = db.Column(db.String(MAX_TEXT_LENGTH), nullable=False, default="")
    designation = db.Column(db.String(MAX_TEXT_LENGTH), nullable=False, default="")

    # raw amounts only; gross/net are derived on read
    basic_salary = db.Column(Money(), nullable=False, default=ZERO)
    hra          = db.Column(Money(), nullable=False, default=ZERO)
    da           = db.Column(Money(), nullable=False, default=ZERO)
    deductions   = db.Column(Money(), nullable=False, default=ZERO)

    def __init__(self, name="", designation="", basic_salary=None, hra=None,
                 da=None, deductions=None, id=None):
        kwargs = dict(
            name=name,
            designation=designation,
            basic_salary=basic_salary,
            hra=hra,
            da=da,
            deductions=deductions,
        )
        # 0 means "not persisted yet"
        if id:
            kwargs["id"] = id
        super().__init__(**kwargs)

    @validates(*MONEY_FIELDS)
    def _coerce_amount(self, key, value):
        return safe_amount(value)

    @validates(*TEXT_FIELDS)
    def _coerce_text(self, key, value):
        return "" if value is None else value

    @reconstructor
    def _on_load(self):
        # legacy rows may still carry NULL amounts
        for key in MONEY_FIELDS:
            if getattr(self, key) is None:
                set_committed_value(self, key, ZERO)

    @property
    def gross_salary(self) -> Decimal:
        return safe_amount(self.basic_salary) + safe_amount(self.hra) + safe_amount(self.da)

    @property
    def net_salary(self) -> Decimal:
        return self.gross_salary - safe_amount(self.deductions)

    @property
    def net_salary_rounded(self) -> Decimal:
        return round_money(self.net_salary)

    def __repr__(self):
        return (f"<Employee id={self.id} name={self.name!r} "
                f"designation={self.designation!r} net={self.net_salary_rounded}>")
