# payroll_api/console.py
from __future__ import annotations

import logging

import click

from payroll_api.common.errors import StorageError
from payroll_api.models.employee import Employee, MAX_TEXT_LENGTH, round_money
from payroll_api.services.employee_gateway import EmployeeGateway
from payroll_api.services.employee_merge import InvalidAmount, merge_employee, parse_amount

log = logging.getLogger(__name__)

MENU = (
    "==== Employee Payroll System ====",
    "1. Add Employee",
    "2. Update Employee",
    "3. Delete Employee",
    "4. View All Employees",
    "5. Exit",
)

ROW_FORMAT = "{:<5} {:<20} {:<18} {:>12} {:>12} {:>12} {:>12} {:>12}"
RULE_WIDTH = 109


def _truncate(s, width: int) -> str:
    if s is None:
        return ""
    if len(s) <= width:
        return s
    return s[:width - 1] + "…"


class PayrollConsole:
    """Line-prompted menu over the employee gateway."""

    def __init__(self, gateway: EmployeeGateway):
        self.gateway = gateway
        self.actions = {
            "1": self.add_employee,
            "2": self.update_employee,
            "3": self.delete_employee,
            "4": self.view_all,
        }

    # ---------- prompts ----------
    @staticmethod
    def _ask(label: str) -> str:
        return click.prompt(label, default="", show_default=False).strip()

    def _ask_text(self, label: str, optional: bool = False) -> str:
        while True:
            value = self._ask(label)
            if len(value) > MAX_TEXT_LENGTH:
                click.echo(f"Value must be at most {MAX_TEXT_LENGTH} characters.")
            elif value or optional:
                return value
            else:
                click.echo("Value cannot be empty.")

    def _ask_int(self, label: str) -> int:
        while True:
            try:
                return int(self._ask(label))
            except ValueError:
                click.echo("Please enter a valid integer.")

    def _ask_amount(self, label: str):
        while True:
            try:
                return parse_amount(self._ask(label))
            except InvalidAmount:
                click.echo("Please enter a valid number.")

    def _ask_optional_amount(self, label: str):
        """Blank keeps the current value (returns None)."""
        while True:
            value = self._ask(label)
            if not value:
                return None
            try:
                return parse_amount(value)
            except InvalidAmount:
                click.echo("Please enter a valid number or leave blank.")

    # ---------- menu actions ----------
    def add_employee(self):
        click.echo("-- Add New Employee --")
        emp = Employee(
            name=self._ask_text("Name"),
            designation=self._ask_text("Designation"),
            basic_salary=self._ask_amount("Basic Salary"),
            hra=self._ask_amount("HRA"),
            da=self._ask_amount("DA"),
            deductions=self._ask_amount("Deductions"),
        )
        self.gateway.create(emp)
        click.echo(f"Employee added with ID: {emp.id}")

    def update_employee(self):
        click.echo("-- Update Employee --")
        emp_id = self._ask_int("Employee ID")
        existing = self.gateway.get_by_id(emp_id)
        if existing is None:
            click.echo("Employee not found.")
            return

        click.echo("Leave a field blank to keep current value.")
        changes = {}
        for key, label in (("name", "Name"), ("designation", "Designation")):
            value = self._ask_text(f"{label} (current: {getattr(existing, key)})", optional=True)
            if value:
                changes[key] = value
        for key, label in (("basic_salary", "Basic Salary"), ("hra", "HRA"),
                           ("da", "DA"), ("deductions", "Deductions")):
            amount = self._ask_optional_amount(f"{label} (current: {getattr(existing, key)})")
            if amount is not None:
                changes[key] = amount

        updated = self.gateway.update(merge_employee(existing, changes))
        click.echo("Employee updated." if updated else "No changes made.")

    def delete_employee(self):
        click.echo("-- Delete Employee --")
        emp_id = self._ask_int("Employee ID")
        deleted = self.gateway.delete(emp_id)
        click.echo("Employee deleted." if deleted else "Employee not found.")

    def view_all(self):
        click.echo("-- All Employee Payroll Details --")
        employees = self.gateway.get_all()
        if not employees:
            click.echo("No employees found.")
            return

        click.echo(ROW_FORMAT.format("ID", "Name", "Designation", "Basic", "HRA",
                                     "DA", "Deductions", "Net"))
        click.echo("-" * RULE_WIDTH)
        for e in employees:
            click.echo(ROW_FORMAT.format(
                e.id,
                _truncate(e.name, 20),
                _truncate(e.designation, 18),
                str(round_money(e.basic_salary)),
                str(round_money(e.hra)),
                str(round_money(e.da)),
                str(round_money(e.deductions)),
                str(e.net_salary_rounded),
            ))

    # ---------- loop ----------
    def run(self):
        while True:
            for line in MENU:
                click.echo(line)
            choice = ""
            try:
                choice = self._ask("Enter your choice")
                if choice == "5":
                    click.echo("Exiting. Goodbye!")
                    return
                action = self.actions.get(choice)
                if action is None:
                    click.echo("Invalid choice. Please try again.")
                else:
                    action()
            except click.Abort:
                # end of input
                click.echo()
                return
            except StorageError as ex:
                click.echo(f"Database error: {ex}")
            except Exception as ex:
                log.exception("console action %r failed", choice)
                click.echo(f"Unexpected error: {ex}")
            click.echo()


def main():
    """`payroll-console` entry point."""
    from payroll_api import create_app
    from payroll_api.extensions import db, dispose_engine

    app = create_app()
    try:
        with app.app_context():
            PayrollConsole(EmployeeGateway(db.session)).run()
    finally:
        dispose_engine(app)
