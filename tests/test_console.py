from decimal import Decimal

from payroll_api.common.errors import StorageError
from payroll_api.console import _truncate
from payroll_api.services.employee_gateway import EmployeeGateway


def _run(app, *lines):
    runner = app.test_cli_runner()
    return runner.invoke(args=["console"], input="\n".join(lines) + "\n")


def test_add_then_view_then_exit(app):
    res = _run(app, "1", "Bob", "Engineer", "5000", "1000", "500", "300", "4", "5")
    assert res.exit_code == 0, res.output
    assert "Employee added with ID: 1" in res.output
    assert "6200.00" in res.output
    assert "5000.00" in res.output
    assert "Exiting. Goodbye!" in res.output


def test_add_reprompts_on_blank_and_bad_number(app, gateway):
    res = _run(app, "1", "", "Bob", "Eng", "abc", "5000", "0", "0", "0", "5")
    assert "Value cannot be empty." in res.output
    assert "Please enter a valid number." in res.output
    [bob] = gateway.get_all()
    assert bob.name == "Bob"
    assert bob.basic_salary == Decimal("5000")


def test_add_reprompts_on_over_long_text(app, gateway):
    res = _run(app, "1", "N" * 101, "Bob", "Eng", "1", "0", "0", "0", "5")
    assert "Value must be at most 100 characters." in res.output
    [bob] = gateway.get_all()
    assert bob.name == "Bob"


def test_update_blank_keeps_values(app, gateway, make_employee):
    e = make_employee()
    res = _run(app, "2", str(e.id), "", "Lead", "", "x", "", "", "900", "5")
    assert "Leave a field blank to keep current value." in res.output
    assert "Please enter a valid number or leave blank." in res.output
    assert "Employee updated." in res.output

    got = gateway.get_by_id(e.id)
    assert got.name == "Alice"
    assert got.designation == "Lead"
    assert got.basic_salary == Decimal("1000")
    assert got.hra == Decimal("200")
    assert got.deductions == Decimal("900")


def test_update_unknown_and_bad_id(app):
    res = _run(app, "2", "abc", "99", "5")
    assert "Please enter a valid integer." in res.output
    assert "Employee not found." in res.output


def test_delete_twice(app, make_employee):
    e = make_employee()
    res = _run(app, "3", str(e.id), "3", str(e.id), "5")
    assert res.output.count("Employee deleted.") == 1
    assert "Employee not found." in res.output


def test_view_empty_and_invalid_choice(app):
    res = _run(app, "4", "9", "5")
    assert "No employees found." in res.output
    assert "Invalid choice. Please try again." in res.output


def test_end_of_input_exits_cleanly(app):
    res = _run(app, "4")
    assert res.exit_code == 0
    assert "No employees found." in res.output


def test_storage_error_reported_and_loop_continues(app, monkeypatch):
    def boom(self):
        raise StorageError("connection refused")

    monkeypatch.setattr(EmployeeGateway, "get_all", boom)
    res = _run(app, "4", "5")
    assert "Database error: connection refused" in res.output
    assert "Exiting. Goodbye!" in res.output


def test_unexpected_error_reported(app, monkeypatch):
    def boom(self, employee_id):
        raise RuntimeError("kaput")

    monkeypatch.setattr(EmployeeGateway, "delete", boom)
    res = _run(app, "3", "1", "5")
    assert "Unexpected error: kaput" in res.output
    assert res.exit_code == 0


def test_table_truncates_long_text(app, make_employee):
    make_employee(name="Bartholomew Alexander Fitzgerald")
    res = _run(app, "4", "5")
    assert "Bartholomew Alexand…" in res.output
    assert "-" * 109 in res.output


def test_truncate():
    assert _truncate(None, 5) == ""
    assert _truncate("abc", 5) == "abc"
    assert _truncate("abcdefgh", 5) == "abcd…"


def test_init_db_and_seed_demo(app, gateway):
    runner = app.test_cli_runner()
    res = runner.invoke(args=["init-db"])
    assert res.exit_code == 0
    assert "employee" in res.output

    res = runner.invoke(args=["seed-demo"])
    assert res.exit_code == 0
    assert [e.name for e in gateway.get_all()] == ["Asha Rao", "Vikram Shah", "Meera Iyer"]
