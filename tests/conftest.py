import pytest

from payroll_api import create_app
from payroll_api.config import TestingConfig
from payroll_api.extensions import db
from payroll_api.models.employee import Employee
from payroll_api.services.employee_gateway import EmployeeGateway


@pytest.fixture(scope="function")
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture(scope="function")
def gateway(app):
    return EmployeeGateway(db.session)


@pytest.fixture
def make_employee(gateway):
    def _make(name="Alice", designation="Analyst", basic_salary="1000",
              hra="200", da="100", deductions="50"):
        return gateway.create(Employee(name=name, designation=designation,
                                       basic_salary=basic_salary, hra=hra,
                                       da=da, deductions=deductions))
    return _make
