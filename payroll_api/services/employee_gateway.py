# payroll_api/services/employee_gateway.py
from __future__ import annotations

from contextlib import contextmanager
from typing import List, Optional
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from payroll_api.common.errors import StorageError
from payroll_api.models.employee import Employee

log = logging.getLogger(__name__)


class EmployeeGateway:
    """
    CRUD against the `employee` table.

    Each call is one unit of work on the given session:
      - commit on success, rollback on any error
      - session closed on every exit path, so the pooled connection goes back
      - returned Employees are detached; nothing is cached between calls

    Absence (update/delete/get on an unknown id) is a normal result
    (False / None). Store failures surface as StorageError.
    """

    def __init__(self, session):
        self.session = session

    @contextmanager
    def _unit(self, action: str):
        try:
            yield self.session
            self.session.commit()
        except SQLAlchemyError as ex:
            self.session.rollback()
            log.exception("employee %s failed", action)
            raise StorageError(str(getattr(ex, "orig", None) or ex)) from ex
        except Exception:
            self.session.rollback()
            raise
        finally:
            self.session.close()

    def create(self, employee: Employee) -> Employee:
        if employee.id:
            raise ValueError(f"employee already persisted with id={employee.id}")
        with self._unit("create") as s:
            s.add(employee)
            s.flush()  # store assigns the id here
        log.info("employee %s created", employee.id)
        return employee

    def update(self, employee: Employee) -> bool:
        if not employee.id:
            return False
        stmt = (
            update(Employee)
            .where(Employee.id == employee.id)
            .values(
                name=employee.name,
                designation=employee.designation,
                basic_salary=employee.basic_salary,
                hra=employee.hra,
                da=employee.da,
                deductions=employee.deductions,
            )
            .execution_options(synchronize_session=False)
        )
        with self._unit("update") as s:
            matched = s.execute(stmt).rowcount > 0
        log.info("employee %s update matched=%s", employee.id, matched)
        return matched

    def delete(self, employee_id: int) -> bool:
        stmt = (
            delete(Employee)
            .where(Employee.id == employee_id)
            .execution_options(synchronize_session=False)
        )
        with self._unit("delete") as s:
            matched = s.execute(stmt).rowcount > 0
        log.info("employee %s delete matched=%s", employee_id, matched)
        return matched

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with self._unit("get") as s:
            return s.get(Employee, employee_id)

    def get_all(self) -> List[Employee]:
        with self._unit("list") as s:
            return list(s.scalars(select(Employee).order_by(Employee.id.asc())))
