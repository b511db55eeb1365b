"""
SQLite-backed record store for employees.

``SqliteEmployeeRepository`` implements the ``Repository`` contract from
``core.repository`` over the ``employees`` and ``employee_benefits``
tables.  Benefits are written together with their employee on
``create`` and removed with it on ``delete``; ``update`` only touches the
employee row.

All queries use parameterised statements.  Mutations are serialised by
an ``asyncio.Lock`` so two updates of the same employee never
interleave.  Each call opens its own connection and closes it before
returning.
"""

import asyncio
import logging
import sqlite3
from decimal import Decimal
from typing import Dict, List, Optional

from employee_api.app.core.db import get_connection, get_cursor
from employee_api.app.schemas.employee import BenefitType, Employee, EmployeeBenefit

logger = logging.getLogger(__name__)

_EMPLOYEE_COLUMNS = (
    "first_name",
    "last_name",
    "social_security_number",
    "address1",
    "address2",
    "city",
    "state",
    "zip_code",
    "phone_number",
    "email",
)


class SqliteEmployeeRepository:
    """Durable employee store."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self._db_path = db_path
        self._lock = asyncio.Lock()

    @property
    def db_path(self) -> Optional[str]:
        return self._db_path

    async def create(self, employee: Employee) -> Employee:
        """Insert the employee and its benefits in one transaction."""
        placeholders = ", ".join("?" for _ in _EMPLOYEE_COLUMNS)
        async with self._lock:
            with get_cursor(self._db_path) as cursor:
                cursor.execute(
                    f"INSERT INTO employees ({', '.join(_EMPLOYEE_COLUMNS)}) VALUES ({placeholders})",
                    tuple(getattr(employee, column) for column in _EMPLOYEE_COLUMNS),
                )
                employee_id = cursor.lastrowid
                for benefit in employee.benefits:
                    cursor.execute(
                        """
                        INSERT INTO employee_benefits (employee_id, benefit_type, cost)
                        VALUES (?, ?, ?)
                        """,
                        (employee_id, benefit.benefit_type.value, str(benefit.cost)),
                    )
                created = self._fetch_one(cursor, employee_id)
        logger.info("Created employee %s with %d benefits", employee_id, len(employee.benefits))
        return created

    async def get_by_id(self, employee_id: int) -> Optional[Employee]:
        conn = get_connection(self._db_path)
        try:
            return self._fetch_one(conn.cursor(), employee_id)
        finally:
            conn.close()

    async def get_all(self) -> List[Employee]:
        """Return every employee ordered by identity.

        Both queries run without yielding to the event loop, so no
        mutation from this process can land between them.
        """
        conn = get_connection(self._db_path)
        try:
            cursor = conn.cursor()
            rows = cursor.execute("SELECT * FROM employees ORDER BY id ASC").fetchall()
            benefit_rows = cursor.execute(
                "SELECT * FROM employee_benefits ORDER BY id ASC"
            ).fetchall()
        finally:
            conn.close()
        benefits: Dict[int, List[EmployeeBenefit]] = {}
        for row in benefit_rows:
            benefits.setdefault(row["employee_id"], []).append(self._row_to_benefit(row))
        return [self._row_to_employee(row, benefits.get(row["id"], [])) for row in rows]

    async def update(self, employee: Employee) -> bool:
        """Overwrite the employee row; benefits are left untouched."""
        assignments = ", ".join(f"{column} = ?" for column in _EMPLOYEE_COLUMNS)
        async with self._lock:
            with get_cursor(self._db_path) as cursor:
                cursor.execute(
                    f"UPDATE employees SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    tuple(getattr(employee, column) for column in _EMPLOYEE_COLUMNS) + (employee.id,),
                )
                affected = cursor.rowcount
        if affected:
            logger.info("Updated employee %s", employee.id)
        return affected > 0

    async def delete(self, employee_id: int) -> bool:
        """Delete the employee and its benefits."""
        async with self._lock:
            with get_cursor(self._db_path) as cursor:
                cursor.execute("DELETE FROM employee_benefits WHERE employee_id = ?", (employee_id,))
                cursor.execute("DELETE FROM employees WHERE id = ?", (employee_id,))
                affected = cursor.rowcount
        if affected:
            logger.info("Deleted employee %s", employee_id)
        return affected > 0

    @classmethod
    def _fetch_one(cls, cursor: sqlite3.Cursor, employee_id: int) -> Optional[Employee]:
        row = cursor.execute("SELECT * FROM employees WHERE id = ?", (employee_id,)).fetchone()
        if not row:
            return None
        benefit_rows = cursor.execute(
            "SELECT * FROM employee_benefits WHERE employee_id = ? ORDER BY id ASC",
            (employee_id,),
        ).fetchall()
        return cls._row_to_employee(row, [cls._row_to_benefit(b) for b in benefit_rows])

    @staticmethod
    def _row_to_employee(row: sqlite3.Row, benefits: List[EmployeeBenefit]) -> Employee:
        return Employee(
            id=row["id"],
            benefits=benefits,
            **{column: row[column] for column in _EMPLOYEE_COLUMNS},
        )

    @staticmethod
    def _row_to_benefit(row: sqlite3.Row) -> EmployeeBenefit:
        return EmployeeBenefit(
            id=row["id"],
            employee_id=row["employee_id"],
            benefit_type=BenefitType(row["benefit_type"]),
            cost=Decimal(row["cost"]),
        )
