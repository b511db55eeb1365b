"""
Business logic for employees.

``EmployeeService`` turns validated request payloads into record store
operations and projects the results into response models.  Missing
employees are reported as ``None`` (or ``False`` for deletes) so the
API layer decides how to render them.  Validation has already run by
the time these methods are called.
"""

import logging
from typing import List, Optional

from employee_api.app.core.repository import Repository
from employee_api.app.schemas.employee import (
    UPDATABLE_FIELDS,
    CreateEmployeeRequest,
    Employee,
    EmployeeBenefit,
    GetEmployeeResponse,
    GetEmployeeResponseEmployeeBenefit,
    UpdateEmployeeRequest,
)
from employee_api.app.services.projection import project_benefit, project_employee
from employee_api.app.services.query import EmployeeQuery, list_records

logger = logging.getLogger(__name__)


class EmployeeService:
    """Employee operations over a record store."""

    def __init__(self, repository: Repository[Employee], default_page_size: int = 100) -> None:
        self.repository = repository
        self.default_page_size = default_page_size

    async def create_employee(self, data: CreateEmployeeRequest) -> GetEmployeeResponse:
        """Create an employee (and its benefits) from a validated request."""
        employee = Employee(
            first_name=data.first_name,
            last_name=data.last_name,
            social_security_number=data.social_security_number,
            address1=data.address1,
            address2=data.address2,
            city=data.city,
            state=data.state,
            zip_code=data.zip_code,
            phone_number=data.phone_number,
            email=data.email,
            benefits=[
                EmployeeBenefit(benefit_type=benefit.benefit_type, cost=benefit.cost)
                for benefit in data.benefits
            ],
        )
        created = await self.repository.create(employee)
        return project_employee(created)

    async def list_employees(self, query: Optional[EmployeeQuery] = None) -> List[GetEmployeeResponse]:
        employees = await self.repository.get_all()
        selected = list_records(employees, query, default_page_size=self.default_page_size)
        return [project_employee(employee) for employee in selected]

    async def get_employee(self, employee_id: int) -> Optional[GetEmployeeResponse]:
        employee = await self.repository.get_by_id(employee_id)
        if employee is None:
            return None
        return project_employee(employee)

    async def get_benefits(self, employee_id: int) -> Optional[List[GetEmployeeResponseEmployeeBenefit]]:
        employee = await self.repository.get_by_id(employee_id)
        if employee is None:
            return None
        return [project_benefit(benefit) for benefit in employee.benefits]

    async def update_employee(
        self, employee_id: int, data: UpdateEmployeeRequest
    ) -> Optional[GetEmployeeResponse]:
        """Replace the contact details of an existing employee.

        Every updatable field is overwritten, including with ``None``;
        names and benefits are kept.  Returns ``None`` if the employee
        does not exist or disappears before the write lands.
        """
        existing = await self.repository.get_by_id(employee_id)
        if existing is None:
            return None
        updated = existing.model_copy(
            update={field: getattr(data, field) for field in UPDATABLE_FIELDS}
        )
        if not await self.repository.update(updated):
            logger.warning("Employee %s was removed during update", employee_id)
            return None
        return project_employee(updated)

    async def delete_employee(self, employee_id: int) -> bool:
        return await self.repository.delete(employee_id)
