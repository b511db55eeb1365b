"""
Validators for the employee payloads and the registry that holds them.

``build_validator_registry`` is called once while the application is
assembled.  The update validator needs read access to stored employees,
so the record store is passed in explicitly.
"""

from typing import Optional

from employee_api.app.core.config import settings
from employee_api.app.core.repository import Repository
from employee_api.app.core.validation import (
    Validator,
    ValidatorRegistry,
    for_each,
    greater_than_or_equal,
    less_than_or_equal,
    must_async,
    not_empty,
)
from employee_api.app.schemas.employee import (
    CreateEmployeeBenefitRequest,
    CreateEmployeeRequest,
    Employee,
    GetAllEmployeesRequest,
    UpdateEmployeeRequest,
)


def create_benefit_validator() -> Validator:
    return Validator(CreateEmployeeBenefitRequest, [greater_than_or_equal("cost", 0)])


def create_employee_validator(benefit_validator: Optional[Validator] = None) -> Validator:
    return Validator(
        CreateEmployeeRequest,
        [
            not_empty("first_name"),
            not_empty("last_name"),
            for_each("benefits", benefit_validator or create_benefit_validator()),
        ],
    )


def update_employee_validator(repository: Repository[Employee]) -> Validator:
    """Validator for contact-detail updates.

    An address that is already stored may not be cleared.  When the
    employee does not exist the rule does not apply; the update itself
    reports the missing employee.
    """

    async def not_empty_if_already_set(address: Optional[str], employee_id: Optional[int]) -> bool:
        if employee_id is None:
            return True
        employee = await repository.get_by_id(employee_id)
        if employee is None or employee.address1 is None:
            return True
        return address is not None and bool(address.strip())

    return Validator(
        UpdateEmployeeRequest,
        [must_async("address1", not_empty_if_already_set, "Address1 must not be empty")],
    )


def list_employees_validator(max_page_size: int = settings.max_page_size) -> Validator:
    return Validator(
        GetAllEmployeesRequest,
        [
            greater_than_or_equal("page", 1),
            greater_than_or_equal("records_per_page", 1),
            less_than_or_equal("records_per_page", max_page_size),
        ],
    )


def build_validator_registry(
    repository: Repository[Employee], max_page_size: int = settings.max_page_size
) -> ValidatorRegistry:
    registry = ValidatorRegistry()
    benefit_validator = create_benefit_validator()
    registry.register(CreateEmployeeBenefitRequest, benefit_validator)
    registry.register(CreateEmployeeRequest, create_employee_validator(benefit_validator))
    registry.register(UpdateEmployeeRequest, update_employee_validator(repository))
    registry.register(GetAllEmployeesRequest, list_employees_validator(max_page_size))
    return registry
