"""
Mapping from stored employees to API responses.

Every endpoint that returns an employee or a benefit goes through these
two functions so single reads, list reads, creates and updates all share
one representation.  The social security number is never exposed.
"""

from employee_api.app.schemas.employee import (
    Employee,
    EmployeeBenefit,
    GetEmployeeResponse,
    GetEmployeeResponseEmployeeBenefit,
)


def project_benefit(benefit: EmployeeBenefit) -> GetEmployeeResponseEmployeeBenefit:
    return GetEmployeeResponseEmployeeBenefit(
        id=benefit.id,
        employee_id=benefit.employee_id,
        benefit_type=benefit.benefit_type,
        cost=benefit.cost,
    )


def project_employee(employee: Employee) -> GetEmployeeResponse:
    return GetEmployeeResponse(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        address1=employee.address1,
        address2=employee.address2,
        city=employee.city,
        state=employee.state,
        zip_code=employee.zip_code,
        phone_number=employee.phone_number,
        email=employee.email,
        benefits=[project_benefit(benefit) for benefit in employee.benefits],
    )
