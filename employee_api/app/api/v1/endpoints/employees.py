"""
Employee endpoints for API v1.

CRUD routes over employees plus a read-only sub-resource listing an
employee's benefits.  Request bodies and list parameters are validated
by the validation pipeline before a handler runs; a failure produces a
400 response with a field-indexed ``errors`` object.  Unknown
identities produce a 404.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from employee_api.app.api.deps import get_employee_service, get_validation_pipeline, validated_body
from employee_api.app.api.responses import DecimalJSONResponse, render
from employee_api.app.core.validation import ValidationPipeline
from employee_api.app.schemas.employee import (
    CreateEmployeeRequest,
    GetAllEmployeesRequest,
    GetEmployeeResponse,
    GetEmployeeResponseEmployeeBenefit,
    UpdateEmployeeRequest,
)
from employee_api.app.services.employee_service import EmployeeService
from employee_api.app.services.query import EmployeeQuery

router = APIRouter()

NOT_FOUND = "Employee not found"


async def list_parameters(
    first_name_contains: Optional[str] = Query(None, alias="FirstNameContains"),
    last_name_contains: Optional[str] = Query(None, alias="LastNameContains"),
    page: Optional[int] = Query(None, alias="Page"),
    records_per_page: Optional[int] = Query(None, alias="RecordsPerPage"),
    pipeline: ValidationPipeline = Depends(get_validation_pipeline),
) -> GetAllEmployeesRequest:
    """Collect the list query parameters and validate them."""
    request = GetAllEmployeesRequest(
        first_name_contains=first_name_contains,
        last_name_contains=last_name_contains,
        page=page,
        records_per_page=records_per_page,
    )
    await pipeline.ensure_valid({"params": request})
    return request


@router.get("", response_model=List[GetEmployeeResponse])
async def list_employees(
    params: GetAllEmployeesRequest = Depends(list_parameters),
    service: EmployeeService = Depends(get_employee_service),
) -> DecimalJSONResponse:
    """Return employees matching the name filters, one page at a time.

    - **FirstNameContains**, **LastNameContains**: case-sensitive
      substring filters; blank values are ignored.
    - **Page**, **RecordsPerPage**: paging window applied after
      filtering (defaults 1 and 100).
    """
    return render(await service.list_employees(EmployeeQuery.from_request(params)))


@router.get("/{employee_id}", response_model=GetEmployeeResponse)
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> DecimalJSONResponse:
    """Retrieve a single employee by ID."""
    employee = await service.get_employee(employee_id)
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return render(employee)


@router.get("/{employee_id}/benefits", response_model=List[GetEmployeeResponseEmployeeBenefit])
async def get_employee_benefits(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> DecimalJSONResponse:
    """List the benefits of an employee."""
    benefits = await service.get_benefits(employee_id)
    if benefits is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return render(benefits)


@router.post("", response_model=GetEmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    request: Request,
    employee_in: CreateEmployeeRequest = Depends(validated_body(CreateEmployeeRequest)),
    service: EmployeeService = Depends(get_employee_service),
) -> DecimalJSONResponse:
    """Create an employee together with its benefits.

    The ``Location`` header points at the new employee.
    """
    employee = await service.create_employee(employee_in)
    location = str(request.url_for("get_employee", employee_id=employee.id))
    return render(employee, status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.put("/{employee_id}", response_model=GetEmployeeResponse)
async def update_employee(
    employee_id: int,
    employee_in: UpdateEmployeeRequest = Depends(validated_body(UpdateEmployeeRequest)),
    service: EmployeeService = Depends(get_employee_service),
) -> DecimalJSONResponse:
    """Replace an employee's contact details.

    Every contact field in the body overwrites the stored value.  An
    address that is already set may not be cleared.
    """
    employee = await service.update_employee(employee_id, employee_in)
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return render(employee)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> None:
    """Delete an employee and its benefits."""
    deleted = await service.delete_employee(employee_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return None
