"""
Pydantic models for employee data.

Three families of models live here:

* stored records (``Employee`` and ``EmployeeBenefit``) kept by the
  record store;
* request payloads (``CreateEmployeeRequest``, ``UpdateEmployeeRequest``
  and ``GetAllEmployeesRequest``) which pass through the validation
  pipeline before any store operation runs;
* response shapes (``GetEmployeeResponse`` and
  ``GetEmployeeResponseEmployeeBenefit``) produced by the projection in
  ``services.projection``.

Attributes are snake_case in Python.  On the wire every field uses its
PascalCase alias (``FirstName``, ``ZipCode``...), which is also the key
used in validation error reports.  Either form is accepted on input.
"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal


class ApiModel(BaseModel):
    """Base class giving every model PascalCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        from_attributes=True,
    )


class BenefitType(str, Enum):
    HEALTH = "Health"
    DENTAL = "Dental"
    VISION = "Vision"


class EmployeeBenefit(ApiModel):
    """A benefit line item owned by an employee.

    ``id`` and ``employee_id`` are assigned by the store when the owning
    employee is created; values supplied by callers are ignored.
    """

    id: int = 0
    employee_id: int = 0
    benefit_type: BenefitType
    cost: Decimal = Decimal("0")


class Employee(ApiModel):
    """Stored employee record."""

    id: int = 0
    first_name: str
    last_name: str
    social_security_number: Optional[str] = None

    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None

    benefits: List[EmployeeBenefit] = Field(default_factory=list)


# Fields an update request may change.  Identity, names and benefits are
# not updatable through the update operation.
UPDATABLE_FIELDS = (
    "address1",
    "address2",
    "city",
    "state",
    "zip_code",
    "phone_number",
    "email",
)


class CreateEmployeeBenefitRequest(ApiModel):
    benefit_type: BenefitType = Field(..., examples=["Health"])
    cost: Decimal = Field(..., examples=[100])


class CreateEmployeeRequest(ApiModel):
    """Payload for creating an employee.

    Names are optional at the type level so that a missing name reaches
    the validation pipeline and is reported as ``'First Name' must not be
    empty.`` instead of a generic parsing error.
    """

    first_name: Optional[str] = Field(None, examples=["John"])
    last_name: Optional[str] = Field(None, examples=["Doe"])
    social_security_number: Optional[str] = Field(None, examples=["123-45-6789"])

    address1: Optional[str] = Field(None, examples=["123 Main St"])
    address2: Optional[str] = None
    city: Optional[str] = Field(None, examples=["Any town"])
    state: Optional[str] = Field(None, examples=["NY"])
    zip_code: Optional[str] = Field(None, examples=["12345"])
    phone_number: Optional[str] = Field(None, examples=["555-123-4567"])
    email: Optional[str] = Field(None, examples=["john.doe@example.com"])

    benefits: List[CreateEmployeeBenefitRequest] = Field(default_factory=list)


class UpdateEmployeeRequest(ApiModel):
    """Payload for updating an employee's contact details.

    Every field replaces the stored value, including ``None``.
    """

    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None


class GetAllEmployeesRequest(ApiModel):
    """Filter and paging parameters for listing employees."""

    first_name_contains: Optional[str] = None
    last_name_contains: Optional[str] = None
    page: Optional[int] = None
    records_per_page: Optional[int] = None


class GetEmployeeResponseEmployeeBenefit(ApiModel):
    """Benefit as returned to clients.

    ``cost`` stays a ``Decimal``; ``api.responses`` writes it to JSON as an
    exact number.
    """

    model_config = ConfigDict(use_enum_values=True)

    id: int
    employee_id: int
    benefit_type: BenefitType
    cost: Decimal


class GetEmployeeResponse(ApiModel):
    """Externally visible shape of an employee."""

    id: int
    first_name: str
    last_name: str

    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None

    benefits: List[GetEmployeeResponseEmployeeBenefit]
