"""Tests for the employee response projection."""

import json
from decimal import Decimal

from employee_api.app.api.responses import render
from employee_api.app.schemas.employee import BenefitType, CreateEmployeeRequest, EmployeeBenefit
from employee_api.app.services.projection import project_employee

from .conftest import make_employee


def test_projection_copies_fields_and_benefits_in_order() -> None:
    employee = make_employee(
        id=5,
        social_security_number="123-45-6789",
        address1="1 Road",
        address2="Apt 2",
        city="Town",
        state="NY",
        zip_code="12345",
        phone_number="555",
        email="john@example.com",
        benefits=[
            EmployeeBenefit(id=9, employee_id=5, benefit_type=BenefitType.VISION, cost=Decimal("30")),
            EmployeeBenefit(id=10, employee_id=5, benefit_type=BenefitType.HEALTH, cost=Decimal("120.50")),
        ],
    )

    response = project_employee(employee)

    assert response.id == 5
    assert (response.first_name, response.last_name) == ("John", "Smith")
    assert (response.address1, response.address2, response.city) == ("1 Road", "Apt 2", "Town")
    assert (response.state, response.zip_code) == ("NY", "12345")
    assert (response.phone_number, response.email) == ("555", "john@example.com")
    assert [(b.id, b.employee_id, b.benefit_type, b.cost) for b in response.benefits] == [
        (9, 5, BenefitType.VISION, Decimal("30")),
        (10, 5, BenefitType.HEALTH, Decimal("120.50")),
    ]


def test_projection_hides_social_security_number() -> None:
    response = project_employee(make_employee(id=1, social_security_number="123-45-6789"))
    dumped = response.model_dump(by_alias=True)
    assert "SocialSecurityNumber" not in dumped
    assert dumped["FirstName"] == "John"
    assert dumped["Benefits"] == []


def test_benefit_cost_is_written_as_exact_number() -> None:
    employee = make_employee(
        id=1,
        benefits=[
            EmployeeBenefit(
                id=1, employee_id=1, benefit_type=BenefitType.DENTAL, cost=Decimal("12345678901234567.89")
            )
        ],
    )
    body = render(project_employee(employee).benefits).body.decode("utf-8")
    assert body == '[{"Id":1,"EmployeeId":1,"BenefitType":"Dental","Cost":12345678901234567.89}]'
    assert json.loads(body, parse_float=Decimal)[0]["Cost"] == Decimal("12345678901234567.89")


def test_models_accept_wire_and_python_names() -> None:
    assert CreateEmployeeRequest(FirstName="Ann").first_name == "Ann"
    assert CreateEmployeeRequest(first_name="Ann").first_name == "Ann"
    assert CreateEmployeeRequest.model_fields["zip_code"].alias == "ZipCode"
