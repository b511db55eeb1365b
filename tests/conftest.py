"""Shared fixtures: record stores, a configured app and a test client."""

import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from employee_api.app.core.config import Settings
from employee_api.app.core.db import init_db
from employee_api.app.core.repository import InMemoryRepository
from employee_api.app.main import create_app
from employee_api.app.schemas.employee import BenefitType, Employee, EmployeeBenefit
from employee_api.app.services.employee_repository import SqliteEmployeeRepository

API = "/api/v1/employees"


def make_employee(first_name="John", last_name="Smith", **fields) -> Employee:
    return Employee(first_name=first_name, last_name=last_name, **fields)


@pytest.fixture
def memory_repository():
    return InMemoryRepository(children="benefits", owner_field="employee_id")


@pytest.fixture
def sqlite_repository(tmp_path):
    db_path = str(tmp_path / "employee.db")
    init_db(db_path)
    return SqliteEmployeeRepository(db_path)


@pytest.fixture(params=["memory", "sqlite"])
def repository(request):
    """Each test using this fixture runs against both store implementations."""
    return request.getfixturevalue(f"{request.param}_repository")


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / "api.db"),
        storage_backend="sqlite",
        seed_data=False,
        api_prefix="/api/v1",
    )


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def employee_id(client):
    """Store John Smith (address set, two benefits) directly and return his id."""
    repository = client.app.state.repository
    employee = make_employee(
        address1="123 Main Street",
        benefits=[
            EmployeeBenefit(benefit_type=BenefitType.HEALTH, cost=Decimal("100")),
            EmployeeBenefit(benefit_type=BenefitType.DENTAL, cost=Decimal("50")),
        ],
    )
    created = asyncio.run(repository.create(employee))
    return created.id
