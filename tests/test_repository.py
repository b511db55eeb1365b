"""Record store tests, run against the in-memory and SQLite stores."""

import asyncio
from decimal import Decimal

import pytest

from employee_api.app.core.db import get_connection
from employee_api.app.schemas.employee import BenefitType, EmployeeBenefit

from .conftest import make_employee


@pytest.mark.asyncio
async def test_create_assigns_increasing_ids(repository) -> None:
    first = await repository.create(make_employee("John", "Smith"))
    second = await repository.create(make_employee("Jane", "Doe"))
    assert first.id > 0
    assert second.id > first.id


@pytest.mark.asyncio
async def test_get_by_id_returns_stored_record(repository) -> None:
    created = await repository.create(make_employee(address1="1 Road", email="j@example.com"))
    fetched = await repository.get_by_id(created.id)
    assert fetched == created
    assert fetched.address1 == "1 Road"


@pytest.mark.asyncio
async def test_get_by_id_missing_returns_none(repository) -> None:
    assert await repository.get_by_id(99999) is None


@pytest.mark.asyncio
async def test_get_all_preserves_insertion_order(repository) -> None:
    for name in ("Ann", "Bob", "Cid"):
        await repository.create(make_employee(name, "Test"))
    names = [employee.first_name for employee in await repository.get_all()]
    assert names == ["Ann", "Bob", "Cid"]


@pytest.mark.asyncio
async def test_returned_records_are_copies(repository) -> None:
    created = await repository.create(make_employee(address1="1 Road"))
    created.address1 = "changed"
    fetched = await repository.get_by_id(created.id)
    assert fetched.address1 == "1 Road"


@pytest.mark.asyncio
async def test_update_replaces_fields(repository) -> None:
    created = await repository.create(make_employee(address1="1 Road"))
    updated = created.model_copy(update={"address1": "2 Street", "city": "Springfield"})
    assert await repository.update(updated) is True
    fetched = await repository.get_by_id(created.id)
    assert fetched.address1 == "2 Street"
    assert fetched.city == "Springfield"


@pytest.mark.asyncio
async def test_update_unknown_identity_is_noop(repository) -> None:
    ghost = make_employee(id=99999)
    assert await repository.update(ghost) is False
    assert await repository.get_all() == []


@pytest.mark.asyncio
async def test_update_keeps_benefits(repository) -> None:
    created = await repository.create(
        make_employee(benefits=[EmployeeBenefit(benefit_type=BenefitType.VISION, cost=Decimal("30"))])
    )
    await repository.update(created.model_copy(update={"benefits": [], "city": "Nowhere"}))
    fetched = await repository.get_by_id(created.id)
    assert len(fetched.benefits) == 1
    assert fetched.city == "Nowhere"


@pytest.mark.asyncio
async def test_delete_existing_and_missing(repository) -> None:
    created = await repository.create(make_employee())
    assert await repository.delete(created.id) is True
    assert await repository.get_by_id(created.id) is None
    assert await repository.delete(created.id) is False
    assert await repository.delete(99999) is False


@pytest.mark.asyncio
async def test_deleted_identity_is_not_reused(repository) -> None:
    await repository.create(make_employee("A", "One"))
    second = await repository.create(make_employee("B", "Two"))
    await repository.delete(second.id)
    third = await repository.create(make_employee("C", "Three"))
    assert third.id > second.id


@pytest.mark.asyncio
async def test_benefits_receive_identity_and_owner(repository) -> None:
    created = await repository.create(
        make_employee(
            benefits=[
                EmployeeBenefit(benefit_type=BenefitType.HEALTH, cost=Decimal("100")),
                EmployeeBenefit(benefit_type=BenefitType.DENTAL, cost=Decimal("50.25")),
            ]
        )
    )
    benefits = (await repository.get_by_id(created.id)).benefits
    assert [b.benefit_type for b in benefits] == [BenefitType.HEALTH, BenefitType.DENTAL]
    assert [b.cost for b in benefits] == [Decimal("100"), Decimal("50.25")]
    assert all(b.employee_id == created.id for b in benefits)
    assert len({b.id for b in benefits}) == 2


@pytest.mark.asyncio
async def test_concurrent_creates_get_distinct_ids(repository) -> None:
    created = await asyncio.gather(
        *(repository.create(make_employee(f"Name{i}", "Test")) for i in range(20))
    )
    ids = [employee.id for employee in created]
    assert len(set(ids)) == 20


@pytest.mark.asyncio
async def test_sqlite_delete_cascades_to_benefits(sqlite_repository) -> None:
    created = await sqlite_repository.create(
        make_employee(benefits=[EmployeeBenefit(benefit_type=BenefitType.HEALTH, cost=Decimal("1"))])
    )
    await sqlite_repository.delete(created.id)
    conn = get_connection(sqlite_repository.db_path)
    try:
        count = conn.execute(
            "SELECT COUNT(*) FROM employee_benefits WHERE employee_id = ?", (created.id,)
        ).fetchone()[0]
    finally:
        conn.close()
    assert count == 0


@pytest.mark.asyncio
async def test_memory_reset_restarts_identities(memory_repository) -> None:
    await memory_repository.create(make_employee())
    await memory_repository.create(make_employee())
    memory_repository.reset()
    assert await memory_repository.get_all() == []
    created = await memory_repository.create(make_employee())
    assert created.id == 1
