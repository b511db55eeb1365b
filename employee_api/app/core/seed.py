"""
Sample employees for development databases.

``seed_employees`` inserts two employees with their benefits when the
store is empty and does nothing otherwise.
"""

import logging
from decimal import Decimal
from typing import List

from .repository import Repository
from ..schemas.employee import BenefitType, Employee, EmployeeBenefit

logger = logging.getLogger(__name__)


def sample_employees() -> List[Employee]:
    return [
        Employee(
            first_name="John",
            last_name="Doe",
            social_security_number="123-45-6789",
            address1="123 Main St",
            city="Any town",
            state="NY",
            zip_code="12345",
            phone_number="555-123-4567",
            email="john.doe@example.com",
            benefits=[
                EmployeeBenefit(benefit_type=BenefitType.HEALTH, cost=Decimal("100.00")),
                EmployeeBenefit(benefit_type=BenefitType.DENTAL, cost=Decimal("50.00")),
            ],
        ),
        Employee(
            first_name="Jane",
            last_name="Smith",
            social_security_number="987-65-4321",
            address1="456 Elm St",
            address2="Apt 2B",
            city="Other town",
            state="CA",
            zip_code="98765",
            phone_number="555-987-6543",
            email="jane.smith@example.com",
            benefits=[
                EmployeeBenefit(benefit_type=BenefitType.HEALTH, cost=Decimal("120.00")),
                EmployeeBenefit(benefit_type=BenefitType.VISION, cost=Decimal("30.00")),
            ],
        ),
    ]


async def seed_employees(repository: Repository[Employee]) -> int:
    """Insert the sample employees into an empty store.

    Returns the number of employees inserted (0 if the store already
    held data).
    """
    if await repository.get_all():
        logger.info("Employee store already populated; skipping seed data")
        return 0
    employees = sample_employees()
    for employee in employees:
        await repository.create(employee)
    logger.info("Seeded %d employees", len(employees))
    return len(employees)
