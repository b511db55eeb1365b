"""
Filtering and paging for employee lists.

``list_records`` narrows a sequence of stored employees with the
name filters and then cuts a page out of what is left.  Filtering runs
before paging so that a filter combined with a page size never drops
matches that happen to sit beyond the first window of the unfiltered
list.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from employee_api.app.core.config import settings
from employee_api.app.schemas.employee import Employee, GetAllEmployeesRequest

DEFAULT_PAGE = 1


@dataclass
class EmployeeQuery:
    """Optional filters and paging window for a list request."""

    first_name_contains: Optional[str] = None
    last_name_contains: Optional[str] = None
    page: Optional[int] = None
    records_per_page: Optional[int] = None

    @classmethod
    def from_request(cls, request: Optional[GetAllEmployeesRequest]) -> "EmployeeQuery":
        if request is None:
            return cls()
        return cls(
            first_name_contains=request.first_name_contains,
            last_name_contains=request.last_name_contains,
            page=request.page,
            records_per_page=request.records_per_page,
        )

    def predicates(self) -> List[Callable[[Employee], bool]]:
        """Substring filters for every non-blank criterion (case-sensitive)."""
        predicates: List[Callable[[Employee], bool]] = []
        first = self.first_name_contains
        last = self.last_name_contains
        if first and first.strip():
            predicates.append(lambda employee: first in employee.first_name)
        if last and last.strip():
            predicates.append(lambda employee: last in employee.last_name)
        return predicates


def list_records(
    records: Sequence[Employee],
    query: Optional[EmployeeQuery] = None,
    default_page_size: int = settings.default_page_size,
) -> List[Employee]:
    """Return the requested page of employees matching every filter.

    ``records`` must already be in the store's natural order.  Missing
    paging values fall back to page 1 and ``default_page_size`` records.
    A query that matches nothing returns an empty list.
    """
    query = query or EmployeeQuery()
    predicates = query.predicates()
    matching = [record for record in records if all(p(record) for p in predicates)]

    page = query.page or DEFAULT_PAGE
    page_size = query.records_per_page or default_page_size
    start = (page - 1) * page_size
    return matching[start:start + page_size]
