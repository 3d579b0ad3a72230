from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from functools import cmp_to_key
from typing import Generic, Iterable, List, Literal, Optional, Sequence, TypeVar

from .dates import parse_iso_date
from .models import Employee, PayrollRun

T = TypeVar("T")

SEARCH_FIELDS = ("first_name", "last_name", "email", "employee_number", "department", "position")


@dataclass(frozen=True)
class Page(Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int


def filter_employees(employees: Iterable[Employee], search_term: Optional[str]) -> List[Employee]:
    """Case-insensitive substring search across the name and contact fields."""

    employee_list = list(employees)
    if not search_term:
        return employee_list
    term = search_term.lower()
    return [
        employee
        for employee in employee_list
        if any(term in (getattr(employee, name) or "").lower() for name in SEARCH_FIELDS)
    ]


def filter_employees_by(
    employees: Iterable[Employee],
    statuses: Optional[List[str]] = None,
    departments: Optional[List[str]] = None,
    search: Optional[str] = None,
) -> List[Employee]:
    def matches(employee: Employee) -> bool:
        if statuses and employee.status not in statuses:
            return False
        if departments and employee.department not in departments:
            return False
        return True

    return filter_employees([employee for employee in employees if matches(employee)], search)


def sort_employees(
    employees: Iterable[Employee],
    field: str,
    direction: Literal["asc", "desc"] = "asc",
) -> List[Employee]:
    """Stable sort on one attribute; records missing the value keep their place."""

    def compare(a: Employee, b: Employee) -> int:
        a_value = getattr(a, field, None)
        b_value = getattr(b, field, None)
        if a_value is None or b_value is None:
            return 0
        comparison = (a_value > b_value) - (a_value < b_value)
        return comparison if direction == "asc" else -comparison

    return sorted(employees, key=cmp_to_key(compare))


def filter_payroll_runs(
    runs: Iterable[PayrollRun],
    statuses: Optional[List[str]] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[PayrollRun]:
    """Filter runs by status and payment date, most recent payment first."""

    def matches(run: PayrollRun) -> bool:
        paid_on = parse_iso_date(run.payment_date)
        if statuses and run.status not in statuses:
            return False
        if date_from and paid_on < date_from:
            return False
        if date_to and paid_on > date_to:
            return False
        return True

    selected = [run for run in runs if matches(run)]
    return sorted(selected, key=lambda run: parse_iso_date(run.payment_date), reverse=True)


def paginate(items: Sequence[T], page: int = 0, limit: int = 25) -> Page[T]:
    start = page * limit
    return Page(data=list(items[start:start + limit]), total=len(items), page=page, limit=limit)
