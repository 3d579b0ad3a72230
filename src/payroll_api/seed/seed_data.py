from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from payroll_engine.models import (
    AccountType,
    BankAccount,
    EmployeeStatus,
    EmploymentType,
    PaymentFrequency,
    PayrollRunRequest,
)

if TYPE_CHECKING:
    from payroll_api.services.payroll import PayrollService

DEMO_EMPLOYEES = [
    {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada.lovelace@example.com",
        "phone": "(555) 123-4567",
        "department": "Engineering",
        "position": "Principal Engineer",
        "hire_date": "2020-01-06",
        "salary": 156000,
        "payment_frequency": PaymentFrequency.BI_WEEKLY,
        "bank_account": BankAccount(
            routing_number="021000021",
            account_number="123456789",
            account_type=AccountType.CHECKING,
            bank_name="First Example Bank",
            account_holder_name="Ada Lovelace",
        ),
        "tax_id": "123-45-6789",
    },
    {
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace.hopper@example.com",
        "phone": "555-987-6543",
        "department": "Operations",
        "position": "Operations Manager",
        "hire_date": "2019-03-18",
        "salary": 96000,
        "payment_frequency": PaymentFrequency.SEMI_MONTHLY,
        "bank_account": BankAccount(
            routing_number="011000015",
            account_number="55501234",
            account_type=AccountType.SAVINGS,
            bank_name="Harbor Credit Union",
            account_holder_name="Grace Hopper",
        ),
    },
    {
        "first_name": "Alan",
        "last_name": "Turing",
        "email": "alan.turing@example.com",
        "department": "Research",
        "position": "Research Scientist",
        "hire_date": "2021-09-01",
        "salary": 52000,
        "payment_frequency": PaymentFrequency.WEEKLY,
        "employment_type": EmploymentType.PART_TIME,
        "status": EmployeeStatus.ON_LEAVE,
    },
]


def seed(service: PayrollService, today: date | None = None) -> None:
    today = today or date.today()
    employees = [service.create_employee(data) for data in DEMO_EMPLOYEES]
    employee_ids = [employee.id for employee in employees if employee.status == EmployeeStatus.ACTIVE]

    for weeks_back in (6, 4, 2):
        period_end = today - timedelta(weeks=weeks_back)
        request = PayrollRunRequest(
            pay_period_start=(period_end - timedelta(days=13)).isoformat(),
            pay_period_end=period_end.isoformat(),
            payment_date=(period_end + timedelta(days=3)).isoformat(),
            employee_ids=employee_ids,
        )
        run = service.create_run(request)
        if weeks_back > 2:
            service.process_run(run.id)
