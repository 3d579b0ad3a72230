from typing import Callable

import pytest

from payroll_engine.models import (
    BankAccount,
    Employee,
    PaymentFrequency,
    PaymentMethod,
    PaymentRecord,
    PaymentStatus,
    PayrollRun,
    PayrollStatus,
)


def build_employee(**overrides) -> Employee:
    fields = {
        "id": "emp-1",
        "employee_number": "EMP123456001",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "department": "Engineering",
        "position": "Engineer",
        "hire_date": "2020-01-06",
        "salary": 52000,
        "payment_frequency": PaymentFrequency.BI_WEEKLY,
        "bank_account": BankAccount(routing_number="021000021", account_number="123456789"),
    }
    fields.update(overrides)
    return Employee(**fields)


def build_payment(payment_id: str, gross: float, status: PaymentStatus = PaymentStatus.PENDING) -> PaymentRecord:
    deductions = gross * 0.3
    return PaymentRecord(
        id=payment_id,
        employee_id=f"emp-{payment_id}",
        employee_name="Test Person",
        amount=gross - deductions,
        gross_amount=gross,
        deductions=deductions,
        net_amount=gross - deductions,
        status=status,
        payment_method=PaymentMethod.ACH,
        payment_date="2024-06-14",
    )


def build_run(run_id: str, payment_date: str, total_amount: float, status=PayrollStatus.COMPLETED, payments=()):
    return PayrollRun(
        id=run_id,
        run_number=f"PR{run_id}",
        status=status,
        pay_period_start=payment_date,
        pay_period_end=payment_date,
        payment_date=payment_date,
        total_employees=len(payments),
        total_amount=total_amount,
        total_gross_amount=total_amount,
        total_deductions=0,
        total_net_amount=total_amount,
        payments=tuple(payments),
        created_by="admin@example.com",
        created_at=f"{payment_date}T00:00:00",
    )


@pytest.fixture
def employee_factory() -> Callable[..., Employee]:
    return build_employee


@pytest.fixture
def payment_factory() -> Callable[..., PaymentRecord]:
    return build_payment


@pytest.fixture
def run_factory() -> Callable[..., PayrollRun]:
    return build_run
