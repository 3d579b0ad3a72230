from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

import structlog

from .aggregates import calculate_payroll_totals, payroll_run_metadata
from .calculator import calculate_deductions, deduction_details, gross_per_period
from .formatting import employee_full_name, format_date
from .identifiers import generate_payment_id, generate_payroll_run_id, generate_payroll_run_number
from .models import (
    Employee,
    PaymentMetadata,
    PaymentMethod,
    PaymentRecord,
    PaymentStatus,
    PayrollRun,
    PayrollRunRequest,
    PayrollStatus,
    PayrollTotals,
    ValidationResult,
)

logger = structlog.get_logger(__name__)

FRIDAY = 4


@dataclass(frozen=True)
class PayrollPreview:
    payments: Tuple[PaymentRecord, ...]
    totals: PayrollTotals


def generate_payment_records(
    employees: Iterable[Employee],
    payment_date: str,
    pay_period_start: str,
    pay_period_end: str,
    now: Optional[datetime] = None,
) -> List[PaymentRecord]:
    """One pending ACH payment per employee, in the order given."""

    period = f"{format_date(pay_period_start)} - {format_date(pay_period_end)}"
    records: List[PaymentRecord] = []
    for employee in employees:
        gross_amount = gross_per_period(employee.salary, employee.payment_frequency)
        deductions = calculate_deductions(gross_amount)
        net_amount = gross_amount - deductions
        records.append(
            PaymentRecord(
                id=generate_payment_id(employee.id, now),
                employee_id=employee.id,
                employee_name=employee_full_name(employee),
                amount=net_amount,
                gross_amount=gross_amount,
                deductions=deductions,
                net_amount=net_amount,
                status=PaymentStatus.PENDING,
                payment_method=PaymentMethod.ACH,
                payment_date=payment_date,
                metadata=PaymentMetadata(period=period, deduction_details=deduction_details(gross_amount)),
            )
        )
    logger.debug("payment_records_generated", count=len(records), payment_date=payment_date)
    return records


def default_run_dates(today: Optional[date] = None) -> Dict[str, str]:
    """Two-week period ending today, paid on the next Friday after today."""

    today = today or date.today()
    days_to_friday = (FRIDAY - today.weekday()) % 7 or 7
    return {
        "pay_period_start": (today - timedelta(days=14)).isoformat(),
        "pay_period_end": today.isoformat(),
        "payment_date": (today + timedelta(days=days_to_friday)).isoformat(),
    }


def validate_run_request(request: PayrollRunRequest) -> ValidationResult:
    errors: Dict[str, str] = {}
    if not request.employee_ids:
        errors["employee_ids"] = "Please select at least one employee"
    if not (request.payment_date and request.pay_period_start and request.pay_period_end):
        errors["dates"] = "Please fill in all date fields"
    return ValidationResult(is_valid=not errors, errors=errors)


def select_employees(employees: Iterable[Employee], employee_ids: Iterable[str]) -> List[Employee]:
    wanted = set(employee_ids)
    return [employee for employee in employees if employee.id in wanted]


class PayrollRunWizard:
    """Turns a run request into reviewed payments and then a payroll run."""

    def __init__(self, created_by: str):
        self.created_by = created_by

    def review(
        self,
        request: PayrollRunRequest,
        employees: Iterable[Employee],
        now: Optional[datetime] = None,
    ) -> PayrollPreview:
        selected = select_employees(employees, request.employee_ids)
        payments = generate_payment_records(
            selected, request.payment_date, request.pay_period_start, request.pay_period_end, now
        )
        return PayrollPreview(payments=tuple(payments), totals=calculate_payroll_totals(payments))

    def build_run(
        self,
        request: PayrollRunRequest,
        employees: Iterable[Employee],
        now: Optional[datetime] = None,
    ) -> PayrollRun:
        now = now or datetime.now()
        preview = self.review(request, employees, now)
        totals = preview.totals
        stamp = now.isoformat()
        run = PayrollRun(
            id=generate_payroll_run_id(now),
            run_number=generate_payroll_run_number(now),
            status=PayrollStatus.PROCESSING,
            pay_period_start=request.pay_period_start,
            pay_period_end=request.pay_period_end,
            payment_date=request.payment_date,
            total_employees=len(preview.payments),
            total_amount=totals.total_amount,
            total_gross_amount=totals.total_gross_amount,
            total_deductions=totals.total_deductions,
            total_net_amount=totals.total_net_amount,
            payments=preview.payments,
            created_by=self.created_by,
            created_at=stamp,
            processed_at=stamp,
            notes=request.notes,
            metadata=payroll_run_metadata(preview.payments),
        )
        logger.info("payroll_run_built", run_number=run.run_number, employees=run.total_employees)
        return run
