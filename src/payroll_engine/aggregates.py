from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from .calculator import calculate_deductions, calculate_next_payment_date, gross_per_period
from .dates import DateLike, parse_iso_date
from .models import (
    Employee,
    EmployeeStatus,
    PaymentFrequency,
    PaymentRecord,
    PaymentStatus,
    PayrollAnalytics,
    PayrollRun,
    PayrollStatus,
    PayrollSummary,
    PayrollTotals,
    RunMetadata,
)


def calculate_payroll_totals(payments: Iterable[PaymentRecord]) -> PayrollTotals:
    total_gross = 0.0
    total_deductions = 0.0
    total_net = 0.0
    for payment in payments:
        total_gross += payment.gross_amount
        total_deductions += payment.deductions
        total_net += payment.net_amount
    return PayrollTotals(
        total_gross_amount=total_gross,
        total_deductions=total_deductions,
        total_net_amount=total_net,
        total_amount=total_net,
    )


def payroll_run_metadata(payments: Iterable[PaymentRecord]) -> RunMetadata:
    statuses = [payment.status for payment in payments]
    return RunMetadata(
        successful_payments=statuses.count(PaymentStatus.COMPLETED),
        failed_payments=statuses.count(PaymentStatus.FAILED),
        pending_payments=statuses.count(PaymentStatus.PENDING),
    )


def _completed_runs(runs: Iterable[PayrollRun]) -> List[PayrollRun]:
    return [run for run in runs if run.status == PayrollStatus.COMPLETED]


def calculate_ytd_payroll(runs: Iterable[PayrollRun], today: Optional[date] = None) -> float:
    """Total paid by completed runs dated in the current calendar year."""

    today = today or date.today()
    total = 0.0
    for run in _completed_runs(runs):
        if parse_iso_date(run.payment_date).year == today.year:
            total += run.total_amount
    return total


def calculate_mtd_payroll(runs: Iterable[PayrollRun], today: Optional[date] = None) -> float:
    """Total paid by completed runs dated in the current calendar month."""

    today = today or date.today()
    total = 0.0
    for run in _completed_runs(runs):
        paid_on = parse_iso_date(run.payment_date)
        if (paid_on.year, paid_on.month) == (today.year, today.month):
            total += run.total_amount
    return total


def latest_completed_run(runs: Iterable[PayrollRun]) -> Optional[PayrollRun]:
    completed = _completed_runs(runs)
    if not completed:
        return None
    return max(completed, key=lambda run: parse_iso_date(run.payment_date))


def estimate_upcoming_payroll(employees: Iterable[Employee]) -> float:
    """Net amount a run over every active employee would disburse."""

    total = 0.0
    for employee in employees:
        if employee.status != EmployeeStatus.ACTIVE:
            continue
        gross = gross_per_period(employee.salary, employee.payment_frequency)
        total += gross - calculate_deductions(gross)
    return total


def payroll_summary(
    employees: Iterable[Employee],
    runs: Iterable[PayrollRun],
    today: Optional[date] = None,
    frequency: str = PaymentFrequency.BI_WEEKLY,
) -> PayrollSummary:
    today = today or date.today()
    employee_list = list(employees)
    run_list = list(runs)
    active = sum(1 for employee in employee_list if employee.status == EmployeeStatus.ACTIVE)
    last_run = latest_completed_run(run_list)
    anchor: DateLike = last_run.payment_date if last_run else today

    return PayrollSummary(
        total_employees=len(employee_list),
        active_employees=active,
        inactive_employees=len(employee_list) - active,
        next_payroll_date=calculate_next_payment_date(anchor, frequency),
        month_to_date_payroll=calculate_mtd_payroll(run_list, today),
        year_to_date_payroll=calculate_ytd_payroll(run_list, today),
        upcoming_payroll_amount=estimate_upcoming_payroll(employee_list),
        last_payroll_date=last_run.payment_date if last_run else None,
        last_payroll_amount=last_run.total_amount if last_run else None,
    )


def payroll_analytics(
    employees: Iterable[Employee],
    runs: Iterable[PayrollRun],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None,
) -> PayrollAnalytics:
    run_list = list(runs)
    paid_runs = []
    for run in _completed_runs(run_list):
        paid_on = parse_iso_date(run.payment_date)
        if start_date and paid_on < start_date:
            continue
        if end_date and paid_on > end_date:
            continue
        paid_runs.append(run)

    total_paid = sum(run.total_amount for run in paid_runs)
    payment_count = sum(len(run.payments) for run in paid_runs)
    return PayrollAnalytics(
        total_employees=len(list(employees)),
        total_payroll_runs=len(run_list),
        total_amount_paid=total_paid,
        average_payment=total_paid / payment_count if payment_count else 0.0,
        ytd_total=calculate_ytd_payroll(run_list, today),
    )
