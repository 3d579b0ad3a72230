from __future__ import annotations

from dataclasses import MISSING, asdict, fields, replace
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Callable, Dict, List, Mapping, Optional

from payroll_api.core.config import Settings, settings
from payroll_api.core.logging import get_logger
from payroll_api.core.observability import payments_generated, payroll_runs_created, tracer
from payroll_api.errors import (
    EmployeeNotFound,
    EmployeeValidationError,
    InvalidRunTransition,
    PaymentNotFound,
    PayrollRunNotFound,
    RunRequestValidationError,
)
from payroll_api.seed.seed_data import seed
from payroll_api.store.repository import InMemoryRepository, Repository
from payroll_engine.aggregates import payroll_analytics, payroll_run_metadata, payroll_summary
from payroll_engine.filters import filter_employees_by, filter_payroll_runs
from payroll_engine.identifiers import generate_employee_id, generate_employee_number, generate_transaction_id
from payroll_engine.models import (
    Employee,
    PaymentRecord,
    PaymentStatus,
    PayrollAnalytics,
    PayrollRun,
    PayrollRunRequest,
    PayrollStatus,
    PayrollSummary,
)
from payroll_engine.validation import validate_employee
from payroll_engine.wizard import PayrollPreview, PayrollRunWizard, validate_run_request

logger = get_logger(__name__)

OPEN_RUN_STATUSES = {PayrollStatus.DRAFT, PayrollStatus.PENDING, PayrollStatus.PROCESSING}

# Assigned by the service, never taken from callers.
MANAGED_EMPLOYEE_FIELDS = {"id", "employee_number", "created_at", "updated_at"}
EDITABLE_EMPLOYEE_FIELDS = {field.name for field in fields(Employee)} - MANAGED_EMPLOYEE_FIELDS
EMPLOYEE_FIELD_DEFAULTS = {
    field.name: field.default for field in fields(Employee) if field.default is not MISSING
}
REQUIRED_EMPLOYEE_FIELDS = {
    name for name in EDITABLE_EMPLOYEE_FIELDS if EMPLOYEE_FIELD_DEFAULTS.get(name, MISSING) is not None
}


def _editable(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key in EDITABLE_EMPLOYEE_FIELDS}


def _check_employee(record: Mapping[str, Any]) -> None:
    errors = dict(validate_employee(record).errors)
    for name in sorted(REQUIRED_EMPLOYEE_FIELDS):
        if record.get(name) is None:
            errors.setdefault(name, f"{name.replace('_', ' ').capitalize()} is required")
    if errors:
        raise EmployeeValidationError(errors)


def _unique_id(generate: Callable[[], str], repository: Repository) -> str:
    base = generate()
    candidate = base
    counter = 1
    while repository.get(candidate) is not None:
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


class PayrollService:
    """Employee and payroll-run operations over a pair of repositories.

    All arithmetic is delegated to ``payroll_engine``; this layer owns ids,
    timestamps and storage.
    """

    def __init__(
        self,
        employees: Repository[Employee],
        runs: Repository[PayrollRun],
        config: Settings = settings,
    ) -> None:
        self.employees = employees
        self.runs = runs
        self.config = config
        self.wizard = PayrollRunWizard(created_by=config.created_by)

    # Employees

    def list_employees(
        self,
        statuses: Optional[List[str]] = None,
        departments: Optional[List[str]] = None,
        search: Optional[str] = None,
    ) -> List[Employee]:
        return filter_employees_by(self.employees.list(), statuses, departments, search)

    def get_employee(self, employee_id: str) -> Employee:
        employee = self.employees.get(employee_id)
        if employee is None:
            raise EmployeeNotFound(employee_id)
        return employee

    def create_employee(self, data: Mapping[str, Any]) -> Employee:
        data = _editable(data)
        _check_employee({**EMPLOYEE_FIELD_DEFAULTS, **data})

        now = datetime.now()
        stamp = now.isoformat()
        employee = Employee(
            id=_unique_id(lambda: generate_employee_id(now), self.employees),
            employee_number=generate_employee_number(now),
            created_at=stamp,
            updated_at=stamp,
            **data,
        )
        self.employees.create(employee)
        logger.info("employee_created", employee_id=employee.id, employee_number=employee.employee_number)
        return employee

    def update_employee(self, employee_id: str, changes: Mapping[str, Any]) -> Employee:
        current = self.get_employee(employee_id)
        changes = _editable(changes)
        _check_employee({**asdict(current), **changes})

        updated = replace(current, **changes, updated_at=datetime.now().isoformat())
        self.employees.update(updated)
        logger.info("employee_updated", employee_id=employee_id, fields=sorted(changes))
        return updated

    def delete_employee(self, employee_id: str) -> None:
        if not self.employees.delete(employee_id):
            raise EmployeeNotFound(employee_id)
        logger.info("employee_deleted", employee_id=employee_id)

    # Payroll runs

    def list_runs(
        self,
        statuses: Optional[List[str]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[PayrollRun]:
        return filter_payroll_runs(self.runs.list(), statuses, date_from, date_to)

    def get_run(self, run_id: str) -> PayrollRun:
        run = self.runs.get(run_id)
        if run is None:
            raise PayrollRunNotFound(run_id)
        return run

    def preview_run(self, request: PayrollRunRequest) -> PayrollPreview:
        self._check_run_request(request)
        return self.wizard.review(request, self.employees.list())

    def create_run(self, request: PayrollRunRequest) -> PayrollRun:
        self._check_run_request(request)
        with tracer.start_as_current_span("payroll.create_run") as span:
            run = self.wizard.build_run(request, self.employees.list())
            run = replace(run, id=_unique_id(lambda: run.id, self.runs))
            self.runs.create(run)
            span.set_attribute("payroll.run_number", run.run_number)
            span.set_attribute("payroll.employees", run.total_employees)

        payroll_runs_created.add(1)
        payments_generated.add(run.total_employees)
        logger.info(
            "payroll_run_created",
            run_id=run.id,
            run_number=run.run_number,
            employees=run.total_employees,
            total_amount=run.total_amount,
        )
        return run

    def process_run(self, run_id: str) -> PayrollRun:
        """Settle every pending payment of an open run and mark it completed."""

        run = self.get_run(run_id)
        if run.status not in OPEN_RUN_STATUSES:
            raise InvalidRunTransition(run_id, run.status.value, "process")

        with tracer.start_as_current_span("payroll.process_run"):
            stamp = datetime.now().isoformat()
            payments = tuple(
                replace(
                    payment,
                    status=PaymentStatus.COMPLETED,
                    transaction_id=generate_transaction_id(),
                    processed_at=stamp,
                )
                if payment.status == PaymentStatus.PENDING
                else payment
                for payment in run.payments
            )
            completed = replace(
                run,
                status=PayrollStatus.COMPLETED,
                payments=payments,
                completed_at=stamp,
                metadata=payroll_run_metadata(payments),
            )
            self.runs.update(completed)

        logger.info("payroll_run_completed", run_id=run_id, payments=len(payments))
        return completed

    def cancel_run(self, run_id: str) -> PayrollRun:
        run = self.get_run(run_id)
        if run.status not in OPEN_RUN_STATUSES:
            raise InvalidRunTransition(run_id, run.status.value, "cancel")

        payments = tuple(
            replace(payment, status=PaymentStatus.CANCELLED)
            if payment.status == PaymentStatus.PENDING
            else payment
            for payment in run.payments
        )
        cancelled = replace(run, status=PayrollStatus.FAILED, payments=payments, metadata=payroll_run_metadata(payments))
        self.runs.update(cancelled)
        logger.warning("payroll_run_cancelled", run_id=run_id)
        return cancelled

    def list_payments(self, run_id: str) -> List[PaymentRecord]:
        return list(self.get_run(run_id).payments)

    def get_payment(self, run_id: str, payment_id: str) -> PaymentRecord:
        for payment in self.get_run(run_id).payments:
            if payment.id == payment_id:
                return payment
        raise PaymentNotFound(run_id, payment_id)

    # Reporting

    def summary(self, today: Optional[date] = None) -> PayrollSummary:
        return payroll_summary(
            self.employees.list(),
            self.runs.list(),
            today=today,
            frequency=self.config.default_pay_frequency,
        )

    def analytics(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> PayrollAnalytics:
        return payroll_analytics(self.employees.list(), self.runs.list(), start_date, end_date, today)

    @staticmethod
    def _check_run_request(request: PayrollRunRequest) -> None:
        result = validate_run_request(request)
        if not result.is_valid:
            raise RunRequestValidationError(result.errors)


def build_service(config: Settings = settings) -> PayrollService:
    service = PayrollService(InMemoryRepository(), InMemoryRepository(), config)
    if config.seed_demo_data:
        seed(service)
    return service


@lru_cache
def get_service() -> PayrollService:
    return build_service()
