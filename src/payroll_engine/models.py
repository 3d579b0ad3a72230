from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class EmployeeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"
    TERMINATED = "TERMINATED"


class PayrollStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    PARTIALLY_COMPLETED = "PARTIALLY_COMPLETED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class PaymentFrequency(str, Enum):
    WEEKLY = "WEEKLY"
    BI_WEEKLY = "BI_WEEKLY"
    SEMI_MONTHLY = "SEMI_MONTHLY"
    MONTHLY = "MONTHLY"


class EmploymentType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    TEMPORARY = "TEMPORARY"


class PaymentMethod(str, Enum):
    ACH = "ACH"
    WIRE = "WIRE"
    CHECK = "CHECK"


class AccountType(str, Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"


@dataclass(frozen=True)
class BankAccount:
    routing_number: str
    account_number: str
    account_type: AccountType = AccountType.CHECKING
    bank_name: str = ""
    account_holder_name: str = ""


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    state: str
    zip_code: str
    country: str = "US"


@dataclass(frozen=True)
class Employee:
    id: str
    employee_number: str
    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    hire_date: str  # ISO date string
    salary: float  # annual
    payment_frequency: PaymentFrequency = PaymentFrequency.BI_WEEKLY
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    phone: Optional[str] = None
    termination_date: Optional[str] = None
    bank_account: Optional[BankAccount] = None
    tax_id: Optional[str] = None
    address: Optional[Address] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass(frozen=True)
class DeductionDetails:
    tax: float
    insurance: float
    retirement: float
    other: float = 0.0


@dataclass(frozen=True)
class PaymentMetadata:
    period: str
    deduction_details: Optional[DeductionDetails] = None
    hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    bonuses: Optional[float] = None


@dataclass(frozen=True)
class PaymentRecord:
    id: str
    employee_id: str
    employee_name: str
    amount: float  # amount disbursed, always the net amount
    gross_amount: float
    deductions: float
    net_amount: float
    status: PaymentStatus
    payment_method: PaymentMethod
    payment_date: str
    transaction_id: Optional[str] = None
    recipient_id: Optional[str] = None
    processed_at: Optional[str] = None
    error_message: Optional[str] = None
    metadata: Optional[PaymentMetadata] = None


@dataclass(frozen=True)
class RunMetadata:
    successful_payments: int = 0
    failed_payments: int = 0
    pending_payments: int = 0


@dataclass(frozen=True)
class PayrollTotals:
    total_gross_amount: float
    total_deductions: float
    total_net_amount: float
    total_amount: float


@dataclass(frozen=True)
class PayrollRun:
    id: str
    run_number: str
    status: PayrollStatus
    pay_period_start: str
    pay_period_end: str
    payment_date: str
    total_employees: int
    total_amount: float
    total_gross_amount: float
    total_deductions: float
    total_net_amount: float
    payments: Tuple[PaymentRecord, ...]
    created_by: str
    created_at: str
    processed_at: Optional[str] = None
    completed_at: Optional[str] = None
    notes: Optional[str] = None
    metadata: Optional[RunMetadata] = None


@dataclass(frozen=True)
class PayrollRunRequest:
    pay_period_start: str
    pay_period_end: str
    payment_date: str
    employee_ids: List[str] = field(default_factory=list)
    notes: Optional[str] = None


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PayrollSummary:
    total_employees: int
    active_employees: int
    inactive_employees: int
    next_payroll_date: str
    month_to_date_payroll: float
    year_to_date_payroll: float
    upcoming_payroll_amount: float = 0.0
    last_payroll_date: Optional[str] = None
    last_payroll_amount: Optional[float] = None


@dataclass(frozen=True)
class PayrollAnalytics:
    total_employees: int
    total_payroll_runs: int
    total_amount_paid: float
    average_payment: float
    ytd_total: float
