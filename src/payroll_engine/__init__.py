from .aggregates import (
    calculate_mtd_payroll,
    calculate_payroll_totals,
    calculate_ytd_payroll,
    payroll_analytics,
    payroll_run_metadata,
    payroll_summary,
)
from .calculator import (
    calculate_deductions,
    calculate_net_pay,
    calculate_next_payment_date,
    deduction_details,
    gross_per_period,
)
from .formatting import (
    format_currency,
    format_date,
    format_datetime,
    format_payment_frequency,
    status_color,
    status_label,
)
from .identifiers import generate_employee_number, generate_payroll_run_number
from .validation import validate_employee
from .wizard import PayrollRunWizard, generate_payment_records

__all__ = [
    "PayrollRunWizard",
    "calculate_deductions",
    "calculate_mtd_payroll",
    "calculate_net_pay",
    "calculate_next_payment_date",
    "calculate_payroll_totals",
    "calculate_ytd_payroll",
    "deduction_details",
    "format_currency",
    "format_date",
    "format_datetime",
    "format_payment_frequency",
    "generate_employee_number",
    "generate_payment_records",
    "generate_payroll_run_number",
    "gross_per_period",
    "payroll_analytics",
    "payroll_run_metadata",
    "payroll_summary",
    "status_color",
    "status_label",
    "validate_employee",
]
