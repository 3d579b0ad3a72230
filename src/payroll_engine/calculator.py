from __future__ import annotations

from calendar import monthrange
from datetime import datetime, timedelta
from typing import Dict

from .dates import DateLike, parse_iso_datetime
from .models import DeductionDetails, PaymentFrequency

PERIODS_PER_YEAR: Dict[str, int] = {
    PaymentFrequency.WEEKLY: 52,
    PaymentFrequency.BI_WEEKLY: 26,
    PaymentFrequency.SEMI_MONTHLY: 24,
    PaymentFrequency.MONTHLY: 12,
}
DEFAULT_PERIODS_PER_YEAR = 12

# Itemized withholding model, applied in this order.
FEDERAL_TAX_RATE = 0.20
STATE_TAX_RATE = 0.05
INSURANCE_RATE = 0.03
RETIREMENT_RATE = 0.02

# Breakdown reported in payment metadata; not derived from the rates above.
BREAKDOWN_TAX_RATE = 0.25
BREAKDOWN_INSURANCE_RATE = 0.03
BREAKDOWN_RETIREMENT_RATE = 0.02

NEXT_PAYMENT_OFFSET_DAYS: Dict[str, int] = {
    PaymentFrequency.WEEKLY: 7,
    PaymentFrequency.BI_WEEKLY: 14,
    PaymentFrequency.SEMI_MONTHLY: 15,
}


def periods_per_year(frequency: str) -> int:
    return PERIODS_PER_YEAR.get(frequency, DEFAULT_PERIODS_PER_YEAR)


def gross_per_period(salary: float, frequency: str) -> float:
    """Annual salary divided across the pay periods of ``frequency``.

    Unknown frequencies are treated as monthly. Nothing is rounded or
    validated here; run ``validate_employee`` first to reject bad salaries.
    """

    return salary / periods_per_year(frequency)


def itemize_deductions(gross_amount: float) -> Dict[str, float]:
    return {
        "federal_tax": gross_amount * FEDERAL_TAX_RATE,
        "state_tax": gross_amount * STATE_TAX_RATE,
        "insurance": gross_amount * INSURANCE_RATE,
        "retirement": gross_amount * RETIREMENT_RATE,
    }


def calculate_deductions(gross_amount: float) -> float:
    items = itemize_deductions(gross_amount)
    return items["federal_tax"] + items["state_tax"] + items["insurance"] + items["retirement"]


def calculate_net_pay(gross_amount: float) -> float:
    return gross_amount - calculate_deductions(gross_amount)


def deduction_details(gross_amount: float) -> DeductionDetails:
    return DeductionDetails(
        tax=gross_amount * BREAKDOWN_TAX_RATE,
        insurance=gross_amount * BREAKDOWN_INSURANCE_RATE,
        retirement=gross_amount * BREAKDOWN_RETIREMENT_RATE,
        other=0.0,
    )


def _add_month(value: datetime) -> datetime:
    year = value.year + value.month // 12
    month = value.month % 12 + 1
    _, last_day = monthrange(year, month)
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def calculate_next_payment_date(last_payment_date: DateLike, frequency: str) -> str:
    """Return the ISO timestamp of the payment following ``last_payment_date``.

    Monthly schedules keep the day of month, clamped to the end of shorter
    months. Unknown frequencies leave the date unchanged.
    """

    current = parse_iso_datetime(last_payment_date)
    if frequency == PaymentFrequency.MONTHLY:
        return _add_month(current).isoformat()
    offset = NEXT_PAYMENT_OFFSET_DAYS.get(frequency)
    if offset is None:
        return current.isoformat()
    return (current + timedelta(days=offset)).isoformat()
