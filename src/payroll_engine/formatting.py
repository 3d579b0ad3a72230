from __future__ import annotations

from enum import Enum

from .dates import DateLike, parse_iso_datetime
from .models import Employee, PaymentFrequency

FREQUENCY_LABELS = {
    PaymentFrequency.WEEKLY: "Weekly",
    PaymentFrequency.BI_WEEKLY: "Bi-Weekly",
    PaymentFrequency.SEMI_MONTHLY: "Semi-Monthly",
    PaymentFrequency.MONTHLY: "Monthly",
}


class StatusColor(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    GRAY = "gray"
    RED = "red"
    ORANGE = "orange"


STATUS_COLORS = {
    "active": StatusColor.GREEN,
    "completed": StatusColor.GREEN,
    "pending": StatusColor.YELLOW,
    "processing": StatusColor.YELLOW,
    "draft": StatusColor.BLUE,
    "inactive": StatusColor.GRAY,
    "on_leave": StatusColor.GRAY,
    "cancelled": StatusColor.GRAY,
    "terminated": StatusColor.RED,
    "failed": StatusColor.RED,
    "partially_completed": StatusColor.ORANGE,
}

# The run history highlights in-flight runs differently.
HISTORY_STATUS_COLORS = {**STATUS_COLORS, "processing": StatusColor.BLUE}


def _enum_text(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def format_currency(amount: float) -> str:
    """USD with thousands separators and two decimals, e.g. ``-$1,500.00``."""

    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_date(value: DateLike) -> str:
    moment = parse_iso_datetime(value)
    return f"{moment:%b} {moment.day}, {moment.year}"


def format_datetime(value: DateLike) -> str:
    moment = parse_iso_datetime(value)
    return f"{format_date(moment)}, {moment:%I:%M %p}"


def format_payment_frequency(frequency: str) -> str:
    return FREQUENCY_LABELS.get(frequency, frequency)


def status_color(status: str, history: bool = False) -> StatusColor:
    colors = HISTORY_STATUS_COLORS if history else STATUS_COLORS
    return colors.get(_enum_text(status).lower(), StatusColor.GRAY)


def status_label(status: str) -> str:
    words = _enum_text(status).lower().split("_")
    return " ".join(word.capitalize() for word in words if word)


def employee_full_name(employee: Employee) -> str:
    return f"{employee.first_name} {employee.last_name}"


def mask_account_number(account_number: str) -> str:
    if len(account_number) <= 4:
        return account_number
    return f"****{account_number[-4:]}"


def mask_tax_id(tax_id: str) -> str:
    if len(tax_id) <= 4:
        return tax_id
    return f"***-**-{tax_id[-4:]}"
