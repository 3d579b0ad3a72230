"""Employee record validation.

Every rule runs on its own so a single pass reports all problems at once.
Errors are keyed by the flat field name; bank account problems are reported
as ``routing_number`` / ``account_number`` rather than a nested path.
"""

from __future__ import annotations

import re
from dataclasses import asdict, is_dataclass
from numbers import Real
from typing import Any, Dict, Mapping, Union

import structlog

from .models import Employee, ValidationResult

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\(?([0-9]{3})\)?[-. ]?([0-9]{3})[-. ]?([0-9]{4})")
ROUTING_NUMBER_PATTERN = re.compile(r"[0-9]{9}")
ACCOUNT_NUMBER_PATTERN = re.compile(r"[0-9]{4,17}")

REQUIRED_TEXT_FIELDS = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "department": "Department is required",
    "position": "Position is required",
}

EmployeeData = Union[Mapping[str, Any], Employee]


def _matches(pattern: re.Pattern, value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def is_valid_email(email: str) -> bool:
    return _matches(EMAIL_PATTERN, email)


def is_valid_phone(phone: str) -> bool:
    return _matches(PHONE_PATTERN, phone)


def is_valid_routing_number(routing_number: str) -> bool:
    return _matches(ROUTING_NUMBER_PATTERN, routing_number)


def is_valid_account_number(account_number: str) -> bool:
    return _matches(ACCOUNT_NUMBER_PATTERN, account_number)


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _as_mapping(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    return data


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return value > 0


def validate_employee(data: EmployeeData) -> ValidationResult:
    record = _as_mapping(data)
    errors: Dict[str, str] = {}

    for field_name, message in REQUIRED_TEXT_FIELDS.items():
        if _is_blank(record.get(field_name)):
            errors[field_name] = message

    email = record.get("email")
    if _is_blank(email):
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Invalid email format"

    phone = record.get("phone")
    if phone and not is_valid_phone(phone):
        errors["phone"] = "Invalid phone number format"

    if not _is_positive_number(record.get("salary")):
        errors["salary"] = "Valid salary is required"

    if record.get("bank_account") is not None:
        bank_account = _as_mapping(record["bank_account"])
        if not is_valid_routing_number(bank_account.get("routing_number")):
            errors["routing_number"] = "Invalid routing number (must be 9 digits)"
        if not is_valid_account_number(bank_account.get("account_number")):
            errors["account_number"] = "Invalid account number"

    if errors:
        logger.debug("employee_validation_failed", fields=sorted(errors))
    return ValidationResult(is_valid=not errors, errors=errors)
