import pytest

from payroll_engine.models import BankAccount
from payroll_engine.validation import (
    is_valid_account_number,
    is_valid_email,
    is_valid_phone,
    is_valid_routing_number,
    validate_employee,
)


def valid_data(**overrides) -> dict:
    data = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone": "(555) 123-4567",
        "department": "Engineering",
        "position": "Engineer",
        "salary": 85000,
        "bank_account": {"routing_number": "021000021", "account_number": "123456789"},
    }
    data.update(overrides)
    return data


def test_valid_record_has_no_errors():
    result = validate_employee(valid_data())

    assert result.is_valid
    assert result.errors == {}


def test_employee_dataclass_is_accepted(employee_factory):
    result = validate_employee(employee_factory())

    assert result.is_valid


@pytest.mark.parametrize("field", ["first_name", "last_name", "email", "department", "position", "salary"])
def test_missing_required_field_reports_only_that_field(field):
    data = valid_data()
    del data[field]

    result = validate_employee(data)

    assert not result.is_valid
    assert set(result.errors) == {field}


@pytest.mark.parametrize("field", ["first_name", "last_name", "department", "position"])
def test_blank_text_counts_as_missing(field):
    result = validate_employee(valid_data(**{field: "   "}))

    assert set(result.errors) == {field}


def test_email_messages_distinguish_missing_and_malformed():
    assert validate_employee(valid_data(email="")).errors["email"] == "Email is required"
    assert validate_employee(valid_data(email="not-an-email")).errors["email"] == "Invalid email format"


@pytest.mark.parametrize("salary", [0, -100, None, "85000", True])
def test_salary_must_be_positive_number(salary):
    result = validate_employee(valid_data(salary=salary))

    assert result.errors == {"salary": "Valid salary is required"}


def test_phone_is_optional():
    assert validate_employee(valid_data(phone=None)).is_valid
    assert validate_employee(valid_data(phone="")).is_valid


def test_bank_account_is_optional():
    assert validate_employee(valid_data(bank_account=None)).is_valid


def test_bank_account_errors_use_flat_field_names():
    result = validate_employee(valid_data(bank_account={"routing_number": "12345", "account_number": "12"}))

    assert set(result.errors) == {"routing_number", "account_number"}
    assert result.errors["routing_number"] == "Invalid routing number (must be 9 digits)"


def test_bank_account_dataclass_is_checked():
    account = BankAccount(routing_number="021000021", account_number="12a45")

    result = validate_employee(valid_data(bank_account=account))

    assert set(result.errors) == {"account_number"}


def test_all_failures_are_reported_together():
    result = validate_employee(
        {
            "first_name": "",
            "email": "bad@",
            "phone": "12345",
            "salary": 0,
            "bank_account": {"routing_number": "1234567890", "account_number": "123"},
        }
    )

    assert set(result.errors) == {
        "first_name",
        "last_name",
        "email",
        "phone",
        "department",
        "position",
        "salary",
        "routing_number",
        "account_number",
    }


@pytest.mark.parametrize(
    "email, expected",
    [
        ("a@b.co", True),
        ("first.last@sub.example.org", True),
        ("no-at-sign.com", False),
        ("@example.com", False),
        ("user@domain", False),
        ("user@.com", False),
        ("user name@example.com", False),
        ("user@example.", False),
    ],
)
def test_is_valid_email(email, expected):
    assert is_valid_email(email) is expected


@pytest.mark.parametrize(
    "phone, expected",
    [
        ("(555) 123-4567", True),
        ("555-123-4567", True),
        ("555.123.4567", True),
        ("5551234567", True),
        ("555 123 4567", True),
        ("555-1234", False),
        ("55512345678", False),
        ("(555) 123-456a", False),
        ("5551234567\n", False),
    ],
)
def test_is_valid_phone(phone, expected):
    assert is_valid_phone(phone) is expected


def test_routing_number_requires_exactly_nine_digits():
    assert is_valid_routing_number("021000021")
    assert not is_valid_routing_number("02100002")
    assert not is_valid_routing_number("0210000211")
    assert not is_valid_routing_number("02100002a")
    assert not is_valid_routing_number(None)


def test_account_number_allows_four_to_seventeen_digits():
    assert is_valid_account_number("1234")
    assert is_valid_account_number("1" * 17)
    assert not is_valid_account_number("123")
    assert not is_valid_account_number("1" * 18)
    assert not is_valid_account_number("12-34")
