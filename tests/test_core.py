import structlog

from payroll_api.core.config import Settings
from payroll_api.core.logging import configure_logging
from payroll_api.core.monitoring import before_send, configure_error_monitoring, scrub_payroll_fields


def test_configure_logging_binds_service_context():
    configure_logging("debug", service="payroll-test", env="ci")

    context = structlog.contextvars.get_contextvars()

    assert context["service"] == "payroll-test"
    assert context["env"] == "ci"
    structlog.contextvars.clear_contextvars()


def test_scrub_masks_bank_and_tax_fields():
    payload = {
        "first_name": "Ada",
        "tax_id": "123-45-6789",
        "bank_account": {"routing_number": "021000021", "account_number": "123456789", "bank_name": "First"},
        "history": [{"account_number": "987654321"}],
    }

    scrubbed = scrub_payroll_fields(payload)

    assert scrubbed["first_name"] == "Ada"
    assert scrubbed["tax_id"] == "[Filtered]"
    assert scrubbed["bank_account"] == {
        "routing_number": "[Filtered]",
        "account_number": "[Filtered]",
        "bank_name": "First",
    }
    assert scrubbed["history"] == [{"account_number": "[Filtered]"}]


def test_before_send_scrubs_request_body():
    event = {"request": {"url": "/payroll/employees", "data": {"tax_id": "123-45-6789"}}}

    assert before_send(event, {})["request"]["data"] == {"tax_id": "[Filtered]"}


def test_monitoring_is_skipped_without_dsn():
    assert configure_error_monitoring(Settings(sentry_dsn=None)) is False
