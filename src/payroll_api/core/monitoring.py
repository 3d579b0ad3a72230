from typing import Any, Dict, Optional

import sentry_sdk

from payroll_api.core.config import Settings, settings

# Bank and tax identifiers never leave the process.
SENSITIVE_KEYS = {"account_number", "routing_number", "tax_id"}
FILTERED = "[Filtered]"


def scrub_payroll_fields(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: FILTERED if key in SENSITIVE_KEYS else scrub_payroll_fields(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [scrub_payroll_fields(item) for item in value]
    return value


def before_send(event: Dict[str, Any], hint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    request = event.get("request")
    if isinstance(request, dict) and "data" in request:
        request["data"] = scrub_payroll_fields(request["data"])
    if "extra" in event:
        event["extra"] = scrub_payroll_fields(event["extra"])
    return event


def configure_error_monitoring(config: Settings = settings) -> bool:
    if not config.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=config.sentry_dsn,
        environment=config.env,
        release=config.release,
        traces_sample_rate=config.sentry_traces_sample_rate,
        send_default_pii=False,
        before_send=before_send,
    )
    sentry_sdk.set_tag("service", config.app_name)
    return True
