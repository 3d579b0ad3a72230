"""Record identifiers built from the clock plus a small random suffix.

These are unique enough for a single writer creating records one at a time.
They are not collision proof and must not be used as secrets.
"""

from __future__ import annotations

import random
import string
from datetime import datetime
from typing import Optional

_TXN_ALPHABET = string.digits + string.ascii_lowercase


def _millis(now: Optional[datetime]) -> int:
    moment = now or datetime.now()
    return int(moment.timestamp() * 1000)


def _suffix(rng: Optional[random.Random]) -> str:
    return f"{(rng or random).randrange(1000):03d}"


def generate_employee_number(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    timestamp = str(_millis(now))[-6:].zfill(6)
    return f"EMP{timestamp}{_suffix(rng)}"


def generate_payroll_run_number(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    moment = now or datetime.now()
    return f"PR{moment:%Y%m%d}{_suffix(rng)}"


def generate_payment_id(employee_id: str, now: Optional[datetime] = None) -> str:
    return f"payment-{employee_id}-{_millis(now)}"


def generate_employee_id(now: Optional[datetime] = None) -> str:
    return f"emp-{_millis(now)}"


def generate_payroll_run_id(now: Optional[datetime] = None) -> str:
    return f"pr-{_millis(now)}"


def generate_transaction_id(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    source = rng or random
    token = "".join(source.choice(_TXN_ALPHABET) for _ in range(9))
    return f"txn-{_millis(now)}-{token}"
