from typing import Dict


class EmployeeNotFound(LookupError):
    def __init__(self, employee_id: str):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class PayrollRunNotFound(LookupError):
    def __init__(self, run_id: str):
        super().__init__(f"Payroll run {run_id} not found")
        self.run_id = run_id


class PaymentNotFound(LookupError):
    def __init__(self, run_id: str, payment_id: str):
        super().__init__(f"Payment {payment_id} not found in payroll run {run_id}")
        self.run_id = run_id
        self.payment_id = payment_id


class EmployeeValidationError(ValueError):
    """Raised with the field -> message map produced by the validator."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Employee data is invalid")
        self.errors = errors


class RunRequestValidationError(ValueError):
    def __init__(self, errors: Dict[str, str]):
        super().__init__("Payroll run request is invalid")
        self.errors = errors


class InvalidRunTransition(ValueError):
    def __init__(self, run_id: str, status: str, action: str):
        super().__init__(f"Cannot {action} payroll run {run_id} in status {status}")
        self.run_id = run_id
        self.status = status
        self.action = action
