from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from payroll_api.errors import EmployeeNotFound, EmployeeValidationError
from payroll_api.services.payroll import PayrollService, get_service
from payroll_engine.filters import paginate
from payroll_engine.models import (
    AccountType,
    Address,
    BankAccount,
    Employee,
    EmployeeStatus,
    EmploymentType,
    PaymentFrequency,
)

router = APIRouter(prefix="/payroll/employees", tags=["employees"])


class BankAccountIn(BaseModel):
    routing_number: str = ""
    account_number: str = ""
    account_type: AccountType = AccountType.CHECKING
    bank_name: str = ""
    account_holder_name: str = ""


class AddressIn(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str = "US"


class EmployeeCreate(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str | None = None
    department: str = ""
    position: str = ""
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    hire_date: date = Field(default_factory=date.today)
    termination_date: date | None = None
    salary: float = 0
    payment_frequency: PaymentFrequency = PaymentFrequency.BI_WEEKLY
    bank_account: BankAccountIn | None = None
    tax_id: str | None = None
    address: AddressIn | None = None


class EmployeeUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    department: str | None = None
    position: str | None = None
    employment_type: EmploymentType | None = None
    status: EmployeeStatus | None = None
    hire_date: date | None = None
    termination_date: date | None = None
    salary: float | None = None
    payment_frequency: PaymentFrequency | None = None
    bank_account: BankAccountIn | None = None
    tax_id: str | None = None
    address: AddressIn | None = None


class EmployeePage(BaseModel):
    data: list[Employee]
    total: int
    page: int
    limit: int


NULLABLE_FIELDS = {"phone", "termination_date", "bank_account", "tax_id", "address"}


def _to_record_fields(payload: BaseModel, exclude_unset: bool = False) -> dict[str, Any]:
    """Convert request fields into the engine's dataclass-friendly values.

    An explicit ``null`` only clears optional fields; on required fields it
    is ignored so a partial update cannot blank them out.
    """
    fields = {
        key: value
        for key, value in payload.model_dump(exclude_unset=exclude_unset).items()
        if value is not None or key in NULLABLE_FIELDS
    }
    for key in ("hire_date", "termination_date"):
        if isinstance(fields.get(key), date):
            fields[key] = fields[key].isoformat()
    if fields.get("bank_account") is not None:
        fields["bank_account"] = BankAccount(**fields["bank_account"])
    if fields.get("address") is not None:
        fields["address"] = Address(**fields["address"])
    return fields


def _validation_error(exc: EmployeeValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail={"message": str(exc), "errors": exc.errors})


@router.get("", response_model=EmployeePage)
def list_employees(
    status: list[EmployeeStatus] | None = Query(default=None),
    department: list[str] | None = Query(default=None),
    search: str | None = None,
    page: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
    service: PayrollService = Depends(get_service),
):
    employees = service.list_employees(status, department, search)
    result = paginate(employees, page, limit or service.config.page_limit)
    return EmployeePage(data=result.data, total=result.total, page=result.page, limit=result.limit)


@router.get("/{employee_id}", response_model=Employee)
def get_employee(employee_id: str, service: PayrollService = Depends(get_service)):
    try:
        return service.get_employee(employee_id)
    except EmployeeNotFound:
        raise HTTPException(status_code=404, detail="Employee not found")


@router.post("", response_model=Employee, status_code=201)
def create_employee(payload: EmployeeCreate, service: PayrollService = Depends(get_service)):
    try:
        return service.create_employee(_to_record_fields(payload))
    except EmployeeValidationError as exc:
        raise _validation_error(exc)


@router.put("/{employee_id}", response_model=Employee)
def update_employee(employee_id: str, payload: EmployeeUpdate, service: PayrollService = Depends(get_service)):
    try:
        return service.update_employee(employee_id, _to_record_fields(payload, exclude_unset=True))
    except EmployeeNotFound:
        raise HTTPException(status_code=404, detail="Employee not found")
    except EmployeeValidationError as exc:
        raise _validation_error(exc)


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: str, service: PayrollService = Depends(get_service)):
    try:
        service.delete_employee(employee_id)
    except EmployeeNotFound:
        raise HTTPException(status_code=404, detail="Employee not found")
    return None
