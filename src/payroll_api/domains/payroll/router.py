from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from payroll_api.errors import InvalidRunTransition, PaymentNotFound, PayrollRunNotFound, RunRequestValidationError
from payroll_api.services.payroll import PayrollService, get_service
from payroll_engine.models import (
    PaymentRecord,
    PayrollAnalytics,
    PayrollRun,
    PayrollRunRequest,
    PayrollStatus,
    PayrollSummary,
    PayrollTotals,
)

router = APIRouter(prefix="/payroll", tags=["payroll"])


class PayrollRunCreate(BaseModel):
    pay_period_start: date
    pay_period_end: date
    payment_date: date
    employee_ids: Annotated[list[str], Field(default_factory=list)]
    notes: str | None = None

    def to_request(self) -> PayrollRunRequest:
        return PayrollRunRequest(
            pay_period_start=self.pay_period_start.isoformat(),
            pay_period_end=self.pay_period_end.isoformat(),
            payment_date=self.payment_date.isoformat(),
            employee_ids=list(self.employee_ids),
            notes=self.notes,
        )


class PayrollPreviewOut(BaseModel):
    payments: list[PaymentRecord]
    totals: PayrollTotals


def _request_error(exc: RunRequestValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail={"message": str(exc), "errors": exc.errors})


@router.get("/runs", response_model=list[PayrollRun])
def list_runs(
    status: list[PayrollStatus] | None = Query(default=None),
    date_from: date | None = None,
    date_to: date | None = None,
    service: PayrollService = Depends(get_service),
):
    return service.list_runs(status, date_from, date_to)


@router.post("/runs/preview", response_model=PayrollPreviewOut)
def preview_run(payload: PayrollRunCreate, service: PayrollService = Depends(get_service)):
    try:
        preview = service.preview_run(payload.to_request())
    except RunRequestValidationError as exc:
        raise _request_error(exc)
    return PayrollPreviewOut(payments=list(preview.payments), totals=preview.totals)


@router.post("/runs", response_model=PayrollRun, status_code=201)
def create_run(payload: PayrollRunCreate, service: PayrollService = Depends(get_service)):
    try:
        return service.create_run(payload.to_request())
    except RunRequestValidationError as exc:
        raise _request_error(exc)


@router.get("/runs/{run_id}", response_model=PayrollRun)
def get_run(run_id: str, service: PayrollService = Depends(get_service)):
    try:
        return service.get_run(run_id)
    except PayrollRunNotFound:
        raise HTTPException(status_code=404, detail="Payroll run not found")


@router.post("/runs/{run_id}/process", response_model=PayrollRun)
def process_run(run_id: str, service: PayrollService = Depends(get_service)):
    try:
        return service.process_run(run_id)
    except PayrollRunNotFound:
        raise HTTPException(status_code=404, detail="Payroll run not found")
    except InvalidRunTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/runs/{run_id}/cancel", response_model=PayrollRun)
def cancel_run(run_id: str, service: PayrollService = Depends(get_service)):
    try:
        return service.cancel_run(run_id)
    except PayrollRunNotFound:
        raise HTTPException(status_code=404, detail="Payroll run not found")
    except InvalidRunTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.get("/runs/{run_id}/payments", response_model=list[PaymentRecord])
def list_payments(run_id: str, service: PayrollService = Depends(get_service)):
    try:
        return service.list_payments(run_id)
    except PayrollRunNotFound:
        raise HTTPException(status_code=404, detail="Payroll run not found")


@router.get("/runs/{run_id}/payments/{payment_id}", response_model=PaymentRecord)
def get_payment(run_id: str, payment_id: str, service: PayrollService = Depends(get_service)):
    try:
        return service.get_payment(run_id, payment_id)
    except PayrollRunNotFound:
        raise HTTPException(status_code=404, detail="Payroll run not found")
    except PaymentNotFound:
        raise HTTPException(status_code=404, detail="Payment not found")


@router.get("/summary", response_model=PayrollSummary)
def get_summary(service: PayrollService = Depends(get_service)):
    return service.summary()


@router.get("/analytics", response_model=PayrollAnalytics)
def get_analytics(
    start_date: date | None = None,
    end_date: date | None = None,
    service: PayrollService = Depends(get_service),
):
    return service.analytics(start_date, end_date)
