from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payroll_api.api.routes import health
from payroll_api.core.config import settings
from payroll_api.core.logging import configure_logging, get_logger
from payroll_api.core.monitoring import configure_error_monitoring
from payroll_api.core.observability import configure_observability
from payroll_api.domains.employees.router import router as employee_router
from payroll_api.domains.payroll.router import router as payroll_router

configure_logging(settings.log_level, service=settings.app_name, env=settings.env)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.cors_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(employee_router)
app.include_router(payroll_router)


@app.on_event("startup")
def startup_event() -> None:
    logger.info("startup_complete", env=settings.env, seed_demo_data=settings.seed_demo_data)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Payroll API running", "environment": settings.env}
