from fastapi import APIRouter
from app.routers import (
    auth, companies, dashboard, dtr_formats, dtrs, employee_portal, employees, payroll
)

# Centralized API router hub
# Routers are aggregated here, main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(companies.router, tags=["Companies"])
api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(dtrs.router, tags=["DTRs"])
api_router.include_router(payroll.router, tags=["Payroll"])
api_router.include_router(employee_portal.router, tags=["Employee Portal"])
api_router.include_router(dashboard.router, tags=["Dashboard"])
api_router.include_router(dtr_formats.router, tags=["DTR Formats"])
