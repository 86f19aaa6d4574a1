from fastapi import APIRouter
from app.routers import employees, payslips

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(payslips.router, tags=["Payslips"])
