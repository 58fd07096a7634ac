from fastapi import APIRouter

from src.pnrelease.api.v1 import employees, requests

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(employees.router)
api_router.include_router(requests.router)
