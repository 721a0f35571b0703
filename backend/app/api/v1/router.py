from fastapi import APIRouter
from app.api.v1.endpoints import projects, endpoints, health

api_router = APIRouter()

# Deep health checks (/api/health/live, /api/health/ready)
api_router.include_router(health.router)

# Management API
api_router.include_router(projects.router)
api_router.include_router(endpoints.router)
