from fastapi import APIRouter

from skillroute.api.v1.endpoints import health, routing, skills, validation

v1_router = APIRouter()
v1_router.include_router(health.router, tags=["health"])
v1_router.include_router(skills.router, tags=["skills"])
v1_router.include_router(routing.router, tags=["routing"])
v1_router.include_router(validation.router, tags=["validation"])
