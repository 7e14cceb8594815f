"""Routes API / API routes."""

from fastapi import APIRouter

from guard_patrol.api import auth, checkpoints, guards, patrols, reports

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(checkpoints.router, prefix="/checkpoints", tags=["checkpoints"])
api_router.include_router(guards.router, prefix="/guards", tags=["guards"])
api_router.include_router(patrols.router, prefix="/patrols", tags=["patrols"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
