# app/api/v1/router.py
# Master router -- registers all endpoint routers under /api/v1
# Each endpoint module registers its own router with its own prefix and tags

from fastapi import APIRouter

from app.api.v1.endpoints import notifications

api_router = APIRouter()

# Notifications & follow edges
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
