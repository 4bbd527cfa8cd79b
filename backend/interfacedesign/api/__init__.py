"""API routes initialization."""
from fastapi import APIRouter
from interfacedesign.api import catalog, instances

api_router = APIRouter()

api_router.include_router(instances.router, tags=["instances"])
api_router.include_router(catalog.router)
