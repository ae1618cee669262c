from fastapi import APIRouter
from . import retirement

api_router = APIRouter()
api_router.include_router(retirement.router, prefix="/retirement", tags=["retirement"])
