# app/api/api_router.py
from fastapi import APIRouter
from app.api.v1 import aigc

api_router = APIRouter()
api_router.include_router(aigc.router, prefix="/v1/aigc", tags=["aigc"])
