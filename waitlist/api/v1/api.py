from fastapi import APIRouter
from waitlist.api.v1.endpoints import waitlist

api_router = APIRouter()

api_router.include_router(waitlist.router)
