"""
API v1 router
"""
from fastapi import APIRouter
from beloved.api.v1 import auth, calls, drivers, members, pages, rides, vapi

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(pages.router, prefix="/pages", tags=["pages"])
api_router.include_router(members.router, prefix="/members", tags=["members"])
api_router.include_router(drivers.router, prefix="/drivers", tags=["drivers"])
api_router.include_router(rides.router, prefix="/rides", tags=["rides"])
api_router.include_router(calls.router, prefix="/calls", tags=["calls"])
api_router.include_router(vapi.router, prefix="/vapi", tags=["vapi"])
