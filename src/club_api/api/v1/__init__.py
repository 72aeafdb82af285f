from fastapi import APIRouter

from . import members, sports, subscriptions

api_router = APIRouter()
api_router.include_router(members.router)
api_router.include_router(sports.router)
api_router.include_router(subscriptions.router)
