from fastapi import APIRouter

from jailbox.api.routes import script, utils

api_router = APIRouter()
api_router.include_router(script.router)
api_router.include_router(utils.router)
