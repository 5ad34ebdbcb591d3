from fastapi import APIRouter
from cles_engine.routers import effect_size

api_router = APIRouter()
api_router.include_router(effect_size.router, prefix="/effect-size", tags=["effect-size"])
