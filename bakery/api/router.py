from fastapi import APIRouter

from bakery.api.routes import cakes

api_router = APIRouter()
api_router.include_router(cakes.router)
