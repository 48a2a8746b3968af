from fastapi import APIRouter
from portfolio_api.api.endpoints import contact, education

api_router = APIRouter(prefix="/api")

api_router.include_router(contact.router, tags=["Contact"])
api_router.include_router(education.router, tags=["Education"])
