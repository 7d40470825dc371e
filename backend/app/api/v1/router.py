"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import health, lenders, loan_products, quotes

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health.router,
    tags=["health"],
)

api_router.include_router(
    quotes.router,
    prefix="/quotes",
    tags=["quotes"],
)

api_router.include_router(
    lenders.router,
    prefix="/lenders",
    tags=["lenders"],
)

api_router.include_router(
    loan_products.router,
    prefix="/loan-products",
    tags=["loan-products"],
)
