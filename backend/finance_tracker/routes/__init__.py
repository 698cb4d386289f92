from fastapi import APIRouter
from finance_tracker.routes import auth, transactions, summary, categories, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
api_router.include_router(summary.router, prefix="/summary", tags=["summary"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
