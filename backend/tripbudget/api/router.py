"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripbudget.api.routes import auth, users, budget, areas, fx_rates, dashboard

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(budget.router)
api_router.include_router(areas.router)
api_router.include_router(fx_rates.router)
api_router.include_router(dashboard.router)
