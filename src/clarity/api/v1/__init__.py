"""API routes."""

from fastapi import APIRouter

from clarity.api.v1 import auth, transactions

router = APIRouter(prefix="/api")

# Include routers
router.include_router(auth.router)
router.include_router(transactions.router)
