"""API version 1 routes."""

from fastapi import APIRouter

from envelope_budget.api.v1 import auth, bank, envelopes, transactions, users

router = APIRouter(prefix="/api/v1")

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(envelopes.router)
router.include_router(transactions.router)
router.include_router(bank.router)
