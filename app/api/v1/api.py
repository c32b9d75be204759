from fastapi import APIRouter

from app.api.v1.routers import admin_eta as admin_eta_router
from app.api.v1.routers import storefront as storefront_router

router = APIRouter()

# public storefront routes
router.include_router(storefront_router.router)

# admin routes
router.include_router(admin_eta_router.router)
