# API routers package

from app.routers.auth import router as auth_router
from app.routers.locations import router as locations_router

# Re-export for easy importing
auth = auth_router
locations = locations_router
