from shelfkeeper.routers.advisory import router as advisory_router
from shelfkeeper.routers.dashboard import router as dashboard_router
from shelfkeeper.routers.health import router as health_router
from shelfkeeper.routers.inventory import router as inventory_router
from shelfkeeper.routers.products import router as products_router
from shelfkeeper.routers.profile import router as profile_router
from shelfkeeper.routers.reports import router as reports_router

__all__ = [
    "advisory_router",
    "dashboard_router",
    "health_router",
    "inventory_router",
    "products_router",
    "profile_router",
    "reports_router",
]
