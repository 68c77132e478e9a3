from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from shelfkeeper.config import Settings, get_settings
from shelfkeeper.core.logging import setup_logging
from shelfkeeper.database import Base, engine
from shelfkeeper.models import import_all_models
from shelfkeeper.routers import (
    advisory_router,
    dashboard_router,
    health_router,
    inventory_router,
    products_router,
    profile_router,
    reports_router,
)
from shelfkeeper.services.store_gateway import build_gateway_factory

setup_logging()
settings: Settings = get_settings()

import_all_models()
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.APP_NAME)
app.state.gateway_factory = build_gateway_factory(settings)

app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(inventory_router)
app.include_router(products_router)
app.include_router(advisory_router)
app.include_router(profile_router)
app.include_router(reports_router)


@app.get("/")
def root():
    return RedirectResponse(url="/docs", status_code=302)


__all__ = ["app", "root"]
