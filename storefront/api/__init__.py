# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.errors import register_error_handlers
from storefront.api.routers import addresses, admin, cart, catalog, health, orders


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(cart.router)
    app.include_router(addresses.router)
    app.include_router(orders.router)
    app.include_router(admin.router)
    register_error_handlers(app)
    return app
