# bazaar/api/__init__.py
from fastapi import FastAPI

from bazaar.api.routers import carts, health, orders, products, users, voice


def register_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(orders.status_router)
    app.include_router(voice.router)
    return app
