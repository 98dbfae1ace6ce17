from fastapi import FastAPI

from . import downloads, health, leads, root

ROUTERS = (root.router, health.router, leads.router, downloads.router)


def register_all_routers(app: FastAPI) -> None:
    for router in ROUTERS:
        app.include_router(router)
