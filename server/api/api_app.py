"""FastAPI application entry point for the DAK tracker API."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from server.api.routers.AuthRouter import auth_router
from server.api.routers.DashboardRouter import dashboard_router
from server.api.routers.DepartmentRouter import department_router
from server.api.routers.DocumentRouter import document_router
from shared.clients.auth.AuthClientManager import AuthClientManager
from shared.clients.store.StoreClientManager import StoreClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging

app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown."""
    app.state.logging = setup_logging()
    app.state.config = HelperConfig(logger=app.state.logging)

    # Initialise clients
    store_client = StoreClientManager(helper_config=app.state.config).get_client()
    auth_client = AuthClientManager(helper_config=app.state.config).get_client()
    await store_client.boot()
    await auth_client.boot()

    # Health checks
    await store_client.do_healthcheck()
    await auth_client.do_healthcheck()

    app.state.store_client = store_client
    app.state.auth_client = auth_client

    app.state.logging.info("DAK tracker API ready on %s.", store_client.get_engine_name())
    yield

    # Shutdown
    await store_client.close()
    await auth_client.close()
    app.state.logging.info("DAK tracker API shut down.")


app = FastAPI(
    title="DAK Tracker",
    description="Inward and outward correspondence register backed by a hosted table store.",
    version=app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=HelperConfig(logger=logging.getLogger("dak_tracker")).get_list_val("API_SERVER_CORS_ORIGINS", default=["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(document_router)
app.include_router(department_router)
app.include_router(dashboard_router)


# Server Start
if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("API_SERVER_PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
