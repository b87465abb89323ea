import logging
import os
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from fastapi import FastAPI, status
from inventory_dashboard.api.v1.dashboard import router as dashboard_router
from inventory_dashboard.api.v1.orders import router as orders_router
from inventory_dashboard.api.v1.products import router as products_router
from inventory_dashboard.api.v1.suppliers import router as suppliers_router
from inventory_dashboard.consumers.low_stock_consumer import attach_low_stock_consumer
from inventory_dashboard.core import config
from inventory_dashboard.core.exception_handlers import setup_exception_handlers
from inventory_dashboard.scripts.seed_data import seed
from inventory_dashboard.services.inventory_store import InventoryStore

log = logging.getLogger("inventory_dashboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {config.PROJECT_NAME} v{config.VERSION}...")
    yield
    # In-memory state is simply dropped
    log.info(f"{config.PROJECT_NAME} stopped.")


def create_store() -> InventoryStore:
    """Builds the application's store from configuration."""
    store = InventoryStore()
    if config.SEED_DATA:
        seed(store)
    if config.LOW_STOCK_ALERTS:
        attach_low_stock_consumer(store)
    return store


def create_app(store: Optional[InventoryStore] = None) -> FastAPI:
    """Creates the API application. The store is owned by the app and shared by every request."""
    app = FastAPI(
        title=config.PROJECT_NAME,
        version=config.VERSION,
        lifespan=lifespan,
        # Configure API documentation and paths
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.store = store if store is not None else create_store()

    # Include routers for modular API structure
    app.include_router(suppliers_router, prefix="/api/v1/suppliers", tags=["Suppliers"])
    app.include_router(products_router, prefix="/api/v1/products", tags=["Products"])
    app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])
    app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["Dashboard"])

    setup_exception_handlers(app)

    @app.get("/health", status_code=status.HTTP_200_OK)
    async def health_check():
        """Simple health check endpoint."""
        return {"status": "ok", "app_name": config.PROJECT_NAME}

    return app


def run():
    """Console entry point: serves the API with uvicorn."""
    logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    uvicorn.run(
        "inventory_dashboard.main:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", 8000)),
    )


if __name__ == "__main__":
    run()
