"""
Darna Storefront

Multivendor marketplace backend: product catalog, per-session cart and
checkout with simulated payment.
"""

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from . import __version__
from .core.config import Settings, get_settings
from .core.session import SessionManager
from .database.products import ProductDatabase
from .routes import products_router, cart_router, checkout_router, orders_router
from .services.payment import HttpPaymentGateway, PaymentGateway, SimulatedPaymentGateway

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_payment_gateway(settings: Settings) -> PaymentGateway:
    """HTTP gateway when a URL is configured, the simulated one otherwise"""
    if settings.payment_gateway_configured:
        return HttpPaymentGateway(
            settings.payment_gateway_url,
            timeout=settings.payment_timeout_seconds,
        )
    return SimulatedPaymentGateway(delay_seconds=settings.payment_delay_seconds)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings: Settings = app.state.settings
    logger.info(f"{settings.app_name} starting up...")
    logger.info(
        f"Payment gateway: {'http ' + settings.payment_gateway_url if settings.payment_gateway_configured else 'simulated'}"
    )
    logger.info(f"Session storage: {os.path.abspath(settings.storage_dir)}")
    yield
    await app.state.session_manager.close()
    logger.info(f"{settings.app_name} shutting down...")


def create_app(
    settings: Optional[Settings] = None,
    session_manager: Optional[SessionManager] = None,
    product_db: Optional[ProductDatabase] = None,
) -> FastAPI:
    """Build the application with its stores wired in"""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Multivendor marketplace storefront: catalog, cart and checkout",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.product_db = product_db or ProductDatabase()
    app.state.session_manager = session_manager or SessionManager(
        settings=settings,
        gateway=build_payment_gateway(settings),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(orders_router)

    @app.get("/")
    async def home():
        """API index"""
        return {
            "message": f"{settings.app_name} API",
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "cart": "/api/cart",
                "checkout": "/api/checkout",
                "orders": "/api/orders",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "storefront"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
