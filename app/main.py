"""
FastAPI Application Entry Point - Health Club Store
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from app.config import Settings, settings as default_settings
from app.database import build_engine, build_session_factory, init_db
from app.logging_config import configure_logging
from app.seed import seed_defaults
from app.api import health, products, accounts, orders, dashboard

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application

    The engine and session factory live on ``app.state`` and are disposed on
    shutdown; nothing else holds a database handle.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    # Create FastAPI application
    app = FastAPI(
        title="Health Club Store",
        description="Storefront and admin panel for health supplement products",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    engine = build_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(accounts.router)
    app.include_router(orders.router)
    app.include_router(dashboard.router)

    # Prometheus metrics
    if settings.METRICS_ENABLED:
        Instrumentator().instrument(app).expose(app)

    @app.on_event("startup")
    def startup_event():
        """Initialize database on startup"""
        logger.info("Starting %s...", settings.SERVICE_NAME)
        init_db(engine, max_retries=settings.MAX_RETRIES, retry_delay=settings.RETRY_DELAY)
        logger.info("✓ Database initialized")
        if settings.SEED_DEFAULTS:
            seed_defaults(app.state.session_factory, settings)
        if settings.EVENTS_ENABLED:
            logger.info("✓ RabbitMQ URL: %s", settings.RABBITMQ_URL)
        logger.info("✓ %s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)

    @app.on_event("shutdown")
    def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("Shutting down %s...", settings.SERVICE_NAME)
        engine.dispose()

    return app


app = create_app()
