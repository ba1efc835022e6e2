"""
Main FastAPI application for the Workforce API
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database import init_database
from ..database.connection import check_database_connection, dispose_database
from ..events import Topics, create_broker
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Workforce API...")
    init_database()

    db_ok, db_error = await check_database_connection()
    if not db_ok:
        logger.error("Database connection check failed", error=db_error)
        if settings.environment.lower() in ("production", "prod"):
            raise RuntimeError(f"Database unavailable: {db_error}")

    # The broker lives exactly as long as the application
    broker = create_broker(settings)
    app.state.broker = broker
    app.state.topics = Topics(broker)
    logger.info("Event broker ready", broker=type(broker).__name__)

    yield

    # Shutdown
    logger.info("Shutting down Workforce API...")
    await broker.close()
    await dispose_database()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Workforce API",
        description="Employees and employers over GraphQL with live subscriptions",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        db_ok, _ = await check_database_connection()
        broker_ok = await app.state.broker.health_check()
        return {
            "status": "healthy" if db_ok and broker_ok else "degraded",
            "version": __version__,
            "database": db_ok,
            "broker": broker_ok,
        }

    # GraphQL endpoint (allow disabling for tests)
    if not os.getenv("WORKFORCE_DISABLE_GRAPHQL"):
        try:
            from ..graphql.schema import create_graphql_router, validate_schema

            logger.info("Validating GraphQL schema...")
            validate_schema()

            graphql_router = create_graphql_router(graphiql=settings.debug)
            app.include_router(graphql_router, prefix="")
            logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
        except Exception as e:  # pragma: no cover
            logger.error("Failed to initialize GraphQL endpoint", error=str(e))
            raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "workforce.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
