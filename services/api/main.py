"""FastAPI Backend for the quick-view storefront."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .bag import Bag
from .config import get_settings
from .routes import bag, collection, health, products
from network.storefront_client import StorefrontClient
from utils.logger import get_logger, setup_logger


# Get settings
settings = get_settings()

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: Configure logging, create the Storefront API client and bag
    - Shutdown: Close the client's connection pool

    Args:
        app: FastAPI application instance
    """
    # Startup
    setup_logger("storefront", settings.log_level, settings.log_file)
    logger.info("Starting up...")
    logger.info(f"Store domain: {settings.shopify_store_domain}")
    logger.info(f"Collection: {settings.collection_handle}")
    logger.info(f"CORS Origins: {settings.cors_origins}")

    app.state.storefront = StorefrontClient.from_settings(settings)
    app.state.bag = Bag()
    logger.info("Storefront client initialized")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await app.state.storefront.aclose()
    logger.info("Storefront client closed")


# Create FastAPI application
app = FastAPI(
    title="Storefront API",
    version="1.0.0",
    description="""
    Quick-view storefront backed by the Shopify Storefront API.

    Features:
    - Collection listing with formatted prices
    - Product detail proxy
    - Quick-view state: variant resolution and option availability
    - In-memory bag
    - Health monitoring
    """,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(
    collection.router,
    prefix="/api",
    tags=["collection"]
)
app.include_router(
    products.router,
    prefix="/api",
    tags=["products"]
)
app.include_router(
    bag.router,
    prefix="/api",
    tags=["bag"]
)
app.include_router(
    health.router,
    prefix="/api",
    tags=["health"]
)


@app.get("/")
def root():
    """
    Root endpoint.

    Returns basic service information.

    Returns:
        dict: Service status and name
    """
    return {
        "status": "ok",
        "service": "storefront-api",
        "version": "1.0.0",
        "docs": "/api/docs"
    }


@app.get("/api")
def api_root():
    """
    API root endpoint.

    Returns available API endpoints and documentation links.

    Returns:
        dict: API information
    """
    return {
        "message": "Storefront API",
        "version": "1.0.0",
        "endpoints": {
            "collection": "/api/collection",
            "product": "/api/product/{handle}",
            "quick_view": "/api/product/{handle}/quick-view",
            "bag": "/api/bag",
            "health": "/api/health",
            "docs": "/api/docs",
            "redoc": "/api/redoc"
        }
    }


if __name__ == "__main__":
    import uvicorn

    # Run development server
    uvicorn.run(
        "services.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
