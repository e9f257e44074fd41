"""FastAPI dependencies."""
from fastapi import Request

from network.storefront_client import StorefrontClient
from .bag import Bag


async def get_storefront(request: Request) -> StorefrontClient:
    """
    Get Storefront API client from app state.

    The client is created during application startup and stored in app.state,
    so every request shares one connection pool.

    Args:
        request: FastAPI request object

    Returns:
        StorefrontClient: Storefront GraphQL client

    Example usage:
        ```python
        @router.get("/product/{handle}")
        async def get_product(handle: str, storefront: StorefrontClient = Depends(get_storefront)):
            return await storefront.get_product(handle)
        ```
    """
    return request.app.state.storefront


async def get_bag(request: Request) -> Bag:
    """Get the in-memory bag from app state."""
    return request.app.state.bag
