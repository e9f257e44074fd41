"""Health check endpoint."""
from fastapi import APIRouter, Depends

from ..dependencies import get_storefront
from ..models import HealthResponse
from network.storefront_client import StorefrontClient
from utils.error_handling import StorefrontAPIError


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(storefront: StorefrontClient = Depends(get_storefront)):
    """
    Health check with dependencies.

    Verifies that the API service is running and can reach the
    Storefront API (``getShop`` query).

    Args:
        storefront: Storefront API client (injected)

    Returns:
        dict: Health status of service and dependencies

    Example response (healthy):
        ```json
        {
            "status": "ok",
            "storefront": "ok"
        }
        ```

    Example response (unhealthy):
        ```json
        {
            "status": "ok",
            "storefront": "error: Network error while calling Storefront API: ..."
        }
        ```
    """
    try:
        await storefront.get_shop()
        storefront_status = "ok"
    except StorefrontAPIError as e:
        storefront_status = f"error: {e}"

    return {
        "status": "ok",
        "storefront": storefront_status
    }
