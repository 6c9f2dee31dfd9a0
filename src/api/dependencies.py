"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. main_asyncio.py creates the ServiceContainer during initialization
2. main_asyncio.py calls set_service_container() after creation
3. Endpoints use the get_service_container() dependency via Depends()

Example:
    @router.get("/clock")
    async def get_clock(services: ServiceContainer = Depends(get_service_container)):
        return services.clock_engine.get_status()
"""

from typing import Optional

from fastapi import HTTPException, status

from services.service_container import ServiceContainer

# Set by main_asyncio.py (or tests) before the server starts
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """Store the service container for API access (None clears it)."""
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing the service container.

    Raises:
        HTTPException: 503 Service Unavailable if services not initialized
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized. Clock may still be starting."
        )
    return _service_container
