# ABOUTME: Liveness endpoint for load balancers and uptime checks.

from fastapi import APIRouter, Response

router = APIRouter()


@router.get("/health_check")
async def health_check() -> Response:
    """Return 200 with an empty body."""
    return Response(status_code=200)
