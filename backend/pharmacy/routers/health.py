from fastapi import APIRouter
from pharmacy.db.database import utcnow
from pharmacy.schemas.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/api/v1/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok", timestamp=utcnow())
