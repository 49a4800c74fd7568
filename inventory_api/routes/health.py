"""Health check route."""
from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    """Liveness probe for containers and CI."""
    return {"status": "ok"}
