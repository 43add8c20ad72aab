from fastapi import APIRouter

from skillroute import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "skillroute", "version": __version__}
