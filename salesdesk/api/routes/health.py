from fastapi import APIRouter

from salesdesk.core.config import settings

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok", "message": f"{settings.APP_NAME} running", "environment": settings.ENVIRONMENT}
