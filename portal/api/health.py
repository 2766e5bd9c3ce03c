# portal/api/health.py
from fastapi import APIRouter

from portal.core.config import settings

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "version": settings.api_version}
