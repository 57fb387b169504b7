from fastapi import APIRouter

from storefront.data.database import ping

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "database": ping()}
