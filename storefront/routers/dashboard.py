# storefront/routers/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.core.auth import get_current_admin
from storefront.services.dashboard import get_stats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats")
def dashboard_stats(
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return get_stats(db)
