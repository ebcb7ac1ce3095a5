"""
Admin dashboard endpoint
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.dashboard_service import DashboardService
from app.schemas.dashboard import DashboardResponse, Period

router = APIRouter(prefix="/api/admin", tags=["dashboard"])


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    """Dependency to get DashboardService instance"""
    return DashboardService(db)


@router.get("/dashboard", response_model=DashboardResponse, summary="Get dashboard statistics")
def get_dashboard(
    period: Period = Query('all', description="all, week, month or year"),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Summary statistics for the selected period
    
    For week, month and year the response also carries revenue buckets and
    the top five products sold in approved orders.
    """
    return service.get_dashboard(period)
