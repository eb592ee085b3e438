from fastapi import APIRouter, Depends, HTTPException, status as http_status
import logging

from expensedesk.api.deps import get_store
from expensedesk.database.services.record_store import RecordStore
from expensedesk.database.services.analytics_service import AnalyticsService
from expensedesk.ReqResModels.expensemodels import DashboardResponse
from expensedesk.ReqResModels.companymodels import ErrorResponse
from expensedesk.logic.exceptions import UserNotFoundError, DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/analytics",
    tags=["analytics"],
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

@router.get(
    "/dashboard/{user_id}",
    response_model=DashboardResponse,
    summary="Get dashboard figures",
    description="Expense totals and recent expenses scoped to the user's role"
)
def get_dashboard(
    user_id: str,
    store: RecordStore = Depends(get_store)
):
    """Get dashboard analytics for a user"""
    try:
        return AnalyticsService.dashboard(store, user_id)
    except UserNotFoundError:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    except DatabaseError as e:
        logger.error(f"Analytics error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch analytics"
        )
