from fastapi import APIRouter, Depends, HTTPException, status as http_status
import logging

from expensedesk.api.deps import get_store
from expensedesk.database.services.record_store import RecordStore
from expensedesk.database.services.setup_service import SetupService
from expensedesk.ReqResModels.companymodels import SetupResponse, ErrorResponse
from expensedesk.logic.exceptions import DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["setup"],
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

@router.post(
    "/setup",
    response_model=SetupResponse,
    summary="Seed demo data",
    description="Create the demo company, users, approval rule and sample expenses"
)
def setup_demo_data(store: RecordStore = Depends(get_store)):
    """Seed demo data"""
    try:
        return SetupService.seed_demo_data(store)
    except DatabaseError as e:
        logger.error(f"Setup error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to setup demo data"
        )
