from fastapi import APIRouter, Depends, HTTPException, status as http_status
from typing import List
import logging

from expensedesk.api.deps import RequestSession, get_request_session, get_store
from expensedesk.database.services.record_store import RecordStore
from expensedesk.database.services.approval_service import ApprovalService
from expensedesk.ReqResModels.approvalmodels import (
    ApprovalDecisionRequest,
    ApprovalStepResponse,
    PendingApprovalResponse,
)
from expensedesk.ReqResModels.companymodels import ErrorResponse
from expensedesk.logic.exceptions import ApprovalNotFoundError, DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/approvals",
    tags=["approvals"],
    responses={
        404: {"model": ErrorResponse, "description": "Approval not found"},
        400: {"model": ErrorResponse, "description": "Bad request"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

@router.get(
    "/{user_id}",
    response_model=List[PendingApprovalResponse],
    summary="Get pending approvals",
    description="Get the approval steps waiting on a user, with expense and employee details"
)
def get_pending_approvals(
    user_id: str,
    store: RecordStore = Depends(get_store)
):
    """Get pending approvals for an approver"""
    try:
        return ApprovalService.list_pending_for_approver(store, user_id)
    except DatabaseError as e:
        logger.error(f"Get approvals error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch approvals"
        )

@router.post(
    "/{approval_id}",
    response_model=ApprovalStepResponse,
    summary="Decide an approval step",
    description="Approve or reject a step; the expense takes the same status"
)
def process_approval(
    approval_id: str,
    request: ApprovalDecisionRequest,
    store: RecordStore = Depends(get_store),
    session: RequestSession = Depends(get_request_session)
):
    """Process an approval decision"""
    try:
        return ApprovalService.decide(
            store, approval_id, request.status, request.comments, decided_by=session.user_id
        )
    except ApprovalNotFoundError:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail="Approval not found"
        )
    except DatabaseError as e:
        logger.error(f"Process approval error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process approval"
        )
