from fastapi import APIRouter, Depends, HTTPException, status as http_status
from typing import List
import logging

from expensedesk.api.deps import get_store
from expensedesk.database.services.record_store import RecordStore
from expensedesk.database.services.approval_rule_service import ApprovalRuleService
from expensedesk.ReqResModels.approvalmodels import (
    CreateApprovalRuleRequest,
    ApprovalRuleResponse,
)
from expensedesk.ReqResModels.companymodels import ErrorResponse
from expensedesk.logic.exceptions import UserNotFoundError, DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/approval-rules",
    tags=["approval-rules"],
    responses={
        404: {"model": ErrorResponse, "description": "Approver not found"},
        400: {"model": ErrorResponse, "description": "Bad request"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

@router.get(
    "",
    response_model=List[ApprovalRuleResponse],
    summary="Get approval rules"
)
def get_approval_rules(store: RecordStore = Depends(get_store)):
    """Get all approval rules"""
    try:
        return ApprovalRuleService.list_rules(store)
    except DatabaseError as e:
        logger.error(f"Get approval rules error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch approval rules"
        )

@router.post(
    "",
    response_model=ApprovalRuleResponse,
    status_code=http_status.HTTP_201_CREATED,
    summary="Create a new approval rule",
    description="Store a percentage, specific or hybrid approval rule"
)
def create_approval_rule(
    request: CreateApprovalRuleRequest,
    store: RecordStore = Depends(get_store)
):
    """Create a new approval rule"""
    try:
        return ApprovalRuleService.create_rule(store, request)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except DatabaseError as e:
        logger.error(f"Create approval rule error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create approval rule"
        )
