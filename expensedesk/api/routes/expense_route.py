from fastapi import APIRouter, Depends, HTTPException, status as http_status
from typing import List
import logging

from expensedesk.api.deps import get_store
from expensedesk.database.services.record_store import RecordStore
from expensedesk.database.services.expense_service import ExpenseService
from expensedesk.ReqResModels.expensemodels import (
    ExpenseSubmitRequest,
    ExpenseResponse,
)
from expensedesk.ReqResModels.companymodels import ErrorResponse
from expensedesk.logic.exceptions import DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/expenses",
    tags=["expenses"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad request"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

@router.get(
    "/{user_id}",
    response_model=List[ExpenseResponse],
    summary="Get user expenses",
    description="Get all expenses submitted by a user, newest first"
)
def get_user_expenses(
    user_id: str,
    store: RecordStore = Depends(get_store)
):
    """Get expenses for a specific user"""
    try:
        return ExpenseService.list_user_expenses(store, user_id)
    except DatabaseError as e:
        logger.error(f"Get expenses error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch expenses"
        )

@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=http_status.HTTP_201_CREATED,
    summary="Submit a new expense",
    description="Submit a new expense; employees with a manager get an approval step"
)
def submit_expense(
    request: ExpenseSubmitRequest,
    store: RecordStore = Depends(get_store)
):
    """Submit a new expense"""
    try:
        expense, _ = ExpenseService.create_expense(store, request)
        return expense
    except DatabaseError as e:
        logger.error(f"Create expense error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create expense"
        )
