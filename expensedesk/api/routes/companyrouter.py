from fastapi import APIRouter, Depends, HTTPException, status as http_status
from typing import Optional
import logging

from expensedesk.api.deps import get_store
from expensedesk.database.services.record_store import RecordStore
from expensedesk.database.services.company_service import CompanyService
from expensedesk.ReqResModels.companymodels import (
    CreateCompanyRequest,
    CompanyResponse,
    ErrorResponse,
)
from expensedesk.logic.exceptions import DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/company",
    tags=["company"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad request"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

@router.get(
    "",
    response_model=Optional[CompanyResponse],
    summary="Get the company",
    description="Return the deployment's company, or null before setup"
)
def get_company(store: RecordStore = Depends(get_store)):
    """Get the company"""
    try:
        return CompanyService.get_company(store)
    except DatabaseError as e:
        logger.error(f"Get company error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch company"
        )

@router.post(
    "",
    response_model=CompanyResponse,
    status_code=http_status.HTTP_201_CREATED,
    summary="Create a new company",
    description="Create a new company with the provided information"
)
def create_company(
    request: CreateCompanyRequest,
    store: RecordStore = Depends(get_store)
):
    """Create a new company"""
    try:
        return CompanyService.create_company(store, request)
    except DatabaseError as e:
        logger.error(f"Create company error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create company"
        )
