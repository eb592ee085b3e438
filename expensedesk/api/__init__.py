from fastapi import APIRouter, Depends
from expensedesk.api.deps import get_request_session
from expensedesk.api.routes import (
    setuprouter,
    currencyrouter,
    userrouter,
    companyrouter,
    expense_route,
    approvalroute,
    approval_rule_route,
    ocrroute,
    analyticsroute,
)

api_router = APIRouter(dependencies=[Depends(get_request_session)])

api_router.include_router(setuprouter.router)
api_router.include_router(currencyrouter.router)
api_router.include_router(userrouter.router)
api_router.include_router(companyrouter.router)
api_router.include_router(expense_route.router)
api_router.include_router(approvalroute.router)
api_router.include_router(approval_rule_route.router)
api_router.include_router(ocrroute.router)
api_router.include_router(analyticsroute.router)
