from typing import List, Optional, Tuple
import logging

from expensedesk.database.services.record_store import (
    RecordStore,
    EXPENSE_PREFIX,
    expense_key,
    approval_step_key,
    user_key,
)
from expensedesk.database.services.company_service import CompanyService
from expensedesk.logic.currency import convert
from expensedesk.logic.helpers import new_id, utcnow_iso
from expensedesk.ReqResModels.expensemodels import ExpenseSubmitRequest, ExpenseStatus

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service class for handling expense-related operations"""

    @staticmethod
    def create_expense(store: RecordStore, request: ExpenseSubmitRequest) -> Tuple[dict, Optional[dict]]:
        """Create a pending expense and, when the employee has a manager,
        its single approval step.

        Both records are written in one transaction. An unknown employee is
        not an error: the expense is stored without an approval step.
        Returns ``(expense, approval_step)``.
        """
        employee = store.get(user_key(request.employee_id))
        if employee is None:
            logger.warning(f"Expense submitted for unknown employee {request.employee_id}")

        company_currency = CompanyService.get_company_currency(
            store, employee.get("company_id") if employee else None
        )
        created_at = utcnow_iso()

        expense = {
            "id": new_id("expense"),
            "employee_id": request.employee_id,
            "amount": request.amount,
            "currency": request.currency,
            "amount_in_company_currency": convert(request.amount, request.currency, company_currency),
            "category": request.category,
            "description": request.description,
            "date": request.date.isoformat(),
            "receipt_url": request.receipt_url,
            "status": ExpenseStatus.PENDING.value,
            "created_at": created_at,
        }
        records = {expense_key(expense["id"]): expense}

        approval_step = None
        if employee and employee.get("manager_id"):
            approval_step = {
                "id": new_id("approval"),
                "expense_id": expense["id"],
                "approver_id": employee["manager_id"],
                "status": ExpenseStatus.PENDING.value,
                "comments": None,
                "sequence": 1,
                "created_at": created_at,
            }
            records[approval_step_key(approval_step["id"])] = approval_step

        store.set_many(records)
        logger.info(
            f"Created expense {expense['id']} for {request.employee_id}"
            + (f", awaiting {approval_step['approver_id']}" if approval_step else ", no approver")
        )
        return expense, approval_step

    @staticmethod
    def get_expense_by_id(store: RecordStore, expense_id: str) -> Optional[dict]:
        return store.get(expense_key(expense_id))

    @staticmethod
    def list_expenses(store: RecordStore) -> List[dict]:
        return store.scan_by_prefix(EXPENSE_PREFIX)

    @staticmethod
    def list_user_expenses(store: RecordStore, employee_id: str) -> List[dict]:
        """Expenses submitted by one employee, newest first"""
        expenses = [e for e in store.scan_by_prefix(EXPENSE_PREFIX) if e.get("employee_id") == employee_id]
        return ExpenseService.newest_first(expenses)

    @staticmethod
    def newest_first(expenses: List[dict]) -> List[dict]:
        return sorted(expenses, key=lambda e: e.get("created_at") or "", reverse=True)
