import logging

from expensedesk.database.services.record_store import RecordStore, user_key
from expensedesk.database.services.user_service import UserService
from expensedesk.database.services.expense_service import ExpenseService
from expensedesk.database.services.approval_service import ApprovalService
from expensedesk.ReqResModels.expensemodels import ExpenseStatus
from expensedesk.ReqResModels.usermodels import UserRole
from expensedesk.logic.exceptions import UserNotFoundError

logger = logging.getLogger(__name__)

RECENT_EXPENSE_LIMIT = 5


class AnalyticsService:

    @staticmethod
    def dashboard(store: RecordStore, user_id: str) -> dict:
        """Dashboard figures scoped by role: admins see every expense,
        managers their direct reports', employees their own."""
        user = store.get(user_key(user_id))
        if not user:
            raise UserNotFoundError(f"User with ID {user_id} not found")

        expenses = ExpenseService.list_expenses(store)
        role = user.get("role")
        if role == UserRole.ADMIN.value:
            scoped = expenses
        elif role == UserRole.MANAGER.value:
            team_ids = {u["id"] for u in UserService.list_users(store) if u.get("manager_id") == user_id}
            scoped = [e for e in expenses if e.get("employee_id") in team_ids]
        else:
            scoped = [e for e in expenses if e.get("employee_id") == user_id]

        total = sum(e.get("amount") or 0 for e in scoped)
        pending_approvals = sum(
            1 for step in ApprovalService.list_steps(store)
            if step.get("approver_id") == user_id and step.get("status") == ExpenseStatus.PENDING.value
        )

        return {
            "totalExpenses": round(total, 2),
            "expenseCount": len(scoped),
            "pendingExpenses": sum(1 for e in scoped if e.get("status") == ExpenseStatus.PENDING.value),
            "approvedExpenses": sum(1 for e in scoped if e.get("status") == ExpenseStatus.APPROVED.value),
            "pendingApprovals": pending_approvals,
            "recentExpenses": ExpenseService.newest_first(scoped)[:RECENT_EXPENSE_LIMIT],
        }
