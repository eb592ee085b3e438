from typing import List, Optional
import logging

from expensedesk.database.services.record_store import (
    RecordStore,
    APPROVAL_STEP_PREFIX,
    approval_step_key,
    expense_key,
    user_key,
)
from expensedesk.logic.helpers import public_user, utcnow_iso
from expensedesk.ReqResModels.approvalmodels import ApprovalOutcome
from expensedesk.ReqResModels.expensemodels import ExpenseStatus
from expensedesk.logic.exceptions import ApprovalNotFoundError

logger = logging.getLogger(__name__)


class ApprovalService:

    @staticmethod
    def list_steps(store: RecordStore) -> List[dict]:
        return store.scan_by_prefix(APPROVAL_STEP_PREFIX)

    @staticmethod
    def list_pending_for_approver(store: RecordStore, approver_id: str) -> List[dict]:
        """Pending steps assigned to ``approver_id``, each with its expense and submitting employee"""
        pending = [
            step for step in store.scan_by_prefix(APPROVAL_STEP_PREFIX)
            if step.get("approver_id") == approver_id and step.get("status") == ExpenseStatus.PENDING.value
        ]

        results = []
        for step in pending:
            expense = store.get(expense_key(step["expense_id"]))
            if expense is not None:
                employee = store.get(user_key(expense.get("employee_id"))) if expense.get("employee_id") else None
                expense = {**expense, "employee": public_user(employee)}
            results.append({**step, "expense": expense})
        return results

    @staticmethod
    def decide(store: RecordStore, step_id: str, outcome: ApprovalOutcome,
               comments: Optional[str] = None, decided_by: Optional[str] = None) -> dict:
        """Record a decision on an approval step.

        The parent expense takes the same status as the decision, whatever
        other steps exist. Deciding an already decided step overwrites it.
        """
        step = store.get(approval_step_key(step_id))
        if not step:
            raise ApprovalNotFoundError(f"Approval {step_id} not found")

        updated_step = {
            **step,
            "status": outcome.value,
            "comments": comments or None,
            "decided_at": utcnow_iso(),
            "decided_by": decided_by,
        }
        records = {approval_step_key(step_id): updated_step}

        expense = store.get(expense_key(step["expense_id"]))
        if expense:
            records[expense_key(step["expense_id"])] = {**expense, "status": outcome.value}
        else:
            logger.warning(f"Approval {step_id} references missing expense {step['expense_id']}")

        store.set_many(records)
        logger.info(f"Approval {step_id} {outcome.value} by {decided_by or 'unknown'}")
        return updated_step
