from typing import List
import logging

from expensedesk.config import Config
from expensedesk.database.services.record_store import (
    RecordStore,
    APPROVAL_RULE_PREFIX,
    approval_rule_key,
    user_key,
)
from expensedesk.logic.helpers import new_id, utcnow_iso
from expensedesk.ReqResModels.approvalmodels import CreateApprovalRuleRequest
from expensedesk.logic.exceptions import UserNotFoundError

logger = logging.getLogger(__name__)


class ApprovalRuleService:
    """Stores approval rules. Rules are kept for the admin panel only; expense
    routing still sends every expense to the employee's direct manager."""

    @staticmethod
    def list_rules(store: RecordStore) -> List[dict]:
        return store.scan_by_prefix(APPROVAL_RULE_PREFIX)

    @staticmethod
    def create_rule(store: RecordStore, request: CreateApprovalRuleRequest) -> dict:
        if request.specific_approver_id and not store.get(user_key(request.specific_approver_id)):
            raise UserNotFoundError(f"Approver with ID {request.specific_approver_id} not found")

        rule = {
            "id": new_id("rule"),
            "company_id": request.company_id or Config.DEFAULT_COMPANY_ID,
            "name": request.name,
            "type": request.type.value,
            "percentage_threshold": request.percentage_threshold,
            "specific_approver_id": request.specific_approver_id,
            "amount_limit": request.amount_limit,
            "created_at": utcnow_iso(),
        }
        store.set(approval_rule_key(rule["id"]), rule)
        logger.info(f"Created {rule['type']} approval rule {rule['id']}")
        return rule
