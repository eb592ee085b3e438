import logging

from expensedesk.database.services.record_store import (
    RecordStore,
    company_key,
    user_key,
    user_email_key,
    approval_rule_key,
    expense_key,
)
from expensedesk.database.services.user_service import hash_password
from expensedesk.logic.helpers import utcnow_iso

logger = logging.getLogger(__name__)

DEMO_COMPANY_ID = "demo-company-001"

DEMO_CREDENTIALS = {
    "admin": ("admin@company.com", "admin123"),
    "manager": ("manager@company.com", "manager123"),
    "employee": ("employee@company.com", "employee123"),
}


class SetupService:

    @staticmethod
    def seed_demo_data(store: RecordStore) -> dict:
        """Write the demo company, users, rule and expenses in one transaction.

        Seeding again overwrites the same keys.
        """
        logger.info("Setting up expense management demo data...")
        now = utcnow_iso()

        company = {
            "id": DEMO_COMPANY_ID,
            "name": "Demo Corporation",
            "country": "United States",
            "currency": "USD",
            "created_at": now,
        }

        users = [
            {
                "id": "admin-001",
                "name": "Admin User",
                "role": "admin",
                "manager_id": None,
                "is_manager_approver": False,
            },
            {
                "id": "manager-001",
                "name": "Manager User",
                "role": "manager",
                "manager_id": None,
                "is_manager_approver": True,
            },
            {
                "id": "employee-001",
                "name": "Employee User",
                "role": "employee",
                "manager_id": "manager-001",
                "is_manager_approver": False,
            },
        ]

        records = {company_key(company["id"]): company}
        for user in users:
            email, password = DEMO_CREDENTIALS[user["role"]]
            user.update({
                "email": email,
                "company_id": DEMO_COMPANY_ID,
                "password_hash": hash_password(password),
                "created_at": now,
            })
            records[user_key(user["id"])] = user
            records[user_email_key(email)] = user["id"]

        rule = {
            "id": "rule-001",
            "company_id": DEMO_COMPANY_ID,
            "name": "Manager sign-off",
            "type": "specific",
            "percentage_threshold": None,
            "specific_approver_id": "manager-001",
            "amount_limit": None,
            "created_at": now,
        }
        records[approval_rule_key(rule["id"])] = rule

        sample_expenses = [
            {
                "id": "expense-001",
                "employee_id": "employee-001",
                "amount": 50.00,
                "currency": "USD",
                "amount_in_company_currency": 50.00,
                "category": "Meals & Entertainment",
                "description": "Team lunch meeting",
                "date": "2024-01-15",
                "receipt_url": None,
                "status": "approved",
                "created_at": now,
            },
            {
                "id": "expense-002",
                "employee_id": "employee-001",
                "amount": 120.00,
                "currency": "USD",
                "amount_in_company_currency": 120.00,
                "category": "Transportation",
                "description": "Uber to client meeting",
                "date": "2024-01-16",
                "receipt_url": None,
                "status": "pending",
                "created_at": now,
            },
        ]
        for expense in sample_expenses:
            records[expense_key(expense["id"])] = expense

        store.set_many(records)
        logger.info(f"Demo data written: {len(records)} records")

        return {
            "message": "Demo data setup completed successfully",
            "company": company,
            "users": [{"id": u["id"], "email": u["email"], "role": u["role"]} for u in users],
            "credentials": {role: f"{email} / {password}" for role, (email, password) in DEMO_CREDENTIALS.items()},
        }
