from typing import Optional
import logging

from expensedesk.config import Config
from expensedesk.database.services.record_store import RecordStore, COMPANY_PREFIX, company_key
from expensedesk.logic.helpers import new_id, utcnow_iso
from expensedesk.ReqResModels.companymodels import CreateCompanyRequest

logger = logging.getLogger(__name__)


class CompanyService:

    @staticmethod
    def get_company(store: RecordStore) -> Optional[dict]:
        """Return the deployment's company; only one is expected"""
        companies = store.scan_by_prefix(COMPANY_PREFIX)
        return companies[0] if companies else None

    @staticmethod
    def create_company(store: RecordStore, request: CreateCompanyRequest) -> dict:
        company = {
            "id": new_id("company"),
            "name": request.name,
            "country": request.country,
            "currency": request.currency,
            "created_at": utcnow_iso(),
        }
        store.set(company_key(company["id"]), company)
        logger.info(f"Created company {company['id']} ({company['currency']})")
        return company

    @staticmethod
    def get_company_currency(store: RecordStore, company_id: Optional[str]) -> str:
        """Currency expenses are normalized into for a given company.

        Falls back to the first stored company, then to the configured default.
        """
        company = store.get(company_key(company_id)) if company_id else None
        if company is None:
            company = CompanyService.get_company(store)
        if company and company.get("currency"):
            return company["currency"]
        return Config.DEFAULT_CURRENCY
