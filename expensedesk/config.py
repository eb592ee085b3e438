import os
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEV_ORIGINS = [
    "http://localhost:3000",
    "https://localhost:3000",
    "http://127.0.0.1:3000",
    "https://127.0.0.1:3000",
    "http://localhost:5173",
]


class Config:
    DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./expensedesk.db")
    API_TOKEN = os.environ.get("EXPENSEDESK_API_TOKEN") or None
    DEFAULT_COMPANY_ID = os.environ.get("DEFAULT_COMPANY_ID", "demo-company-001")
    DEFAULT_CURRENCY = os.environ.get("DEFAULT_CURRENCY", "USD")
    OCR_PROVIDER = os.environ.get("OCR_PROVIDER", "mock")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 12))
    VERSION = "1.0.0"

    @staticmethod
    def cors_origins() -> List[str]:
        # Allow all origins on hosted platforms
        if os.getenv("RENDER") or os.getenv("RAILWAY_ENVIRONMENT"):
            return ["*"]
        configured = os.environ.get("CORS_ORIGINS")
        if configured:
            return [origin.strip() for origin in configured.split(",") if origin.strip()]
        return DEV_ORIGINS
