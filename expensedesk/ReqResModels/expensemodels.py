from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
import datetime as dt
from enum import Enum

class ExpenseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

# Request Models
class ExpenseSubmitRequest(BaseModel):
    employee_id: str = Field(..., min_length=1, description="ID of the employee submitting the expense")
    amount: float = Field(..., gt=0, description="Amount of the expense")
    currency: str = Field(..., min_length=3, max_length=3, description="Currency code")
    category: str = Field(..., min_length=1, max_length=100, description="Expense category")
    description: Optional[str] = Field(None, max_length=1000, description="Expense description")
    date: dt.date = Field(..., description="Date when the expense occurred")
    receipt_url: Optional[str] = Field(None, description="Uploaded receipt location")

    @field_validator('currency')
    @classmethod
    def upper_currency(cls, v):
        return v.upper()

# Response Models
class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    amount: float
    currency: str
    amount_in_company_currency: float
    category: str
    description: Optional[str] = None
    date: str
    receipt_url: Optional[str] = None
    status: ExpenseStatus
    created_at: str

class DashboardResponse(BaseModel):
    totalExpenses: float
    expenseCount: int
    pendingExpenses: int
    approvedExpenses: int
    pendingApprovals: int
    recentExpenses: List[ExpenseResponse]
