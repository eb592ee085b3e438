from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Optional
from enum import Enum

from expensedesk.ReqResModels.expensemodels import ExpenseResponse, ExpenseStatus
from expensedesk.ReqResModels.usermodels import UserResponse

class ApprovalOutcome(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"

class ApprovalRuleType(str, Enum):
    PERCENTAGE = "percentage"
    SPECIFIC = "specific"
    HYBRID = "hybrid"

# Request Models
class ApprovalDecisionRequest(BaseModel):
    status: ApprovalOutcome = Field(..., description="Decision for the approval step")
    comments: Optional[str] = Field(None, max_length=500, description="Optional approver comments")

class CreateApprovalRuleRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=255, description="Rule name")
    type: ApprovalRuleType = Field(..., description="percentage, specific or hybrid")
    percentage_threshold: Optional[float] = Field(None, ge=0, le=100, description="Share of approvers required")
    specific_approver_id: Optional[str] = Field(None, min_length=1, description="Approver whose decision is required")
    amount_limit: Optional[float] = Field(None, ge=0, description="Amount above which the rule applies")
    company_id: Optional[str] = Field(None, min_length=1, description="Company ID, defaults to the configured company")

    @model_validator(mode='after')
    def check_rule_parameters(self):
        if self.type in (ApprovalRuleType.PERCENTAGE, ApprovalRuleType.HYBRID) and self.percentage_threshold is None:
            raise ValueError(f"{self.type.value} rules need a percentage_threshold")
        if self.type in (ApprovalRuleType.SPECIFIC, ApprovalRuleType.HYBRID) and not self.specific_approver_id:
            raise ValueError(f"{self.type.value} rules need a specific_approver_id")
        return self

# Response Models
class ApprovalStepResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    expense_id: str
    approver_id: str
    status: ExpenseStatus
    comments: Optional[str] = None
    sequence: int
    created_at: str
    decided_at: Optional[str] = None
    decided_by: Optional[str] = None

class PendingExpenseDetail(ExpenseResponse):
    employee: Optional[UserResponse] = None

class PendingApprovalResponse(ApprovalStepResponse):
    expense: Optional[PendingExpenseDetail] = None

class ApprovalRuleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_id: str
    name: Optional[str] = None
    type: ApprovalRuleType
    percentage_threshold: Optional[float] = None
    specific_approver_id: Optional[str] = None
    amount_limit: Optional[float] = None
    created_at: str
