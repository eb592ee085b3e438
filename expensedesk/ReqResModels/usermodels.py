from pydantic import BaseModel, Field, EmailStr, ConfigDict, field_validator
from typing import Optional
from enum import Enum

class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"

# Request Models
class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="User full name")
    email: EmailStr = Field(..., description="User email address")
    password: Optional[str] = Field(None, min_length=5, max_length=100, description="Initial password")
    role: UserRole = Field(default=UserRole.EMPLOYEE, description="User role")
    manager_id: Optional[str] = Field(None, min_length=1, description="Manager user ID (optional)")
    company_id: Optional[str] = Field(None, min_length=1, description="Company ID, defaults to the configured company")
    is_manager_approver: bool = Field(default=False, description="Whether this user approves expenses")

class UpdateUserRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[UserRole] = None
    manager_id: Optional[str] = Field(None, min_length=1)
    is_manager_approver: Optional[bool] = None

    @field_validator('name', 'role', 'is_manager_approver')
    @classmethod
    def not_null(cls, v, info):
        # Omit a field to leave it unchanged; only manager_id may be cleared with null
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")

# Response Models
class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: str
    manager_id: Optional[str] = None
    company_id: Optional[str] = None
    is_manager_approver: bool = False
    created_at: str
    updated_at: Optional[str] = None

class DeleteUserResponse(BaseModel):
    success: bool
