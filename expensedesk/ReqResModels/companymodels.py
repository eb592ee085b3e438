from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List

# Request Models
class CreateCompanyRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Company name")
    country: str = Field(..., min_length=2, max_length=100, description="Country name")
    currency: str = Field(default="USD", min_length=3, max_length=3, description="Currency code (ISO 4217)")

    @field_validator('currency')
    @classmethod
    def upper_currency(cls, v):
        return v.upper()

# Response Models
class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    country: str
    currency: str
    created_at: str

class CurrencyResponse(BaseModel):
    code: str
    name: str
    symbol: str

class ConversionResponse(BaseModel):
    originalAmount: float
    convertedAmount: float
    fromCurrency: str
    toCurrency: str
    rate: float

class SetupUserSummary(BaseModel):
    id: str
    email: str
    role: str

class SetupResponse(BaseModel):
    message: str
    company: CompanyResponse
    users: List[SetupUserSummary]
    credentials: dict

# Error Response Models
class ErrorResponse(BaseModel):
    error: str
