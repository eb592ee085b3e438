from pydantic import BaseModel
from typing import Optional

class ExtractedReceiptData(BaseModel):
    amount: float
    date: str
    vendor: str
    category: str
    description: str
    confidence: float

class ReceiptProcessingResponse(BaseModel):
    success: bool
    data: Optional[ExtractedReceiptData] = None
    rawText: Optional[str] = None
    error: Optional[str] = None
