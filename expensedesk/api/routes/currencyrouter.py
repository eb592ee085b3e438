from fastapi import APIRouter
from typing import List

from expensedesk.logic.currency import SUPPORTED_CURRENCIES, convert, get_rate
from expensedesk.ReqResModels.companymodels import ConversionResponse, CurrencyResponse

router = APIRouter(tags=["currency"])

@router.get(
    "/convert/{from_currency}/{to_currency}/{amount}",
    response_model=ConversionResponse,
    summary="Convert an amount",
    description="Convert an amount using the static rate table; unknown pairs convert at 1"
)
def convert_currency(from_currency: str, to_currency: str, amount: float):
    """Convert an amount between two currencies"""
    return ConversionResponse(
        originalAmount=amount,
        convertedAmount=convert(amount, from_currency, to_currency),
        fromCurrency=from_currency,
        toCurrency=to_currency,
        rate=get_rate(from_currency, to_currency),
    )

@router.get(
    "/currencies",
    response_model=List[CurrencyResponse],
    summary="List supported currencies"
)
def list_currencies():
    return SUPPORTED_CURRENCIES
