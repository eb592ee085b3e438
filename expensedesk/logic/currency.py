"""Static currency conversion used to normalize expenses into the company currency."""
from typing import Dict, List
import math

# Demo conversion rates; pairs missing from the table convert at 1
CONVERSION_RATES: Dict[str, Dict[str, float]] = {
    "USD": {"EUR": 0.85, "GBP": 0.73, "JPY": 110, "USD": 1},
    "EUR": {"USD": 1.18, "GBP": 0.86, "JPY": 129, "EUR": 1},
    "GBP": {"USD": 1.37, "EUR": 1.16, "JPY": 151, "GBP": 1},
    "JPY": {"USD": 0.0091, "EUR": 0.0077, "GBP": 0.0066, "JPY": 1},
}

SUPPORTED_CURRENCIES: List[Dict[str, str]] = [
    {"code": "USD", "name": "US Dollar", "symbol": "$"},
    {"code": "EUR", "name": "Euro", "symbol": "€"},
    {"code": "GBP", "name": "British Pound", "symbol": "£"},
    {"code": "JPY", "name": "Japanese Yen", "symbol": "¥"},
    {"code": "CAD", "name": "Canadian Dollar", "symbol": "C$"},
    {"code": "AUD", "name": "Australian Dollar", "symbol": "A$"},
    {"code": "CHF", "name": "Swiss Franc", "symbol": "Fr"},
    {"code": "CNY", "name": "Chinese Yuan", "symbol": "¥"},
    {"code": "INR", "name": "Indian Rupee", "symbol": "₹"},
    {"code": "SGD", "name": "Singapore Dollar", "symbol": "S$"},
]


def get_rate(source_currency: str, target_currency: str) -> float:
    """Return the multiplicative rate for a currency pair, or 1 when the pair is unknown."""
    return CONVERSION_RATES.get(source_currency.upper(), {}).get(target_currency.upper(), 1)


def convert(amount: float, source_currency: str, target_currency: str) -> float:
    """Convert ``amount`` between currencies, rounded half-up to two decimals
    on the float product, so 1.005 at rate 1 gives 1.0.

    Same-currency conversions return the amount unchanged.
    """
    if source_currency.upper() == target_currency.upper():
        return amount

    rate = get_rate(source_currency, target_currency)
    return math.floor(amount * rate * 100 + 0.5) / 100
