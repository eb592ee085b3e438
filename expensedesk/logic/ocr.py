"""Receipt extraction backends.

The expense form only depends on the shape of :class:`ReceiptExtraction`, so
the stub and the Tesseract backend are interchangeable.
"""
from __future__ import annotations

import io
import logging
import random
import re
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Optional

from expensedesk.logic.exceptions import OCRProcessingError, ValidationError

logger = logging.getLogger(__name__)

VENDORS = ["Starbucks", "Uber Eats", "Office Depot", "Amazon", "Target", "Walmart", "McDonald's", "Subway"]
CATEGORIES = ["food", "transportation", "office_supplies", "software", "travel", "entertainment"]
DEFAULT_DESCRIPTION = "Receipt processed via OCR"

CATEGORY_KEYWORDS: Dict[str, tuple] = {
    "food": ("restaurant", "cafe", "coffee", "starbucks", "mcdonald", "subway", "pizza", "burger", "eats", "grill"),
    "transportation": ("uber", "lyft", "taxi", "cab", "fuel", "gas", "parking", "metro", "train"),
    "office_supplies": ("office", "staples", "paper", "printer", "depot"),
    "software": ("software", "license", "subscription", "saas", "cloud"),
    "travel": ("hotel", "airline", "airways", "flight", "motel", "airbnb"),
    "entertainment": ("cinema", "theater", "theatre", "concert", "tickets"),
}

_AMOUNT_RE = re.compile(r"(\d{1,3}(?:,\d{3})+|\d+)\.(\d{2})\b")
_TOTAL_LINE_RE = re.compile(r"\b(grand\s+total|total|amount\s+due|balance\s+due)\b", re.IGNORECASE)
_DATE_PATTERNS = (
    (re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b"), "%Y-%m-%d"),
    (re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b"), "%m/%d/%Y"),
    (re.compile(r"\b(\d{1,2})\.(\d{1,2})\.(\d{4})\b"), "%d.%m.%Y"),
)


@dataclass
class ReceiptExtraction:
    amount: float
    date: str
    vendor: str
    category: str
    description: str
    confidence: float
    raw_text: str = ""

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("raw_text")
        return data


class ReceiptExtractor(ABC):
    """Turns an uploaded receipt image into pre-filled expense fields."""

    name: str = "base"

    @abstractmethod
    def extract(self, content: bytes, filename: Optional[str] = None,
                content_type: Optional[str] = None) -> ReceiptExtraction:
        ...


class MockReceiptExtractor(ReceiptExtractor):
    """Returns a random but plausible receipt without looking at the image."""

    name = "mock"

    def __init__(self, rng: Optional[random.Random] = None, today: Optional[datetime] = None):
        self.rng = rng or random.Random()
        self.today = today

    def extract(self, content: bytes, filename: Optional[str] = None,
                content_type: Optional[str] = None) -> ReceiptExtraction:
        if not content:
            raise ValidationError("Receipt file is empty")

        now = self.today or datetime.now()
        vendor = self.rng.choice(VENDORS)
        receipt_date = now - timedelta(seconds=self.rng.random() * 7 * 24 * 60 * 60)
        return ReceiptExtraction(
            amount=round(self.rng.random() * 200 + 10, 2),
            date=receipt_date.date().isoformat(),
            vendor=vendor,
            category=self.rng.choice(CATEGORIES),
            description=DEFAULT_DESCRIPTION,
            confidence=round(self.rng.random() * 20 + 80, 2),
            raw_text=f"Sample receipt text for {vendor}",
        )


class TesseractReceiptExtractor(ReceiptExtractor):
    """Runs Tesseract over the image and parses the recognised text."""

    name = "tesseract"

    def __init__(self, lang: str = "eng"):
        self.lang = lang

    def extract(self, content: bytes, filename: Optional[str] = None,
                content_type: Optional[str] = None) -> ReceiptExtraction:
        if not content:
            raise ValidationError("Receipt file is empty")

        try:
            import pytesseract
            from PIL import Image
        except ImportError as e:
            raise OCRProcessingError("Tesseract OCR needs the 'ocr' extra (pytesseract, Pillow)") from e

        try:
            image = Image.open(io.BytesIO(content))
            data = pytesseract.image_to_data(image, lang=self.lang, output_type=pytesseract.Output.DICT)
        except Exception as e:
            logger.error(f"Tesseract failed on {filename or 'upload'}: {e}")
            raise OCRProcessingError("OCR processing failed") from e

        text = _join_lines(data)
        confidences = [float(c) for c in data.get("conf", []) if float(c) >= 0]
        confidence = round(sum(confidences) / len(confidences), 2) if confidences else 0.0

        parsed = parse_receipt_text(text)
        return ReceiptExtraction(
            amount=parsed["amount"] or 0.0,
            date=parsed["date"] or date.today().isoformat(),
            vendor=parsed["vendor"] or "Unknown vendor",
            category=parsed["category"],
            description=DEFAULT_DESCRIPTION,
            confidence=confidence,
            raw_text=text,
        )


def _join_lines(data: dict) -> str:
    lines: Dict[tuple, list] = {}
    for i, word in enumerate(data.get("text", [])):
        if not word or not word.strip():
            continue
        line_id = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
        lines.setdefault(line_id, []).append(word.strip())
    return "\n".join(" ".join(words) for _, words in sorted(lines.items()))


def _parse_amount(match: re.Match) -> float:
    whole = match.group(1).replace(",", "")
    return float(f"{whole}.{match.group(2)}")


def parse_receipt_text(text: str) -> dict:
    """Pull amount, date, vendor and category out of raw receipt text.

    The amount is taken from the last "total" line when there is one,
    otherwise the largest money value on the receipt.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    amount = None
    for line in reversed(lines):
        if _TOTAL_LINE_RE.search(line) and not re.search(r"sub\s*total", line, re.IGNORECASE):
            matches = list(_AMOUNT_RE.finditer(line))
            if matches:
                amount = _parse_amount(matches[-1])
                break
    if amount is None:
        values = [_parse_amount(m) for m in _AMOUNT_RE.finditer(text)]
        amount = max(values) if values else None

    receipt_date = None
    for pattern, fmt in _DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            try:
                receipt_date = datetime.strptime(match.group(0), fmt).date().isoformat()
                break
            except ValueError:
                continue

    vendor = next((line for line in lines if re.search(r"[A-Za-z]{2,}", line)), None)

    return {
        "amount": amount,
        "date": receipt_date,
        "vendor": vendor,
        "category": guess_category(text),
    }


def guess_category(text: str) -> str:
    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return "office_supplies"


EXTRACTORS = {
    MockReceiptExtractor.name: MockReceiptExtractor,
    TesseractReceiptExtractor.name: TesseractReceiptExtractor,
}


def get_receipt_extractor(name: str) -> ReceiptExtractor:
    try:
        return EXTRACTORS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown OCR provider '{name}'") from None
