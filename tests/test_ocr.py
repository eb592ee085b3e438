"""Tests for receipt extraction."""

from __future__ import annotations

import io
import random
from datetime import date, datetime

import pytest

from expensedesk.logic.exceptions import OCRProcessingError, ValidationError
from expensedesk.logic.ocr import (
    CATEGORIES,
    DEFAULT_DESCRIPTION,
    VENDORS,
    MockReceiptExtractor,
    TesseractReceiptExtractor,
    get_receipt_extractor,
    guess_category,
    parse_receipt_text,
)


class TestMockReceiptExtractor:
    """Tests for the stub extractor."""

    def test_fields_are_in_range(self) -> None:
        extractor = MockReceiptExtractor(rng=random.Random(42), today=datetime(2024, 3, 10, 12, 0))

        for _ in range(50):
            result = extractor.extract(b"\x89PNG fake", "receipt.png", "image/png")
            assert 10 <= result.amount <= 210
            assert 80 <= result.confidence <= 100
            assert result.vendor in VENDORS
            assert result.category in CATEGORIES
            assert result.description == DEFAULT_DESCRIPTION
            assert date(2024, 3, 3) <= date.fromisoformat(result.date) <= date(2024, 3, 10)
            assert result.raw_text == f"Sample receipt text for {result.vendor}"

    def test_same_seed_same_result(self) -> None:
        first = MockReceiptExtractor(rng=random.Random(7), today=datetime(2024, 1, 1)).extract(b"x")
        second = MockReceiptExtractor(rng=random.Random(7), today=datetime(2024, 1, 1)).extract(b"x")
        assert first == second

    def test_to_dict_drops_raw_text(self) -> None:
        data = MockReceiptExtractor(rng=random.Random(1)).extract(b"x").to_dict()
        assert set(data) == {"amount", "date", "vendor", "category", "description", "confidence"}

    def test_empty_upload_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MockReceiptExtractor().extract(b"")


class TestParseReceiptText:

    def test_uses_total_line(self) -> None:
        text = "\n".join([
            "STARBUCKS COFFEE #1234",
            "123 Main St",
            "Date: 03/14/2024",
            "Latte 4.50",
            "Muffin 3.25",
            "Subtotal 7.75",
            "Tax 0.62",
            "TOTAL 8.37",
        ])

        parsed = parse_receipt_text(text)

        assert parsed == {
            "amount": 8.37,
            "date": "2024-03-14",
            "vendor": "STARBUCKS COFFEE #1234",
            "category": "food",
        }

    def test_falls_back_to_largest_amount(self) -> None:
        parsed = parse_receipt_text("ACME HARDWARE\nHammer 12.99\nLadder 1,204.50")
        assert parsed["amount"] == 1204.5
        assert parsed["date"] is None
        assert parsed["category"] == "office_supplies"

    def test_day_first_dotted_date(self) -> None:
        parsed = parse_receipt_text("Hotel Berlin\n14.03.2024\nTotal 250.00")
        assert parsed["date"] == "2024-03-14"
        assert parsed["amount"] == 250.0
        assert parsed["category"] == "travel"

    def test_iso_date(self) -> None:
        assert parse_receipt_text("Uber\n2024-02-29\n18.40")["date"] == "2024-02-29"

    def test_empty_text(self) -> None:
        assert parse_receipt_text("") == {
            "amount": None,
            "date": None,
            "vendor": None,
            "category": "office_supplies",
        }

    @pytest.mark.parametrize("text, category", [
        ("Lyft ride downtown", "transportation"),
        ("Adobe subscription renewal", "software"),
        ("City Cinema tickets", "entertainment"),
        ("Team dinner", "office_supplies"),
    ])
    def test_guess_category(self, text: str, category: str) -> None:
        assert guess_category(text) == category


class TestGetReceiptExtractor:

    def test_known_names(self) -> None:
        assert isinstance(get_receipt_extractor("mock"), MockReceiptExtractor)
        assert isinstance(get_receipt_extractor("Tesseract"), TesseractReceiptExtractor)

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            get_receipt_extractor("cloud-vision")


class TestTesseractReceiptExtractor:
    """Runs against a patched ``image_to_data`` so no Tesseract binary is needed."""

    @pytest.fixture
    def png_bytes(self) -> bytes:
        Image = pytest.importorskip("PIL.Image")
        buffer = io.BytesIO()
        Image.new("RGB", (20, 20), "white").save(buffer, format="PNG")
        return buffer.getvalue()

    def test_extracts_fields(self, png_bytes: bytes, monkeypatch) -> None:
        pytesseract = pytest.importorskip("pytesseract")

        def fake_image_to_data(image, lang=None, output_type=None):
            return {
                "text": ["Office", "Depot", "", "TOTAL", "42.10"],
                "conf": [90, 80, -1, 70, 60],
                "block_num": [1, 1, 1, 2, 2],
                "par_num": [1, 1, 1, 1, 1],
                "line_num": [1, 1, 1, 1, 1],
            }

        monkeypatch.setattr(pytesseract, "image_to_data", fake_image_to_data)

        result = TesseractReceiptExtractor().extract(png_bytes, "receipt.png")

        assert result.raw_text == "Office Depot\nTOTAL 42.10"
        assert result.amount == 42.1
        assert result.vendor == "Office Depot"
        assert result.category == "office_supplies"
        assert result.confidence == 75.0
        assert result.date == date.today().isoformat()

    def test_engine_failure(self, png_bytes: bytes, monkeypatch) -> None:
        pytesseract = pytest.importorskip("pytesseract")

        def broken(*args, **kwargs):
            raise RuntimeError("tesseract is not installed")

        monkeypatch.setattr(pytesseract, "image_to_data", broken)

        with pytest.raises(OCRProcessingError):
            TesseractReceiptExtractor().extract(png_bytes)

    def test_unreadable_image(self) -> None:
        pytest.importorskip("pytesseract")
        pytest.importorskip("PIL")
        with pytest.raises(OCRProcessingError):
            TesseractReceiptExtractor().extract(b"not an image")

    def test_empty_upload_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TesseractReceiptExtractor().extract(b"")
