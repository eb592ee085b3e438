from fastapi import APIRouter, Depends, File, UploadFile, status as http_status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
import logging

from expensedesk.api.deps import get_extractor
from expensedesk.logic.ocr import ReceiptExtractor
from expensedesk.ReqResModels.ocrmodels import ReceiptProcessingResponse
from expensedesk.logic.exceptions import OCRProcessingError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ocr",
    tags=["ocr"],
    responses={
        400: {"model": ReceiptProcessingResponse, "description": "Bad upload"},
        500: {"model": ReceiptProcessingResponse, "description": "OCR processing failed"}
    }
)

def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})

@router.post(
    "/process-receipt",
    response_model=ReceiptProcessingResponse,
    summary="Extract expense fields from a receipt",
    description="Upload a receipt image as the multipart field 'receipt'"
)
async def process_receipt(
    receipt: UploadFile = File(...),
    extractor: ReceiptExtractor = Depends(get_extractor)
):
    """Run receipt extraction on an uploaded image"""
    content = await receipt.read()
    try:
        extraction = await run_in_threadpool(extractor.extract, content, receipt.filename, receipt.content_type)
    except ValidationError as e:
        return _failure(http_status.HTTP_400_BAD_REQUEST, e.message)
    except OCRProcessingError as e:
        logger.error(f"OCR error: {e.message}")
        return _failure(http_status.HTTP_500_INTERNAL_SERVER_ERROR, "OCR processing failed")

    logger.info(f"Processed receipt {receipt.filename} with {extractor.name} extractor")
    return {
        "success": True,
        "data": extraction.to_dict(),
        "rawText": extraction.raw_text,
    }
