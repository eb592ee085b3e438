from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from expensedesk.config import Config
from expensedesk.database.database import test_connection
from expensedesk.api import api_router
from expensedesk.api.deps import load_extractor
from expensedesk.database.migration import run_migration
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="ExpenseDesk API",
    description="Expense submission, manager approval and admin configuration over a key-value record store",
    version=Config.VERSION,
)

origins = Config.cors_origins()
if origins == ["*"]:
    logger.info("Production environment detected, allowing all origins")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=origins != ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-User-Id"],
    expose_headers=["Content-Length"],
    max_age=600,
)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid request"))
    return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "Invalid request"})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

@app.on_event("startup")
async def startup_event():
    """Run startup tasks"""
    logger.info("Starting up ExpenseDesk API...")

    # Fail fast on a misconfigured OCR provider
    extractor = load_extractor(Config.OCR_PROVIDER)
    logger.info(f"Receipt extraction uses the {extractor.name} extractor")

    # Test database connection
    logger.info("Testing database connection...")
    if test_connection():
        logger.info("Database connection successful!")
        run_migration()
    else:
        logger.error("Database connection failed!")

    logger.info("Startup completed!")

app.include_router(api_router)

@app.get("/")
def read_root():
    return {
        "message": "Welcome to the ExpenseDesk API",
        "version": Config.VERSION,
        "status": "running"
    }

@app.get("/health")
def health_check():
    """Health check endpoint for deployment platforms"""
    db_status = test_connection()
    if not db_status:
        raise HTTPException(status_code=503, detail="Service unavailable")
    return {
        "status": "healthy",
        "database": "connected",
        "version": Config.VERSION
    }
