# rewards_program/interfaces/api.py
# FastAPI backend for the Rewards Program
# - customers: create + fetch
# - transactions: create + list per customer
# - rewards: lifetime total, single month, monthly summary over a date range
# - uniform {status, message} error envelope

from __future__ import annotations

import datetime as dt
from http import HTTPStatus
from decimal import Decimal
from typing import Iterator, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from rewards_program import config
from rewards_program.data.db import RewardsDB
from rewards_program.domain.errors import CustomerNotFoundError, InvalidArgumentError
from rewards_program.domain.models import RewardSummary, Transaction
from rewards_program.logging_setup import setup_logging
from rewards_program.services.reward_service import RewardService

app = FastAPI(title="Rewards Program API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix=config.API_PREFIX)

DATE_PARAMS = {"date", "startDate", "endDate"}


# ----------------------------
# Pydantic models
# ----------------------------
class CustomerOut(BaseModel):
    id: int
    name: str


class TransactionOut(BaseModel):
    id: int
    amount: float
    date: dt.date


class MonthRewardOut(BaseModel):
    year: int
    month: str  # JANUARY .. DECEMBER
    points: int


class RewardSummaryOut(BaseModel):
    customer_id: int = Field(..., serialization_alias="customerId")
    customer_name: str = Field(..., serialization_alias="customerName")
    transactions: List[TransactionOut]
    monthly_rewards: List[MonthRewardOut] = Field(..., serialization_alias="monthlyRewards")
    total_reward_points: int = Field(..., serialization_alias="totalRewardPoints")


class ErrorResponse(BaseModel):
    status: str
    message: str


# ----------------------------
# Helpers
# ----------------------------
def get_reward_service() -> Iterator[RewardService]:
    db = RewardsDB(config.DB_PATH)
    try:
        yield RewardService(db)
    finally:
        db.close()


def _tx_out(tx: Transaction) -> TransactionOut:
    return TransactionOut(id=tx.id, amount=tx.amount, date=tx.date)


def _summary_out(summary: RewardSummary) -> RewardSummaryOut:
    return RewardSummaryOut(
        customer_id=summary.customer_id,
        customer_name=summary.customer_name,
        transactions=[_tx_out(t) for t in summary.transactions],
        monthly_rewards=[
            MonthRewardOut(year=m.year, month=m.month.name, points=m.points)
            for m in summary.monthly_rewards
        ],
        total_reward_points=summary.total_points,
    )


def _error(status_code: int, status: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(status=status, message=message).model_dump(),
    )


# ----------------------------
# Error handlers
# ----------------------------
@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = first.get("loc") or ()
    name = str(loc[-1]) if loc else "request"

    if first.get("type") == "missing":
        message = f"Missing required parameter: {name}"
    elif name in DATE_PARAMS:
        message = "Date value should be in yyyy-mm-dd format."
    else:
        message = f"{name} is required. Its value can not be null or empty."

    logger.error("Bad Request: {}", message)
    return _error(400, "Bad Request", message)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        logger.error("Invalid Request: {} {}", request.method, request.url.path)
        return _error(400, "Bad Request", "Invalid Request.")
    phrase = HTTPStatus(exc.status_code).phrase
    logger.error("{}: {}", phrase, exc.detail)
    return _error(exc.status_code, phrase, str(exc.detail))


@app.exception_handler(InvalidArgumentError)
async def handle_invalid_argument(request: Request, exc: InvalidArgumentError):
    logger.error("Bad Request: {}", exc.message)
    return _error(400, exc.status, exc.message)


@app.exception_handler(CustomerNotFoundError)
async def handle_customer_not_found(request: Request, exc: CustomerNotFoundError):
    logger.error("Customer Not Found: {}", exc.message)
    return _error(404, exc.status, exc.message)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.opt(exception=exc).error("Unexpected Error: {}", exc)
    return _error(500, "Internal Server Error", "An unexpected error occurred.")


# ----------------------------
# Routes
# ----------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


@router.post("/create-customer", response_model=CustomerOut)
def create_customer(
    name: str = Query(...),
    service: RewardService = Depends(get_reward_service),
):
    logger.info("Creating customer with name: {}", name)
    customer = service.create_customer(name)
    logger.info("Customer created successfully with ID: {}", customer.id)
    return CustomerOut(id=customer.id, name=customer.name)


@router.get("/customers/{customer_id}", response_model=CustomerOut)
def get_customer(
    customer_id: int,
    service: RewardService = Depends(get_reward_service),
):
    logger.info("Fetching customer details for customer ID: {}", customer_id)
    customer = service.get_customer(customer_id)
    return CustomerOut(id=customer.id, name=customer.name)


@router.post("/create-transaction", response_model=TransactionOut)
def create_transaction(
    customer_id: int = Query(..., alias="customerId"),
    amount: Decimal = Query(...),
    tx_date: Optional[dt.date] = Query(None, alias="date"),
    service: RewardService = Depends(get_reward_service),
):
    logger.info(
        "Creating transaction for customer ID: {} with amount: {} and date: {}",
        customer_id,
        amount,
        tx_date,
    )
    tx = service.create_transaction(customer_id, amount, tx_date)
    logger.info("Transaction created successfully with ID: {} on date: {}", tx.id, tx.date)
    return _tx_out(tx)


@router.get("/transactions/{customer_id}", response_model=List[TransactionOut])
def customer_transactions(
    customer_id: int,
    service: RewardService = Depends(get_reward_service),
):
    logger.info("Fetching transactions for customer ID: {}", customer_id)
    return [_tx_out(t) for t in service.get_customer_transactions(customer_id)]


@router.get("/total-rewards/{customer_id}", response_model=int)
def total_rewards(
    customer_id: int,
    service: RewardService = Depends(get_reward_service),
):
    logger.info("Fetching total rewards for customer ID: {}", customer_id)
    return service.get_total_rewards(customer_id)


@router.get("/monthly-rewards/{customer_id}", response_model=int)
def monthly_rewards(
    customer_id: int,
    month: int = Query(...),
    year: int = Query(...),
    service: RewardService = Depends(get_reward_service),
):
    logger.info("Fetching rewards for customer ID: {} for {}-{:02d}", customer_id, year, month)
    return service.get_monthly_rewards(customer_id, month, year)


@router.get("/reward-summary/{customer_id}", response_model=RewardSummaryOut)
def reward_summary(
    customer_id: int,
    start_date: dt.date = Query(..., alias="startDate"),
    end_date: dt.date = Query(..., alias="endDate"),
    service: RewardService = Depends(get_reward_service),
):
    logger.info(
        "Fetching rewards summary for customer ID: {} between period {} and {}",
        customer_id,
        start_date,
        end_date,
    )
    return _summary_out(service.get_rewards_summary(customer_id, start_date, end_date))


app.include_router(router)


def run():
    import uvicorn

    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    uvicorn.run(app, host=config.HOST, port=config.PORT)
