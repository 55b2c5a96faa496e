"""
Business logic for the rewards program: customer and transaction creation
plus reward point totals and per-month summaries.

The service holds no state of its own; everything goes through the store it
is given, so one instance per request is fine.
"""

from __future__ import annotations

import calendar
import math
from collections import defaultdict
from datetime import MAXYEAR, MINYEAR, date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from loguru import logger

from rewards_program.data.db import RewardsDB
from rewards_program.domain.errors import CustomerNotFoundError, InvalidArgumentError
from rewards_program.domain.models import (
    Customer,
    Month,
    MonthRewardSummary,
    RewardSummary,
    Transaction,
)
from rewards_program.services.reward_calculator import calculate_reward_points


def _month_start(d: date) -> date:
    return d.replace(day=1)


def _next_month(d: date) -> date:
    if d.month == 12:
        return date(d.year + 1, 1, 1)
    return date(d.year, d.month + 1, 1)


def months_between(start_date: date, end_date: date) -> List[Tuple[int, int]]:
    """
    Every (year, month) touched by [start_date, end_date], oldest first.
    Partial months at either end are included once.
    """
    months: List[Tuple[int, int]] = []
    current = _month_start(start_date)
    while current <= end_date:
        months.append((current.year, current.month))
        if current.year == MAXYEAR and current.month == 12:
            break
        current = _next_month(current)
    return months


def _sum_points(transactions: List[Transaction]) -> int:
    return sum(calculate_reward_points(t.amount) for t in transactions)


def _validate_amount(amount) -> Decimal:
    """
    Positive, finite, and exactly what a JSON number will echo back: the
    amount must survive a trip through float unchanged.
    """
    value = Decimal(str(amount)) if amount is not None else None
    if value is None or not value.is_finite() or value <= 0:
        raise InvalidArgumentError("Amount must be greater than 0.")
    as_float = float(value)
    if math.isinf(as_float) or Decimal(repr(as_float)) != value:
        raise InvalidArgumentError("Amount has more digits than can be stored exactly.")
    return value


class RewardService:
    def __init__(self, db: RewardsDB):
        self.db = db

    def create_customer(self, name: Optional[str]) -> Customer:
        if name is None or not name.strip() or name.strip() == "null":
            raise InvalidArgumentError("Customer name is required.")
        customer = self.db.add_customer(name)
        logger.debug("Stored customer {} ({})", customer.id, customer.name)
        return customer

    def get_customer(self, customer_id: Optional[int]) -> Customer:
        return self._find_customer(customer_id)

    def create_transaction(
        self,
        customer_id: Optional[int],
        amount: Decimal,
        tx_date: Optional[date] = None,
    ) -> Transaction:
        # Amount is checked first so a bad amount is reported even for unknown customers
        value = _validate_amount(amount)
        customer = self._find_customer(customer_id)
        tx = self.db.add_transaction(
            customer_id=customer.id,
            amount=value,
            date=tx_date or date.today(),
        )
        logger.debug("Stored transaction {} for customer {}", tx.id, customer.id)
        return tx

    def get_customer_transactions(self, customer_id: Optional[int]) -> List[Transaction]:
        customer = self._find_customer(customer_id)
        return self.db.get_transactions_by_customer(customer.id)

    def get_total_rewards(self, customer_id: Optional[int]) -> int:
        customer = self._find_customer(customer_id)
        return _sum_points(self.db.get_transactions_by_customer(customer.id))

    def get_monthly_rewards(self, customer_id: Optional[int], month: int, year: int) -> int:
        if month is None or not 1 <= month <= 12:
            raise InvalidArgumentError("Month must be between 1 and 12.")
        if year is None or not MINYEAR <= year <= MAXYEAR:
            raise InvalidArgumentError(f"Year must be between {MINYEAR} and {MAXYEAR}.")
        customer = self._find_customer(customer_id)

        first_day = date(year, month, 1)
        last_day = date(year, month, calendar.monthrange(year, month)[1])
        transactions = self.db.get_transactions_by_customer_between(customer.id, first_day, last_day)
        return _sum_points(transactions)

    def get_rewards_summary(
        self,
        customer_id: Optional[int],
        start_date: date,
        end_date: date,
    ) -> RewardSummary:
        """
        Reward points for a customer between two dates (inclusive), broken
        down by calendar month. Months in the range without any purchases
        are listed with 0 points.
        """
        if start_date is None or end_date is None:
            raise InvalidArgumentError("Start date and end date are required.")
        if end_date < start_date:
            raise InvalidArgumentError("End date cannot be before start date.")

        customer = self._find_customer(customer_id)
        transactions = self.db.get_transactions_by_customer_between(customer.id, start_date, end_date)

        points_by_month: Dict[Tuple[int, int], int] = defaultdict(int)
        for t in transactions:
            points_by_month[(t.date.year, t.date.month)] += calculate_reward_points(t.amount)

        monthly = [
            MonthRewardSummary(year=y, month=Month(m), points=points_by_month.get((y, m), 0))
            for y, m in months_between(start_date, end_date)
        ]

        return RewardSummary(
            customer_id=customer.id,
            customer_name=customer.name,
            transactions=transactions,
            monthly_rewards=monthly,
            total_points=sum(s.points for s in monthly),
        )

    def _find_customer(self, customer_id: Optional[int]) -> Customer:
        if customer_id is None:
            raise InvalidArgumentError("Customer ID cannot be null.")
        customer = self.db.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer
