from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import IntEnum
from typing import List


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


# A retail customer enrolled in the rewards program
@dataclass
class Customer:
    id: int
    name: str


# A single purchase made by a customer
@dataclass
class Transaction:
    id: int
    customer_id: int
    amount: Decimal
    date: date


# Reward points earned in one calendar month (computed, never stored)
@dataclass
class MonthRewardSummary:
    year: int
    month: Month
    points: int


@dataclass
class RewardSummary:
    customer_id: int
    customer_name: str
    transactions: List[Transaction] = field(default_factory=list)
    monthly_rewards: List[MonthRewardSummary] = field(default_factory=list)
    total_points: int = 0
