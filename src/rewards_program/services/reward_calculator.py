from __future__ import annotations

from decimal import Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

UPPER_TIER = Decimal("100")
LOWER_TIER = Decimal("50")


def calculate_reward_points(amount: Number) -> int:
    """
    Reward points for a single purchase:
    - 2 points for every dollar spent over $100
    - 1 point for every dollar spent between $50 and $100

    Each tier is truncated toward zero on its own, so 120.75 earns
    int(41.5) + 50 = 91. Amounts of $50 or less (zero and negatives too)
    earn nothing, as do NaN and infinite amounts.
    """
    a = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    if not a.is_finite():
        return 0
    points = 0
    if a > UPPER_TIER:
        points += int((a - UPPER_TIER) * 2)
        a = UPPER_TIER
    if a > LOWER_TIER:
        points += int((a - LOWER_TIER) * 1)
    return points
