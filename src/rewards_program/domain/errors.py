"""
Errors raised by the rewards service.

The API layer maps each class to an HTTP status and uses `status` as the
label in the error envelope. Anything that is not a RewardsError is treated
as unexpected.
"""

from __future__ import annotations


class RewardsError(Exception):
    status = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Bad or missing input, or a business-rule violation
class InvalidArgumentError(RewardsError, ValueError):
    status = "Bad Request"


class CustomerNotFoundError(RewardsError, LookupError):
    status = "Not Found"

    def __init__(self, customer_id: int):
        super().__init__(f"Customer not found with ID: {customer_id}")
        self.customer_id = customer_id
