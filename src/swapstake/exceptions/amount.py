from typing import Any

from swapstake.exceptions.base import SwapStakeValueError

"""
Exceptions defined here are raised by the amount conversion helpers in the `amounts` module.
"""


class InvalidAmount(SwapStakeValueError):
    """
    Raised when a human-denominated amount cannot be converted exactly into a token's native units,
    or a native amount is outside the range of a uint256.
    """

    def __init__(self, amount: object, reason: str) -> None:
        self.amount = amount
        self.reason = reason
        super().__init__(message=f"Invalid amount {amount!r}: {reason}")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.amount, self.reason)
