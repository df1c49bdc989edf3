from typing import Any

from eth_typing import ChecksumAddress

from swapstake.exceptions.base import SwapStakeError, SwapStakeValueError


class LiquidityPoolError(SwapStakeError):
    """
    Exception raised inside liquidity pool helpers.
    """


class InvalidFeeTier(SwapStakeValueError):
    """
    The requested fee is not one of the enabled Uniswap V3 fee tiers.
    """

    def __init__(self, fee: int) -> None:
        self.fee = fee
        super().__init__(message=f"Fee {fee} is not a recognized fee tier.")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.fee,)


class PoolNotFound(LiquidityPoolError):
    """
    Raised when the factory reports no pool for the token pair and fee tier.
    """

    def __init__(self, token_a: ChecksumAddress, token_b: ChecksumAddress, fee: int) -> None:
        self.token_a = token_a
        self.token_b = token_b
        self.fee = fee
        super().__init__(message=f"No pool deployed for {token_a} / {token_b} at fee {fee}.")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.token_a, self.token_b, self.fee)


class PoolLookupFailed(LiquidityPoolError):
    """
    Raised when a read against the factory or pool contract fails or cannot be decoded.
    """
