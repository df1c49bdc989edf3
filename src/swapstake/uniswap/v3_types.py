import dataclasses
import enum
from typing import Self

from eth_typing import ChecksumAddress

from swapstake.checksum_cache import get_checksum_address
from swapstake.exceptions import SwapStakeValueError
from swapstake.exceptions.liquidity_pool import InvalidFeeTier


class FeeTier(enum.IntEnum):
    """
    Fee tiers enabled on the Uniswap V3 factory, in hundredths of a basis point.
    """

    LOWEST = 100  # 0.01%
    LOW = 500  # 0.05%
    MEDIUM = 3_000  # 0.30%
    HIGH = 10_000  # 1.00%

    @classmethod
    def from_fee(cls, fee: int) -> Self:
        try:
            return cls(fee)
        except ValueError:
            raise InvalidFeeTier(fee=fee) from None

    @property
    def percent(self) -> float:
        return self.value / 10_000


@dataclasses.dataclass(slots=True, frozen=True)
class UniswapV3PoolIdentity:
    """
    The on-chain identity of a Uniswap V3 pool, as reported by the factory and the pool itself.
    `token0` and `token1` are in the pool's order, which is sorted by address and may differ from
    the order the caller used when looking the pool up.
    """

    address: ChecksumAddress
    token0: ChecksumAddress
    token1: ChecksumAddress
    fee: int

    def contains(self, token: ChecksumAddress | str) -> bool:
        return get_checksum_address(token) in (self.token0, self.token1)

    def zero_for_one(self, token_in: ChecksumAddress | str) -> bool:
        """
        True if a swap with `token_in` as the input moves the pool from token0 to token1.
        """

        token_in = get_checksum_address(token_in)
        if token_in == self.token0:
            return True
        if token_in == self.token1:
            return False
        raise SwapStakeValueError(message=f"{token_in} is not traded by pool {self.address}")


@dataclasses.dataclass(slots=True, frozen=True)
class ExactInputSingleParams:
    """
    Parameters for a single-hop exact input swap through SwapRouter02.

    The minimum output and the price limit are fixed at zero, so the swap accepts any output amount.
    """

    token_in: ChecksumAddress
    token_out: ChecksumAddress
    fee: int
    recipient: ChecksumAddress
    amount_in: int
    amount_out_minimum: int = dataclasses.field(default=0, init=False)
    sqrt_price_limit_x96: int = dataclasses.field(default=0, init=False)

    @classmethod
    def from_pool(
        cls,
        pool: UniswapV3PoolIdentity,
        token_in: ChecksumAddress | str,
        token_out: ChecksumAddress | str,
        recipient: ChecksumAddress | str,
        amount_in: int,
    ) -> Self:
        """
        Build the parameters for a swap of `amount_in` through `pool`, using the fee from the
        pool's own record.
        """

        token_in = get_checksum_address(token_in)
        token_out = get_checksum_address(token_out)
        if token_in == token_out or not (pool.contains(token_in) and pool.contains(token_out)):
            raise SwapStakeValueError(
                message=f"Pool {pool.address} does not trade {token_in} for {token_out}"
            )
        return cls(
            token_in=token_in,
            token_out=token_out,
            fee=pool.fee,
            recipient=get_checksum_address(recipient),
            amount_in=amount_in,
        )

    def as_tuple(
        self,
    ) -> tuple[ChecksumAddress, ChecksumAddress, int, ChecksumAddress, int, int, int]:
        return (
            self.token_in,
            self.token_out,
            self.fee,
            self.recipient,
            self.amount_in,
            self.amount_out_minimum,
            self.sqrt_price_limit_x96,
        )
