from dataclasses import dataclass
from decimal import Decimal

from eth_typing import ChecksumAddress

from swapstake.amounts import HumanAmount, from_native_units, to_native_units
from swapstake.checksum_cache import get_checksum_address
from swapstake.exceptions import SwapStakeValueError
from swapstake.types.aliases import ChainId


@dataclass(slots=True, frozen=True)
class Erc20TokenDescriptor:
    """
    Static description of an ERC-20 token, used for decimal conversion and display.
    """

    chain_id: ChainId
    address: ChecksumAddress
    decimals: int
    symbol: str
    name: str

    def __post_init__(self) -> None:
        if not 0 <= self.decimals <= 255:  # decimals() returns a uint8
            raise SwapStakeValueError(message=f"Invalid decimal precision {self.decimals}")
        # Frozen dataclass, so the checksummed address must be set through object
        object.__setattr__(self, "address", get_checksum_address(self.address))

    def __str__(self) -> str:
        return self.symbol

    def to_native_units(self, amount: HumanAmount) -> int:
        return to_native_units(amount, self.decimals)

    def from_native_units(self, amount: int) -> Decimal:
        return from_native_units(amount, self.decimals)

    def format_amount(self, amount: int) -> str:
        return f"{self.from_native_units(amount).normalize():f} {self.symbol}"
