from dataclasses import dataclass

from eth_typing import ChecksumAddress
from hexbytes import HexBytes


@dataclass(slots=True, frozen=True)
class PendingTransaction:
    """
    A transaction accepted by the node but not yet confirmed.
    """

    tx_hash: HexBytes
    sender: ChecksumAddress
    to: ChecksumAddress
    nonce: int

    @property
    def hash_hex(self) -> str:
        return self.tx_hash.to_0x_hex()


@dataclass(slots=True, frozen=True)
class TransactionReceipt:
    """
    The chain's record of a transaction included in a block.
    """

    tx_hash: HexBytes
    block_number: int
    block_hash: HexBytes
    status: int
    gas_used: int

    @property
    def hash_hex(self) -> str:
        return self.tx_hash.to_0x_hex()

    @property
    def succeeded(self) -> bool:
        return self.status == 1
