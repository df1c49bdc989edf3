import abc
from typing import TYPE_CHECKING

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress

if TYPE_CHECKING:
    from swapstake.transaction.types import PendingTransaction, TransactionReceipt


class AbstractChainClient(abc.ABC):
    """
    Read and write access to an EVM chain.

    Submission and confirmation are separate operations. `submit` returns as soon as the node has
    accepted the signed transaction, and `wait_for_confirmation` blocks until the transaction is
    included in a block, it reverts, or the timeout expires.

    Implementations raise `TransactionRejected` from `submit` if the node refuses the transaction,
    and `TransactionReverted` or `ConfirmationTimeout` from `wait_for_confirmation`.
    """

    chain_id: int

    @abc.abstractmethod
    def call(self, to: ChecksumAddress, data: bytes) -> bytes:
        """
        Execute a read-only call at the latest block and return the raw result.
        """

    @abc.abstractmethod
    def submit(
        self,
        signer: LocalAccount,
        to: ChecksumAddress,
        data: bytes,
    ) -> "PendingTransaction": ...

    @abc.abstractmethod
    def wait_for_confirmation(
        self,
        pending: "PendingTransaction",
        timeout: float,
    ) -> "TransactionReceipt": ...
