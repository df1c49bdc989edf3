from typing import Any

from swapstake.exceptions.base import SwapStakeError

"""
Exceptions defined here are raised by classes and functions in the `transaction` module, and by
the workflow steps that submit transactions.
"""


class TransactionError(SwapStakeError):
    """
    Exception raised while submitting a transaction or waiting for its confirmation.
    """


class TransactionRejected(TransactionError):
    """
    The node refused to accept the transaction, e.g. gas estimation failed or the balance is
    insufficient to pay for gas.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(message=f"Transaction rejected by node: {reason}")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.reason,)


class TransactionReverted(TransactionError):
    """
    The transaction was included in a block but execution reverted.
    """

    def __init__(self, tx_hash: str, block_number: int | None = None) -> None:
        self.tx_hash = tx_hash
        self.block_number = block_number
        message = f"Transaction {tx_hash} reverted"
        if block_number is not None:
            message += f" in block {block_number}"
        message += "."
        super().__init__(message=message)

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.tx_hash, self.block_number)


class ConfirmationTimeout(TransactionError):
    """
    The transaction was not included in a block before the confirmation timeout expired. It may
    still be mined later.
    """

    def __init__(self, tx_hash: str, timeout_seconds: float) -> None:
        self.tx_hash = tx_hash
        self.timeout_seconds = timeout_seconds
        super().__init__(
            message=f"Timed out after {timeout_seconds} seconds waiting for transaction {tx_hash}."
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.tx_hash, self.timeout_seconds)


class StepFailed(SwapStakeError):
    """
    A workflow step could not complete. The underlying transaction error is available at `.cause`.
    """

    action = "Step"

    def __init__(self, cause: TransactionError) -> None:
        self.cause = cause
        super().__init__(
            message=f"{self.action} failed ({cause.__class__.__name__}): {cause.message}"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.cause,)


class ApprovalFailed(StepFailed):
    action = "Approval"


class SwapFailed(StepFailed):
    action = "Swap"


class StakeFailed(StepFailed):
    action = "Stake"
