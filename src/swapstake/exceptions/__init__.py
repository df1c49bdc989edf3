from swapstake.exceptions.amount import InvalidAmount
from swapstake.exceptions.base import SwapStakeError, SwapStakeValueError
from swapstake.exceptions.connection import SwapStakeConnectionError, Web3NotConnected
from swapstake.exceptions.liquidity_pool import (
    InvalidFeeTier,
    LiquidityPoolError,
    PoolLookupFailed,
    PoolNotFound,
)
from swapstake.exceptions.transaction import (
    ApprovalFailed,
    ConfirmationTimeout,
    StakeFailed,
    StepFailed,
    SwapFailed,
    TransactionError,
    TransactionRejected,
    TransactionReverted,
)
from swapstake.exceptions.workflow import WorkflowCancelled, WorkflowError

from . import (
    amount,
    connection,
    liquidity_pool,
    transaction,
    workflow,
)

__all__ = (
    "ApprovalFailed",
    "ConfirmationTimeout",
    "InvalidAmount",
    "InvalidFeeTier",
    "LiquidityPoolError",
    "PoolLookupFailed",
    "PoolNotFound",
    "StakeFailed",
    "StepFailed",
    "SwapFailed",
    "SwapStakeConnectionError",
    "SwapStakeError",
    "SwapStakeValueError",
    "TransactionError",
    "TransactionRejected",
    "TransactionReverted",
    "Web3NotConnected",
    "WorkflowCancelled",
    "WorkflowError",
    "amount",
    "connection",
    "liquidity_pool",
    "transaction",
    "workflow",
)
