from .client import Web3ChainClient
from .submission import DEFAULT_CONFIRMATION_TIMEOUT, explorer_link, submit_and_confirm
from .types import PendingTransaction, TransactionReceipt

__all__ = (
    "DEFAULT_CONFIRMATION_TIMEOUT",
    "PendingTransaction",
    "TransactionReceipt",
    "Web3ChainClient",
    "explorer_link",
    "submit_and_confirm",
)
