from .checksum_cache import get_checksum_address
from .connection import connection_manager, get_web3, set_web3
from .version import __version__

# isort: split

from .amounts import from_native_units, to_native_units
from .erc20 import Erc20TokenDescriptor, approve
from .logging import logger
from .staking import stake
from .transaction import PendingTransaction, TransactionReceipt, Web3ChainClient
from .uniswap import (
    ExactInputSingleParams,
    FeeTier,
    UniswapV3PoolIdentity,
    resolve_pool,
    swap,
)
from .workflow import (
    SwapStakeWorkflow,
    WorkflowConfig,
    WorkflowFailure,
    WorkflowState,
    WorkflowSuccess,
)

__all__ = (
    "Erc20TokenDescriptor",
    "ExactInputSingleParams",
    "FeeTier",
    "PendingTransaction",
    "SwapStakeWorkflow",
    "TransactionReceipt",
    "UniswapV3PoolIdentity",
    "Web3ChainClient",
    "WorkflowConfig",
    "WorkflowFailure",
    "WorkflowState",
    "WorkflowSuccess",
    "__version__",
    "approve",
    "connection_manager",
    "from_native_units",
    "get_checksum_address",
    "get_web3",
    "logger",
    "resolve_pool",
    "set_web3",
    "stake",
    "swap",
    "to_native_units",
)
