from .deployments import (
    EXCHANGE_DEPLOYMENTS,
    UniswapV3ExchangeDeployment,
    get_exchange_deployment,
    register_exchange,
)
from .pool_resolver import resolve_pool
from .swap import swap
from .v3_types import ExactInputSingleParams, FeeTier, UniswapV3PoolIdentity

__all__ = (
    "EXCHANGE_DEPLOYMENTS",
    "ExactInputSingleParams",
    "FeeTier",
    "UniswapV3ExchangeDeployment",
    "UniswapV3PoolIdentity",
    "get_exchange_deployment",
    "register_exchange",
    "resolve_pool",
    "swap",
)
