from .abstract import AbstractChainClient
from .aliases import ChainId, StakingPoolId

__all__ = (
    "AbstractChainClient",
    "ChainId",
    "StakingPoolId",
)
