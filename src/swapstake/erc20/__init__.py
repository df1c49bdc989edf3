from .approval import approve
from .token import Erc20TokenDescriptor

__all__ = (
    "Erc20TokenDescriptor",
    "approve",
)
