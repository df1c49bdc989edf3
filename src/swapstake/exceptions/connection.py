"""
Connection-related exceptions for the swapstake package.
"""

from typing import Any

from swapstake.exceptions.base import SwapStakeError


class SwapStakeConnectionError(SwapStakeError):
    """
    Base exception for connection-related errors.
    """


class Web3NotConnected(SwapStakeConnectionError):
    """
    Raised when a Web3 instance does not report a live connection within the retry window.
    """

    def __init__(self) -> None:
        super().__init__(message="Web3 instance is not connected.")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, ()
