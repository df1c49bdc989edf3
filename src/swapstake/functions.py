from collections.abc import Sequence
from typing import Any, cast

import eth_abi.abi
from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from swapstake.checksum_cache import get_checksum_address
from swapstake.exceptions import SwapStakeValueError


def function_selector(function_prototype: str) -> bytes:
    """
    Return the 4-byte selector for the function prototype, e.g. `0x095ea7b3` for
    'approve(address,uint256)'.
    """

    return keccak(text=function_prototype)[:4]


def encode_function_calldata(
    function_prototype: str, function_arguments: Sequence[Any] | None
) -> bytes:
    """
    Encode the calldata to execute a call to the given function prototype, with ordered arguments.
    The resulting bytes array will include the 4-byte function selector, followed by the
    ABI-encoded arguments.
    """

    if function_arguments is None:
        function_arguments = ()

    return function_selector(function_prototype) + eth_abi.abi.encode(
        types=extract_argument_types_from_function_prototype(function_prototype),
        args=function_arguments,
    )


def extract_argument_types_from_function_prototype(function_prototype: str) -> list[str]:
    """
    Extract the argument types from the function prototype. Tuple (struct) arguments are kept
    intact.

    e.g. the argument types for the prototype 'function(address,uint256)' are ['address','uint256'],
    and for 'function((address,uint24),uint256)' are ['(address,uint24)','uint256']
    """

    opening = function_prototype.find("(")
    closing = function_prototype.rfind(")")
    if opening == -1 or closing < opening:
        raise SwapStakeValueError(message=f"Malformed function prototype {function_prototype!r}")

    function_args = function_prototype[opening + 1 : closing]
    if not function_args:
        return []

    argument_types: list[str] = []
    depth = 0
    start = 0
    for position, char in enumerate(function_args):
        match char:
            case "(":
                depth += 1
            case ")":
                depth -= 1
            case "," if depth == 0:
                argument_types.append(function_args[start:position])
                start = position + 1
            case _:
                pass
    argument_types.append(function_args[start:])

    if depth != 0:
        raise SwapStakeValueError(message=f"Malformed function prototype {function_prototype!r}")

    return argument_types


def decode_address(data: bytes) -> ChecksumAddress:
    """
    Decode a single ABI-encoded address returned by a contract call.
    """

    (address,) = eth_abi.abi.decode(types=["address"], data=HexBytes(data))
    return get_checksum_address(cast("str", address))


def decode_uint(data: bytes, bits: int = 256) -> int:
    """
    Decode a single ABI-encoded unsigned integer returned by a contract call.
    """

    (value,) = eth_abi.abi.decode(types=[f"uint{bits}"], data=HexBytes(data))
    return cast("int", value)


__all__ = (
    "decode_address",
    "decode_uint",
    "encode_function_calldata",
    "extract_argument_types_from_function_prototype",
    "function_selector",
)
