from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress

from swapstake.amounts import check_uint256
from swapstake.checksum_cache import get_checksum_address
from swapstake.exceptions.transaction import SwapFailed, TransactionError
from swapstake.functions import encode_function_calldata
from swapstake.transaction.submission import DEFAULT_CONFIRMATION_TIMEOUT, submit_and_confirm
from swapstake.transaction.types import TransactionReceipt
from swapstake.types.abstract import AbstractChainClient
from swapstake.uniswap.v3_types import ExactInputSingleParams

# SwapRouter02 takes the struct without a deadline field
# ref: https://github.com/Uniswap/swap-router-contracts/blob/main/contracts/interfaces/IV3SwapRouter.sol
EXACT_INPUT_SINGLE_FUNCTION_PROTOTYPE = (
    "exactInputSingle((address,address,uint24,address,uint256,uint256,uint160))"
)


def encode_exact_input_single_calldata(params: ExactInputSingleParams) -> bytes:
    check_uint256(params.amount_in)
    return encode_function_calldata(
        function_prototype=EXACT_INPUT_SINGLE_FUNCTION_PROTOTYPE,
        function_arguments=[params.as_tuple()],
    )


def swap(
    client: AbstractChainClient,
    router: ChecksumAddress | str,
    params: ExactInputSingleParams,
    signer: LocalAccount,
    *,
    timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
    explorer_url: str | None = None,
) -> TransactionReceipt:
    """
    Submit an exact input single-hop swap to the router using `params` verbatim, and block until
    it is confirmed.

    The output amount is determined by the market at execution time. No minimum output is
    estimated or enforced.

    Raises `SwapFailed` if the node rejects the transaction, it reverts (e.g. insufficient
    allowance or liquidity), or it is not confirmed within `timeout` seconds.
    """

    calldata = encode_exact_input_single_calldata(params)

    try:
        return submit_and_confirm(
            client=client,
            signer=signer,
            to=get_checksum_address(router),
            data=calldata,
            label="Swap",
            timeout=timeout,
            explorer_url=explorer_url,
        )
    except TransactionError as exc:
        raise SwapFailed(cause=exc) from exc
