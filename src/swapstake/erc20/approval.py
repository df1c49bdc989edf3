from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress

from swapstake.amounts import check_uint256
from swapstake.checksum_cache import get_checksum_address
from swapstake.exceptions.transaction import ApprovalFailed, TransactionError
from swapstake.functions import encode_function_calldata
from swapstake.transaction.submission import DEFAULT_CONFIRMATION_TIMEOUT, submit_and_confirm
from swapstake.transaction.types import TransactionReceipt
from swapstake.types.abstract import AbstractChainClient

APPROVE_FUNCTION_PROTOTYPE = "approve(address,uint256)"


def encode_approve_calldata(spender: ChecksumAddress | str, amount: int) -> bytes:
    return encode_function_calldata(
        function_prototype=APPROVE_FUNCTION_PROTOTYPE,
        function_arguments=[get_checksum_address(spender), check_uint256(amount)],
    )


def approve(
    client: AbstractChainClient,
    token: ChecksumAddress | str,
    spender: ChecksumAddress | str,
    amount: int,
    signer: LocalAccount,
    *,
    timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
    explorer_url: str | None = None,
) -> TransactionReceipt:
    """
    Authorize `spender` to transfer up to `amount` (native units) of `token` from the signer, and
    block until the approval is confirmed.

    The existing allowance is not consulted, so every call submits a new approval which replaces
    the previous allowance.

    Raises `ApprovalFailed` if the node rejects the transaction, it reverts, or it is not
    confirmed within `timeout` seconds. The failure is never retried.
    """

    calldata = encode_approve_calldata(spender=spender, amount=amount)

    try:
        return submit_and_confirm(
            client=client,
            signer=signer,
            to=get_checksum_address(token),
            data=calldata,
            label="Approval",
            timeout=timeout,
            explorer_url=explorer_url,
        )
    except TransactionError as exc:
        raise ApprovalFailed(cause=exc) from exc
