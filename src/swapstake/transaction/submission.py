from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress

from swapstake.exceptions import SwapStakeValueError
from swapstake.logging import logger
from swapstake.transaction.types import TransactionReceipt
from swapstake.types.abstract import AbstractChainClient

DEFAULT_CONFIRMATION_TIMEOUT = 120.0


def explorer_link(explorer_url: str | None, tx_hash: str) -> str:
    """
    Format a link to the transaction on a block explorer, or return the bare hash if no explorer
    is configured.
    """

    if not explorer_url:
        return tx_hash
    return f"{explorer_url.rstrip('/')}/tx/{tx_hash}"


def submit_and_confirm(
    client: AbstractChainClient,
    signer: LocalAccount,
    to: ChecksumAddress,
    data: bytes,
    *,
    label: str,
    timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
    explorer_url: str | None = None,
) -> TransactionReceipt:
    """
    Submit a transaction and block until it is confirmed.

    Exactly one submission is made. Errors raised by the client (`TransactionRejected`,
    `TransactionReverted`, `ConfirmationTimeout` or another `TransactionError`) propagate to the
    caller unchanged and are never retried, because a resubmission could execute the same action
    twice.
    """

    if timeout <= 0:
        raise SwapStakeValueError(message="Confirmation timeout must be positive.")

    pending = client.submit(signer=signer, to=to, data=data)
    logger.info(f"{label} transaction sent: {pending.hash_hex}")

    receipt = client.wait_for_confirmation(pending=pending, timeout=timeout)
    logger.info(
        f"{label} transaction confirmed in block {receipt.block_number}: "
        f"{explorer_link(explorer_url, receipt.hash_hex)}"
    )
    return receipt
