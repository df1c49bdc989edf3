from typing import cast

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception
from web3.types import TxParams, TxReceipt

from swapstake.checksum_cache import get_checksum_address
from swapstake.exceptions import SwapStakeValueError
from swapstake.exceptions.transaction import (
    ConfirmationTimeout,
    TransactionError,
    TransactionRejected,
    TransactionReverted,
)
from swapstake.logging import logger
from swapstake.transaction.types import PendingTransaction, TransactionReceipt
from swapstake.types.abstract import AbstractChainClient

# Errors raised by web3 and its HTTP/IPC transports when the node refuses or cannot process a
# request. `requests` exceptions derive from `OSError`.
NODE_ERRORS = (Web3Exception, ValueError, OSError)

# Errors raised while assembling or signing a transaction from malformed node data
BUILD_ERRORS = (KeyError, TypeError)


class Web3ChainClient(AbstractChainClient):
    """
    A chain client backed by a `Web3` instance. Transactions are built as EIP-1559 (type 2)
    transactions, or as legacy transactions when the latest block has no base fee. They are signed
    locally by the provided account and broadcast raw.
    """

    def __init__(
        self,
        w3: Web3,
        *,
        gas_limit_multiplier: float = 1.5,
        poll_latency: float = 1.0,
    ) -> None:
        if gas_limit_multiplier < 1.0:
            raise SwapStakeValueError(message="Gas limit multiplier must be at least 1.0")

        self.w3 = w3
        self.chain_id = w3.eth.chain_id
        self.gas_limit_multiplier = gas_limit_multiplier
        self.poll_latency = poll_latency

    def call(self, to: ChecksumAddress, data: bytes) -> bytes:
        return bytes(
            self.w3.eth.call(
                TxParams(
                    to=to,
                    data=HexBytes(data),
                )
            )
        )

    def _build_transaction(
        self,
        signer: LocalAccount,
        to: ChecksumAddress,
        data: bytes,
    ) -> TxParams:
        sender = get_checksum_address(signer.address)
        tx = TxParams(
            {
                "from": sender,
                "to": to,
                "data": HexBytes(data),
                "value": 0,
                "chainId": self.chain_id,
                "nonce": self.w3.eth.get_transaction_count(sender, "pending"),
            }
        )

        base_fee = self.w3.eth.get_block("latest").get("baseFeePerGas")
        if base_fee is None:
            # Pre-London chain, send a legacy transaction
            tx["gasPrice"] = self.w3.eth.gas_price
        else:
            priority_fee = self.w3.eth.max_priority_fee
            tx["type"] = 2
            tx["maxPriorityFeePerGas"] = priority_fee
            tx["maxFeePerGas"] = 2 * base_fee + priority_fee

        # Some transactions run out of gas on chain because the gas estimation is too tight
        tx["gas"] = int(self.gas_limit_multiplier * self.w3.eth.estimate_gas(tx))
        return tx

    def submit(
        self,
        signer: LocalAccount,
        to: ChecksumAddress,
        data: bytes,
    ) -> PendingTransaction:
        try:
            tx = self._build_transaction(signer=signer, to=to, data=data)
            signed_tx = signer.sign_transaction(cast("dict", tx))
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except (*NODE_ERRORS, *BUILD_ERRORS) as exc:
            raise TransactionRejected(reason=f"{exc.__class__.__name__}: {exc}") from exc

        logger.debug(f"Submitted transaction {HexBytes(tx_hash).to_0x_hex()} (nonce {tx['nonce']})")
        return PendingTransaction(
            tx_hash=HexBytes(tx_hash),
            sender=cast("ChecksumAddress", tx["from"]),
            to=to,
            nonce=cast("int", tx["nonce"]),
        )

    def wait_for_confirmation(
        self,
        pending: PendingTransaction,
        timeout: float,
    ) -> TransactionReceipt:
        try:
            receipt: TxReceipt = self.w3.eth.wait_for_transaction_receipt(
                pending.tx_hash,
                timeout=timeout,
                poll_latency=self.poll_latency,
            )
        except TimeExhausted:
            raise ConfirmationTimeout(
                tx_hash=pending.hash_hex,
                timeout_seconds=timeout,
            ) from None
        except NODE_ERRORS as exc:
            raise TransactionError(
                message=f"Lost track of transaction {pending.hash_hex}: {exc}"
            ) from exc

        result = TransactionReceipt(
            tx_hash=HexBytes(receipt["transactionHash"]),
            block_number=receipt["blockNumber"],
            block_hash=HexBytes(receipt["blockHash"]),
            status=receipt["status"],
            gas_used=receipt["gasUsed"],
        )
        if not result.succeeded:
            raise TransactionReverted(tx_hash=result.hash_hex, block_number=result.block_number)
        return result
