import logging

import eth_abi.abi
import pytest
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from swapstake.checksum_cache import get_checksum_address
from swapstake.connection import connection_manager
from swapstake.erc20.tokens import SEPOLIA_CHAIN_ID, SepoliaLink, SepoliaUsdc
from swapstake.exceptions.transaction import TransactionError, TransactionRejected
from swapstake.functions import function_selector
from swapstake.logging import logger
from swapstake.transaction.types import PendingTransaction, TransactionReceipt
from swapstake.types.abstract import AbstractChainClient
from swapstake.uniswap.deployments import SepoliaUniswapV3
from swapstake.workflow.orchestrator import SwapStakeWorkflow, WorkflowConfig

# Anvil's first default account
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"

POOL_ADDRESS = get_checksum_address("0x3c5df8a9e5a0e0a6f3f1ba8cb7a3c0c4c0e7f6a1")
STAKING_ADDRESS = get_checksum_address("0x1234567890abcdef1234567890abcdef12345678")


class FakeChainClient(AbstractChainClient):
    """
    An in-memory chain client. Read results are registered per (contract, function), and every
    submission is recorded and confirmed in a new block unless a failure has been registered for
    it.
    """

    def __init__(self, chain_id: int = SEPOLIA_CHAIN_ID) -> None:
        self.chain_id = chain_id
        self.calls: list[tuple[ChecksumAddress, bytes]] = []
        self.submissions: list[tuple[ChecksumAddress, bytes]] = []
        self.confirmation_timeouts: list[float] = []
        self.submit_hooks: list = []
        self._call_results: dict[tuple[ChecksumAddress, bytes], bytes | Exception] = {}
        self._failures: dict[tuple[ChecksumAddress, bytes], TransactionError] = {}
        self._pending_failures: dict[HexBytes, TransactionError] = {}
        self._nonce = 0
        self._block_number = 7_000_000

    def set_call_result(
        self,
        to: str,
        function_prototype: str,
        result: bytes | Exception,
    ) -> None:
        self._call_results[(get_checksum_address(to), function_selector(function_prototype))] = (
            result
        )

    def fail(self, to: str, function_prototype: str, exc: TransactionError) -> None:
        """
        Fail submissions of `function_prototype` to `to`. A `TransactionRejected` is raised by
        `submit`, all other errors by `wait_for_confirmation`.
        """

        self._failures[(get_checksum_address(to), function_selector(function_prototype))] = exc

    def submitted_selectors(self) -> list[bytes]:
        return [data[:4] for _, data in self.submissions]

    def call(self, to: ChecksumAddress, data: bytes) -> bytes:
        self.calls.append((to, data))
        try:
            result = self._call_results[(to, data[:4])]
        except KeyError:
            raise ValueError(f"execution reverted: no result for {data[:4].hex()} at {to}") from None
        if isinstance(result, Exception):
            raise result
        return result

    def submit(
        self,
        signer: LocalAccount,
        to: ChecksumAddress,
        data: bytes,
    ) -> PendingTransaction:
        for hook in self.submit_hooks:
            hook(to, data)

        failure = self._failures.get((to, data[:4]))
        if isinstance(failure, TransactionRejected):
            raise failure

        self.submissions.append((to, data))
        pending = PendingTransaction(
            tx_hash=HexBytes(keccak(self._nonce.to_bytes(32, "big"))),
            sender=get_checksum_address(signer.address),
            to=to,
            nonce=self._nonce,
        )
        self._nonce += 1
        if failure is not None:
            self._pending_failures[pending.tx_hash] = failure
        return pending

    def wait_for_confirmation(
        self,
        pending: PendingTransaction,
        timeout: float,
    ) -> TransactionReceipt:
        self.confirmation_timeouts.append(timeout)
        if (failure := self._pending_failures.pop(pending.tx_hash, None)) is not None:
            raise failure

        self._block_number += 1
        return TransactionReceipt(
            tx_hash=pending.tx_hash,
            block_number=self._block_number,
            block_hash=HexBytes(keccak(self._block_number.to_bytes(32, "big"))),
            status=1,
            gas_used=65_000,
        )


def encode_address(address: str) -> bytes:
    return eth_abi.abi.encode(["address"], [get_checksum_address(address)])


def encode_uint(value: int) -> bytes:
    return eth_abi.abi.encode(["uint256"], [value])


@pytest.fixture(autouse=True)
def _initialize_and_reset_after_each_test():
    """
    Before each test, clear/reset global values and singletons
    """
    connection_manager.reset()
    SwapStakeWorkflow._signer_locks.clear()


@pytest.fixture(scope="session", autouse=True)
def _set_swapstake_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def signer() -> LocalAccount:
    return Account.from_key(TEST_PRIVATE_KEY)


@pytest.fixture
def fake_client() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def fake_client_with_pool(fake_client: FakeChainClient) -> FakeChainClient:
    """
    A fake client with a USDC/LINK 0.3% pool deployed on the Sepolia factory.
    """

    factory = SepoliaUniswapV3.factory.address
    fake_client.set_call_result(
        factory, "getPool(address,address,uint24)", encode_address(POOL_ADDRESS)
    )
    fake_client.set_call_result(POOL_ADDRESS, "token0()", encode_address(SepoliaUsdc.address))
    fake_client.set_call_result(POOL_ADDRESS, "token1()", encode_address(SepoliaLink.address))
    fake_client.set_call_result(POOL_ADDRESS, "fee()", encode_uint(3000))
    return fake_client


@pytest.fixture
def workflow_config() -> WorkflowConfig:
    return WorkflowConfig(
        factory=SepoliaUniswapV3.factory.address,
        router=SepoliaUniswapV3.router.address,
        staking_contract=STAKING_ADDRESS,
        token_in=SepoliaUsdc,
        token_out=SepoliaLink,
        explorer_url="https://sepolia.etherscan.io",
    )
