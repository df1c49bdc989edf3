import eth_abi.abi
import pytest

from swapstake.constants import MAX_UINT256
from swapstake.erc20.approval import approve, encode_approve_calldata
from swapstake.erc20.tokens import SepoliaUsdc
from swapstake.exceptions import (
    ApprovalFailed,
    ConfirmationTimeout,
    InvalidAmount,
    SwapStakeValueError,
    TransactionRejected,
    TransactionReverted,
)
from swapstake.uniswap.deployments import SepoliaUniswapV3
from tests.conftest import FakeChainClient

ROUTER = SepoliaUniswapV3.router.address


def test_encode_approve_calldata():
    calldata = encode_approve_calldata(spender=ROUTER.lower(), amount=1_000_000)
    assert calldata[:4] == bytes.fromhex("095ea7b3")
    spender, amount = eth_abi.abi.decode(["address", "uint256"], calldata[4:])
    assert spender.lower() == ROUTER.lower()
    assert amount == 1_000_000


def test_approve_submits_once_and_confirms(fake_client: FakeChainClient, signer):
    receipt = approve(
        client=fake_client,
        token=SepoliaUsdc.address,
        spender=ROUTER,
        amount=1_000_000,
        signer=signer,
        timeout=30,
    )

    assert receipt.succeeded
    assert fake_client.submissions == [
        (SepoliaUsdc.address, encode_approve_calldata(spender=ROUTER, amount=1_000_000))
    ]
    assert fake_client.confirmation_timeouts == [30]


def test_approve_accepts_full_uint256_range(fake_client: FakeChainClient, signer):
    approve(fake_client, SepoliaUsdc.address, ROUTER, 0, signer)
    approve(fake_client, SepoliaUsdc.address, ROUTER, MAX_UINT256, signer)
    assert len(fake_client.submissions) == 2


@pytest.mark.parametrize("amount", [-1, MAX_UINT256 + 1])
def test_approve_rejects_out_of_range_amount(fake_client: FakeChainClient, signer, amount):
    with pytest.raises(InvalidAmount):
        approve(fake_client, SepoliaUsdc.address, ROUTER, amount, signer)
    assert fake_client.submissions == []


def test_approve_rejects_non_positive_timeout(fake_client: FakeChainClient, signer):
    with pytest.raises(SwapStakeValueError):
        approve(fake_client, SepoliaUsdc.address, ROUTER, 1, signer, timeout=0)
    assert fake_client.submissions == []


@pytest.mark.parametrize(
    "cause",
    [
        TransactionRejected(reason="insufficient funds for gas * price + value"),
        TransactionReverted(tx_hash="0x01", block_number=7_000_001),
        ConfirmationTimeout(tx_hash="0x01", timeout_seconds=30),
    ],
)
def test_approve_failure_wraps_cause(fake_client: FakeChainClient, signer, cause):
    fake_client.fail(SepoliaUsdc.address, "approve(address,uint256)", cause)

    with pytest.raises(ApprovalFailed) as exc_info:
        approve(fake_client, SepoliaUsdc.address, ROUTER, 1, signer)

    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause
    assert cause.__class__.__name__ in exc_info.value.message
