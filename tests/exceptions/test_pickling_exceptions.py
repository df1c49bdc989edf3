import pickle

import pytest

from swapstake.exceptions import (
    ApprovalFailed,
    ConfirmationTimeout,
    InvalidAmount,
    InvalidFeeTier,
    PoolLookupFailed,
    PoolNotFound,
    StakeFailed,
    SwapFailed,
    SwapStakeError,
    TransactionRejected,
    TransactionReverted,
    Web3NotConnected,
    WorkflowCancelled,
)

USDC = "0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238"
LINK = "0x779877A7B0D9E8603169DdbD7836e478b4624789"


@pytest.mark.parametrize(
    "original_exception",
    [
        InvalidAmount("1.0000001", "7 fractional digits exceeds the token precision of 6"),
        InvalidFeeTier(fee=2500),
        PoolNotFound(token_a=USDC, token_b=LINK, fee=3000),  # type: ignore[arg-type]
        PoolLookupFailed(message="Could not decode contract data"),
        TransactionRejected(reason="nonce too low"),
        TransactionReverted(tx_hash="0x01", block_number=7_000_001),
        TransactionReverted(tx_hash="0x01"),
        ConfirmationTimeout(tx_hash="0x01", timeout_seconds=120),
        WorkflowCancelled(step="swap"),
        Web3NotConnected(),
    ],
)
def test_exception_pickling(original_exception: SwapStakeError) -> None:
    """
    Test that exceptions with constructor arguments can be pickled and unpickled correctly.
    """

    unpickled_exception = pickle.loads(pickle.dumps(original_exception))

    assert type(unpickled_exception) is type(original_exception)
    assert unpickled_exception.message == original_exception.message
    assert str(unpickled_exception) == str(original_exception)


@pytest.mark.parametrize("step_failure", [ApprovalFailed, SwapFailed, StakeFailed])
def test_step_failure_pickling(step_failure: type[ApprovalFailed]) -> None:
    cause = TransactionReverted(tx_hash="0x02", block_number=7_000_002)
    original_exception = step_failure(cause=cause)

    unpickled_exception = pickle.loads(pickle.dumps(original_exception))

    assert type(unpickled_exception) is step_failure
    assert unpickled_exception.message == original_exception.message
    assert type(unpickled_exception.cause) is TransactionReverted
    assert unpickled_exception.cause.tx_hash == "0x02"


def test_step_failure_message() -> None:
    exc = SwapFailed(cause=ConfirmationTimeout(tx_hash="0x03", timeout_seconds=60))
    assert exc.message == (
        "Swap failed (ConfirmationTimeout): "
        "Timed out after 60 seconds waiting for transaction 0x03."
    )
