import eth_abi.abi
import pytest

from swapstake.erc20.tokens import SepoliaLink, SepoliaUsdc
from swapstake.exceptions import (
    ConfirmationTimeout,
    InvalidAmount,
    SwapFailed,
    SwapStakeValueError,
    TransactionRejected,
    TransactionReverted,
)
from swapstake.uniswap.deployments import SepoliaUniswapV3
from swapstake.uniswap.swap import (
    EXACT_INPUT_SINGLE_FUNCTION_PROTOTYPE,
    encode_exact_input_single_calldata,
    swap,
)
from swapstake.uniswap.v3_types import ExactInputSingleParams, UniswapV3PoolIdentity
from tests.conftest import POOL_ADDRESS, FakeChainClient

ROUTER = SepoliaUniswapV3.router.address

POOL = UniswapV3PoolIdentity(
    address=POOL_ADDRESS,
    token0=SepoliaUsdc.address,
    token1=SepoliaLink.address,
    fee=3000,
)


@pytest.fixture
def params(signer) -> ExactInputSingleParams:
    return ExactInputSingleParams.from_pool(
        pool=POOL,
        token_in=SepoliaUsdc.address,
        token_out=SepoliaLink.address,
        recipient=signer.address,
        amount_in=1_000_000,
    )


def test_params_have_no_slippage_protection(params: ExactInputSingleParams, signer):
    assert params.fee == 3000
    assert params.recipient == signer.address
    assert params.amount_out_minimum == 0
    assert params.sqrt_price_limit_x96 == 0


def test_params_require_pool_tokens(signer):
    with pytest.raises(SwapStakeValueError):
        ExactInputSingleParams.from_pool(
            pool=POOL,
            token_in=SepoliaUsdc.address,
            token_out=SepoliaUsdc.address,
            recipient=signer.address,
            amount_in=1,
        )


def test_encode_exact_input_single_calldata(params: ExactInputSingleParams, signer):
    calldata = encode_exact_input_single_calldata(params)
    assert calldata[:4] == bytes.fromhex("04e45aaf")

    ((token_in, token_out, fee, recipient, amount_in, amount_out_min, price_limit),) = (
        eth_abi.abi.decode(
            ["(address,address,uint24,address,uint256,uint256,uint160)"], calldata[4:]
        )
    )
    assert token_in.lower() == SepoliaUsdc.address.lower()
    assert token_out.lower() == SepoliaLink.address.lower()
    assert fee == 3000
    assert recipient.lower() == signer.address.lower()
    assert amount_in == 1_000_000
    assert amount_out_min == 0
    assert price_limit == 0


def test_swap(fake_client: FakeChainClient, params: ExactInputSingleParams, signer):
    receipt = swap(
        client=fake_client,
        router=ROUTER,
        params=params,
        signer=signer,
        timeout=60,
    )
    assert receipt.succeeded
    assert fake_client.submissions == [(ROUTER, encode_exact_input_single_calldata(params))]


def test_swap_rejects_negative_amount(fake_client: FakeChainClient, signer):
    params = ExactInputSingleParams.from_pool(
        pool=POOL,
        token_in=SepoliaUsdc.address,
        token_out=SepoliaLink.address,
        recipient=signer.address,
        amount_in=-1,
    )
    with pytest.raises(InvalidAmount):
        swap(fake_client, ROUTER, params, signer)
    assert fake_client.submissions == []


@pytest.mark.parametrize(
    "cause",
    [
        TransactionRejected(reason="gas required exceeds allowance"),
        TransactionReverted(tx_hash="0x02"),
        ConfirmationTimeout(tx_hash="0x02", timeout_seconds=60),
    ],
)
def test_swap_failure(fake_client: FakeChainClient, params: ExactInputSingleParams, signer, cause):
    fake_client.fail(ROUTER, EXACT_INPUT_SINGLE_FUNCTION_PROTOTYPE, cause)

    with pytest.raises(SwapFailed) as exc_info:
        swap(fake_client, ROUTER, params, signer)
    assert exc_info.value.cause is cause
