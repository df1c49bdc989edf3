from eth_abi.exceptions import DecodingError
from eth_typing import ChecksumAddress

from swapstake.checksum_cache import get_checksum_address
from swapstake.constants import ZERO_ADDRESS
from swapstake.exceptions.liquidity_pool import PoolLookupFailed, PoolNotFound
from swapstake.functions import decode_address, decode_uint, encode_function_calldata
from swapstake.logging import logger
from swapstake.transaction.client import NODE_ERRORS
from swapstake.types.abstract import AbstractChainClient
from swapstake.uniswap.v3_types import FeeTier, UniswapV3PoolIdentity

GET_POOL_FUNCTION_PROTOTYPE = "getPool(address,address,uint24)"
TOKEN0_FUNCTION_PROTOTYPE = "token0()"
TOKEN1_FUNCTION_PROTOTYPE = "token1()"
FEE_FUNCTION_PROTOTYPE = "fee()"

LOOKUP_ERRORS = (*NODE_ERRORS, DecodingError)


def get_pool_address(
    client: AbstractChainClient,
    factory: ChecksumAddress | str,
    token_a: ChecksumAddress | str,
    token_b: ChecksumAddress | str,
    fee: int,
) -> ChecksumAddress:
    """
    Look up the pool address for the unordered token pair and fee via the factory's `getPool`
    mapping. Returns the zero address if the pool does not exist.
    """

    return decode_address(
        client.call(
            to=get_checksum_address(factory),
            data=encode_function_calldata(
                function_prototype=GET_POOL_FUNCTION_PROTOTYPE,
                function_arguments=[
                    get_checksum_address(token_a),
                    get_checksum_address(token_b),
                    fee,
                ],
            ),
        )
    )


def get_immutable_pool_values(
    client: AbstractChainClient,
    pool_address: ChecksumAddress,
) -> tuple[ChecksumAddress, ChecksumAddress, int]:
    """
    Read the ordered token pair and fee from the pool contract.
    """

    token0, token1 = (
        decode_address(
            client.call(
                to=pool_address,
                data=encode_function_calldata(
                    function_prototype=prototype,
                    function_arguments=None,
                ),
            )
        )
        for prototype in (TOKEN0_FUNCTION_PROTOTYPE, TOKEN1_FUNCTION_PROTOTYPE)
    )
    fee = decode_uint(
        client.call(
            to=pool_address,
            data=encode_function_calldata(
                function_prototype=FEE_FUNCTION_PROTOTYPE,
                function_arguments=None,
            ),
        ),
        bits=24,
    )
    return token0, token1, fee


def resolve_pool(
    client: AbstractChainClient,
    factory: ChecksumAddress | str,
    token_a: ChecksumAddress | str,
    token_b: ChecksumAddress | str,
    fee: int,
) -> UniswapV3PoolIdentity:
    """
    Discover the pool for a token pair and fee tier, and read back its token order and fee.

    This performs read-only calls and never submits a transaction. The pool's token order is
    reported as-is, without reconciling it against the order of `token_a` and `token_b`.

    Raises `InvalidFeeTier` for an unknown fee, `PoolNotFound` if the factory has no pool for the
    pair and fee, and `PoolLookupFailed` if a call fails or its result cannot be decoded.
    """

    fee_tier = FeeTier.from_fee(fee)
    token_a = get_checksum_address(token_a)
    token_b = get_checksum_address(token_b)

    try:
        pool_address = get_pool_address(
            client=client,
            factory=factory,
            token_a=token_a,
            token_b=token_b,
            fee=fee_tier.value,
        )
    except LOOKUP_ERRORS as exc:
        raise PoolLookupFailed(message=f"Factory lookup failed: {exc}") from exc

    if pool_address == ZERO_ADDRESS:
        raise PoolNotFound(token_a=token_a, token_b=token_b, fee=fee_tier.value)

    try:
        token0, token1, pool_fee = get_immutable_pool_values(
            client=client,
            pool_address=pool_address,
        )
    except LOOKUP_ERRORS as exc:
        # Contracts differ slightly across Uniswap V3 forks, so decoding may fail. Catch this here
        # and raise as a pool-specific exception
        raise PoolLookupFailed(message="Could not decode contract data") from exc

    pool = UniswapV3PoolIdentity(
        address=pool_address,
        token0=token0,
        token1=token1,
        fee=pool_fee,
    )

    logger.info(f"Resolved pool {pool.address} ({fee_tier.percent:.2f}%)")
    logger.info(f"• Token 0: {pool.token0}")
    logger.info(f"• Token 1: {pool.token1}")
    logger.info(f"• Fee: {pool.fee}")

    return pool
