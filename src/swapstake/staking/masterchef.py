from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress

from swapstake.amounts import check_uint256
from swapstake.checksum_cache import get_checksum_address
from swapstake.exceptions import InvalidAmount
from swapstake.exceptions.transaction import StakeFailed, TransactionError
from swapstake.functions import encode_function_calldata
from swapstake.transaction.submission import DEFAULT_CONFIRMATION_TIMEOUT, submit_and_confirm
from swapstake.transaction.types import TransactionReceipt
from swapstake.types.abstract import AbstractChainClient
from swapstake.types.aliases import StakingPoolId

# ref: https://github.com/sushiswap/masterchef/blob/master/contracts/MasterChef.sol
DEPOSIT_FUNCTION_PROTOTYPE = "deposit(uint256,uint256)"


def check_pool_id(pool_id: StakingPoolId) -> StakingPoolId:
    if isinstance(pool_id, bool) or not isinstance(pool_id, int):
        raise InvalidAmount(pool_id, "staking pool id must be an integer")
    check_uint256(pool_id)
    return pool_id


def encode_deposit_calldata(pool_id: StakingPoolId, amount: int) -> bytes:
    return encode_function_calldata(
        function_prototype=DEPOSIT_FUNCTION_PROTOTYPE,
        function_arguments=[check_pool_id(pool_id), check_uint256(amount)],
    )


def stake(
    client: AbstractChainClient,
    staking_contract: ChecksumAddress | str,
    pool_id: StakingPoolId,
    amount: int,
    signer: LocalAccount,
    *,
    timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
    explorer_url: str | None = None,
) -> TransactionReceipt:
    """
    Deposit `amount` (native units) of the pool's staking token into staking pool `pool_id`, and
    block until the deposit is confirmed.

    The pool id is not checked against the contract's pool list. A nonexistent pool, a missing
    allowance or an insufficient balance is only detected when the deposit reverts.
    """

    calldata = encode_deposit_calldata(pool_id=pool_id, amount=amount)

    try:
        return submit_and_confirm(
            client=client,
            signer=signer,
            to=get_checksum_address(staking_contract),
            data=calldata,
            label="Stake",
            timeout=timeout,
            explorer_url=explorer_url,
        )
    except TransactionError as exc:
        raise StakeFailed(cause=exc) from exc
