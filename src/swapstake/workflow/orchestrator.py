import dataclasses
import enum
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar, Self
from weakref import WeakValueDictionary

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress

from swapstake.amounts import HumanAmount
from swapstake.checksum_cache import get_checksum_address
from swapstake.erc20.approval import approve
from swapstake.erc20.token import Erc20TokenDescriptor
from swapstake.exceptions import SwapStakeError, SwapStakeValueError
from swapstake.exceptions.workflow import WorkflowCancelled
from swapstake.logging import logger
from swapstake.staking.masterchef import check_pool_id, stake
from swapstake.transaction.submission import DEFAULT_CONFIRMATION_TIMEOUT
from swapstake.transaction.types import TransactionReceipt
from swapstake.types.abstract import AbstractChainClient
from swapstake.types.aliases import StakingPoolId
from swapstake.uniswap.deployments import EXCHANGE_DEPLOYMENTS
from swapstake.uniswap.pool_resolver import resolve_pool
from swapstake.uniswap.swap import swap
from swapstake.uniswap.v3_types import ExactInputSingleParams, FeeTier

if TYPE_CHECKING:
    from swapstake.config import Settings


class WorkflowState(enum.Enum):
    IDLE = enum.auto()
    PREPARING = enum.auto()
    APPROVING_SWAP = enum.auto()
    SWAPPING = enum.auto()
    APPROVING_STAKE = enum.auto()
    STAKING = enum.auto()
    DONE = enum.auto()
    FAILED = enum.auto()


class WorkflowStep(enum.StrEnum):
    PREFLIGHT = "preflight"
    APPROVE_SWAP = "approveSwap"
    SWAP = "swap"
    APPROVE_STAKE = "approveStake"
    STAKE = "stake"


@dataclasses.dataclass(slots=True, frozen=True)
class WorkflowConfig:
    """
    Deployment-specific parameters for a workflow. The stake token defaults to the swap output
    token.
    """

    factory: ChecksumAddress
    router: ChecksumAddress
    staking_contract: ChecksumAddress
    token_in: Erc20TokenDescriptor
    token_out: Erc20TokenDescriptor
    stake_token: Erc20TokenDescriptor | None = None
    fee_tier: FeeTier = FeeTier.MEDIUM
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    explorer_url: str | None = None

    def __post_init__(self) -> None:
        if self.confirmation_timeout <= 0:
            raise SwapStakeValueError(message="Confirmation timeout must be positive.")
        if self.token_in.address == self.token_out.address:
            raise SwapStakeValueError(message="The input and output tokens must be different.")

        # Frozen dataclass, so derived values must be set through object
        object.__setattr__(self, "factory", get_checksum_address(self.factory))
        object.__setattr__(self, "router", get_checksum_address(self.router))
        object.__setattr__(self, "staking_contract", get_checksum_address(self.staking_contract))
        object.__setattr__(self, "fee_tier", FeeTier.from_fee(self.fee_tier))
        if self.stake_token is None:
            object.__setattr__(self, "stake_token", self.token_out)

    @property
    def staked_token(self) -> Erc20TokenDescriptor:
        assert self.stake_token is not None
        return self.stake_token

    @classmethod
    def from_settings(cls, settings: "Settings") -> Self:
        chain_id = settings.network.chain_id
        contracts = settings.contracts
        deployment = EXCHANGE_DEPLOYMENTS.get(chain_id)

        factory = contracts.factory or (deployment.factory.address if deployment else None)
        router = contracts.router or (deployment.router.address if deployment else None)
        if factory is None or router is None:
            raise SwapStakeValueError(
                message=f"No Uniswap V3 factory and router configured for chain ID {chain_id}."
            )
        if contracts.staking is None:
            raise SwapStakeValueError(message="No staking contract address configured.")

        tokens = settings.tokens
        return cls(
            factory=get_checksum_address(factory),
            router=get_checksum_address(router),
            staking_contract=get_checksum_address(contracts.staking),
            token_in=tokens.token_in.to_descriptor(chain_id),
            token_out=tokens.token_out.to_descriptor(chain_id),
            stake_token=tokens.stake.to_descriptor(chain_id) if tokens.stake else None,
            fee_tier=FeeTier.from_fee(settings.workflow.fee_tier),
            confirmation_timeout=settings.workflow.confirmation_timeout,
            explorer_url=settings.network.explorer_url,
        )


@dataclasses.dataclass(slots=True, frozen=True)
class WorkflowSuccess:
    approve_swap_tx_hash: str
    swap_tx_hash: str
    approve_stake_tx_hash: str
    stake_tx_hash: str

    @property
    def tx_hashes(self) -> tuple[str, str, str, str]:
        return (
            self.approve_swap_tx_hash,
            self.swap_tx_hash,
            self.approve_stake_tx_hash,
            self.stake_tx_hash,
        )


@dataclasses.dataclass(slots=True, frozen=True)
class WorkflowFailure:
    """
    The outcome of a run that stopped early. Steps in `confirmed_steps` were confirmed on chain and
    are not undone.
    """

    failed_step: str
    error_kind: str
    detail: str
    confirmed_steps: tuple[str, ...] = ()
    confirmed_tx_hashes: tuple[str, ...] = ()

    @property
    def is_partial(self) -> bool:
        return bool(self.confirmed_steps)


type WorkflowResult = WorkflowSuccess | WorkflowFailure


@dataclasses.dataclass(slots=True, frozen=True)
class _PreparedRun:
    swap_amount: int
    stake_amount: int
    pool_id: StakingPoolId
    swap_params: ExactInputSingleParams


class SwapStakeWorkflow:
    """
    Runs the approve, swap, approve, stake sequence for one signer.

    Each step is submitted only after the previous one is confirmed. A failure stops the run and is
    reported as a `WorkflowFailure`, with no attempt to undo the steps already confirmed. Runs for
    the same signer address are serialized within the process.
    """

    # A lock is kept only while a run holds or waits on it
    _signer_locks: ClassVar[WeakValueDictionary[ChecksumAddress, threading.Lock]] = (
        WeakValueDictionary()
    )
    _registry_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        client: AbstractChainClient,
        signer: LocalAccount,
        config: WorkflowConfig,
    ) -> None:
        self.client = client
        self.signer = signer
        self.config = config
        self.address = get_checksum_address(signer.address)
        self._state = WorkflowState.IDLE
        self._cancel_requested = threading.Event()

    @property
    def state(self) -> WorkflowState:
        return self._state

    @classmethod
    def _lock_for(cls, address: ChecksumAddress) -> threading.Lock:
        with cls._registry_lock:
            return cls._signer_locks.setdefault(address, threading.Lock())

    def _transition(self, state: WorkflowState) -> None:
        logger.debug(f"Workflow state: {self._state.name} -> {state.name}")
        self._state = state

    def cancel(self) -> None:
        """
        Request cancellation of the current run. A step already submitted is still awaited, but no
        further transaction is submitted.
        """

        logger.info("Workflow cancellation requested")
        self._cancel_requested.set()

    def run(
        self,
        swap_amount: HumanAmount,
        stake_amount: HumanAmount,
        pool_id: StakingPoolId,
    ) -> WorkflowResult:
        """
        Execute one end-to-end run: swap `swap_amount` of the input token for the output token, then
        stake `stake_amount` of the stake token into staking pool `pool_id`. Amounts are
        human-denominated and converted with each token's own decimal precision.

        Errors raised by this package become a `WorkflowFailure`. Any other exception propagates.
        """

        # Cleared before waiting on the signer lock so a cancel issued while queued is kept
        self._cancel_requested.clear()
        with self._lock_for(self.address):
            self._state = WorkflowState.IDLE

            step = WorkflowStep.PREFLIGHT
            confirmed: list[tuple[WorkflowStep, TransactionReceipt]] = []

            def execute(
                next_step: WorkflowStep,
                state: WorkflowState,
                action: Callable[[], TransactionReceipt],
            ) -> TransactionReceipt:
                nonlocal step
                step = next_step
                if self._cancel_requested.is_set():
                    raise WorkflowCancelled(step=next_step)
                self._transition(state)
                receipt = action()
                confirmed.append((next_step, receipt))
                return receipt

            try:
                self._transition(WorkflowState.PREPARING)
                prepared = self._prepare(swap_amount, stake_amount, pool_id)

                approve_swap_receipt = execute(
                    WorkflowStep.APPROVE_SWAP,
                    WorkflowState.APPROVING_SWAP,
                    lambda: approve(
                        client=self.client,
                        token=self.config.token_in.address,
                        spender=self.config.router,
                        amount=prepared.swap_amount,
                        signer=self.signer,
                        timeout=self.config.confirmation_timeout,
                        explorer_url=self.config.explorer_url,
                    ),
                )
                swap_receipt = execute(
                    WorkflowStep.SWAP,
                    WorkflowState.SWAPPING,
                    lambda: swap(
                        client=self.client,
                        router=self.config.router,
                        params=prepared.swap_params,
                        signer=self.signer,
                        timeout=self.config.confirmation_timeout,
                        explorer_url=self.config.explorer_url,
                    ),
                )
                approve_stake_receipt = execute(
                    WorkflowStep.APPROVE_STAKE,
                    WorkflowState.APPROVING_STAKE,
                    lambda: approve(
                        client=self.client,
                        token=self.config.staked_token.address,
                        spender=self.config.staking_contract,
                        amount=prepared.stake_amount,
                        signer=self.signer,
                        timeout=self.config.confirmation_timeout,
                        explorer_url=self.config.explorer_url,
                    ),
                )
                stake_receipt = execute(
                    WorkflowStep.STAKE,
                    WorkflowState.STAKING,
                    lambda: stake(
                        client=self.client,
                        staking_contract=self.config.staking_contract,
                        pool_id=prepared.pool_id,
                        amount=prepared.stake_amount,
                        signer=self.signer,
                        timeout=self.config.confirmation_timeout,
                        explorer_url=self.config.explorer_url,
                    ),
                )
            except SwapStakeError as exc:
                self._transition(WorkflowState.FAILED)
                failure = WorkflowFailure(
                    failed_step=step.value,
                    error_kind=exc.__class__.__name__,
                    detail=exc.message or str(exc),
                    confirmed_steps=tuple(confirmed_step.value for confirmed_step, _ in confirmed),
                    confirmed_tx_hashes=tuple(receipt.hash_hex for _, receipt in confirmed),
                )
                logger.error(f"Workflow failed at step '{failure.failed_step}': {failure.detail}")
                if failure.is_partial:
                    logger.warning(
                        f"Steps confirmed before the failure: {', '.join(failure.confirmed_steps)}"
                    )
                return failure

            self._transition(WorkflowState.DONE)
            logger.info("Workflow complete")
            return WorkflowSuccess(
                approve_swap_tx_hash=approve_swap_receipt.hash_hex,
                swap_tx_hash=swap_receipt.hash_hex,
                approve_stake_tx_hash=approve_stake_receipt.hash_hex,
                stake_tx_hash=stake_receipt.hash_hex,
            )

    def _prepare(
        self,
        swap_amount: HumanAmount,
        stake_amount: HumanAmount,
        pool_id: StakingPoolId,
    ) -> _PreparedRun:
        """
        Convert the amounts and resolve the pool. Nothing is submitted.
        """

        config = self.config

        for token in (config.token_in, config.token_out, config.staked_token):
            if token.chain_id != self.client.chain_id:
                raise SwapStakeValueError(
                    message=f"Token {token} is configured for chain ID {token.chain_id}, "
                    f"but the client is connected to chain ID {self.client.chain_id}."
                )

        native_swap_amount = config.token_in.to_native_units(swap_amount)
        native_stake_amount = config.staked_token.to_native_units(stake_amount)
        check_pool_id(pool_id)

        pool = resolve_pool(
            client=self.client,
            factory=config.factory,
            token_a=config.token_in.address,
            token_b=config.token_out.address,
            fee=config.fee_tier,
        )
        swap_params = ExactInputSingleParams.from_pool(
            pool=pool,
            token_in=config.token_in.address,
            token_out=config.token_out.address,
            recipient=self.address,
            amount_in=native_swap_amount,
        )
        if not pool.zero_for_one(swap_params.token_in):
            logger.debug(
                f"{config.token_in} is token1 in pool {pool.address}, swapping one for zero"
            )

        logger.info(
            f"Swapping {config.token_in.format_amount(native_swap_amount)} for "
            f"{config.token_out} and staking "
            f"{config.staked_token.format_amount(native_stake_amount)} in pool {pool_id}"
        )

        return _PreparedRun(
            swap_amount=native_swap_amount,
            stake_amount=native_stake_amount,
            pool_id=pool_id,
            swap_params=swap_params,
        )
